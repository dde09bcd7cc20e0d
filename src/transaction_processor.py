import logging
from typing import Optional, Tuple

from errors import (
    ConflictTransactionError,
    DivergentClientIdError,
    InvalidAmountError,
    InvalidClientError,
    InvalidOperationError,
    InvalidTxError,
)
from ledger import AccountLedger, TransactionLog
from models import (
    ClientAccount,
    ProcessingResult,
    Transaction,
    TransactionLogEntry,
    TransactionType,
    round_amount,
)

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions to the account ledger, one record at a time.
    Returns ProcessingResult for applied or skipped records and raises
    LedgerError for anything that must abort the run.
    """

    def __init__(self, ledger: AccountLedger, log: TransactionLog):
        self._ledger = ledger
        self._log = log

    def process_transaction(self, transaction: Transaction, line: int) -> ProcessingResult:
        """
        Validate and apply a single transaction.

        Args:
            transaction: The input record.
            line: 1-based position of the record, used for error reporting.

        Returns:
            APPLIED: The ledger changed
            SKIPPED: Nothing to do (unknown account or tx, insufficient funds, locked account)

        Raises:
            InvalidOperationError, InvalidClientError, InvalidTxError, InvalidAmountError:
                A required field is missing.
            ConflictTransactionError: A deposit or withdrawal reuses a transaction id.
            DivergentClientIdError: A dispute targets another client's transaction.
        """
        if transaction.transaction_type is None:
            raise InvalidOperationError(line)
        if transaction.client_id is None:
            raise InvalidClientError(line)
        if transaction.transaction_id is None:
            raise InvalidTxError(line)
        if transaction.transaction_type.moves_funds and transaction.amount is None:
            raise InvalidAmountError(line)

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                return self._handle_deposit(transaction, line)
            case TransactionType.WITHDRAWAL:
                return self._handle_withdrawal(transaction, line)
            case TransactionType.DISPUTE:
                return self._handle_dispute(transaction, line)
            case TransactionType.RESOLVE:
                return self._handle_resolve(transaction, line)
            case TransactionType.CHARGEBACK:
                return self._handle_chargeback(transaction, line)

        raise InvalidOperationError(line)

    def _log_transaction(self, transaction: Transaction, line: int) -> TransactionLogEntry:
        entry = TransactionLogEntry(
            transaction_type=transaction.transaction_type,
            client_id=transaction.client_id,
            transaction_id=transaction.transaction_id,
            amount=round_amount(transaction.amount),
        )
        if not self._log.insert_if_absent(entry):
            raise ConflictTransactionError(line)
        return entry

    def _find_disputable(
        self, transaction: Transaction, line: int, require_dispute: bool
    ) -> Optional[Tuple[TransactionLogEntry, ClientAccount]]:
        """
        Look up the referenced entry and its account.
        Returns (entry, account), or None when the record should be skipped.
        """
        entry = self._log.get(transaction.transaction_id)

        if entry is None:
            logger.info(f"{transaction.transaction_type.value.capitalize()} for tx {transaction.transaction_id}: transaction not found, skipping")
            return None

        if require_dispute and not entry.in_dispute:
            logger.info(f"{transaction.transaction_type.value.capitalize()} for tx {transaction.transaction_id}: transaction not under dispute, skipping")
            return None

        if entry.client_id != transaction.client_id:
            raise DivergentClientIdError(line)

        account = self._ledger.get(transaction.client_id)
        if account is None:
            logger.info(f"{transaction.transaction_type.value.capitalize()} for tx {transaction.transaction_id}: client {transaction.client_id} has no account, skipping")
            return None

        if account.locked:
            logger.warning(f"{transaction.transaction_type.value.capitalize()} for tx {transaction.transaction_id}: account {account.client_id} is locked")
            return None

        return entry, account

    def _handle_deposit(self, transaction: Transaction, line: int) -> ProcessingResult:
        entry = self._log_transaction(transaction, line)
        account = self._ledger.get_or_create(transaction.client_id)

        if account.locked:
            logger.warning(f"Deposit tx {transaction.transaction_id}: account {account.client_id} is locked")
            return ProcessingResult.SKIPPED

        account.credit(entry.amount)
        return ProcessingResult.APPLIED

    def _handle_withdrawal(self, transaction: Transaction, line: int) -> ProcessingResult:
        entry = self._log_transaction(transaction, line)
        account = self._ledger.get(transaction.client_id)

        if account is None:
            logger.info(f"Withdrawal tx {transaction.transaction_id}: client {transaction.client_id} has no account, skipping")
            return ProcessingResult.SKIPPED

        if account.locked:
            logger.warning(f"Withdrawal tx {transaction.transaction_id}: account {account.client_id} is locked")
            return ProcessingResult.SKIPPED

        if account.available < entry.amount:
            logger.info(f"Withdrawal tx {transaction.transaction_id}: insufficient funds ({account.available} < {entry.amount})")
            return ProcessingResult.SKIPPED

        account.debit(entry.amount)
        return ProcessingResult.APPLIED

    def _handle_dispute(self, transaction: Transaction, line: int) -> ProcessingResult:
        found = self._find_disputable(transaction, line, require_dispute=False)
        if found is None:
            return ProcessingResult.SKIPPED
        entry, account = found

        # No funds check: available goes negative when the amount was already spent.
        entry.in_dispute = True
        account.hold(entry.amount)
        return ProcessingResult.APPLIED

    def _handle_resolve(self, transaction: Transaction, line: int) -> ProcessingResult:
        found = self._find_disputable(transaction, line, require_dispute=True)
        if found is None:
            return ProcessingResult.SKIPPED
        entry, account = found

        entry.in_dispute = False
        account.release_hold(entry.amount)
        return ProcessingResult.APPLIED

    def _handle_chargeback(self, transaction: Transaction, line: int) -> ProcessingResult:
        found = self._find_disputable(transaction, line, require_dispute=True)
        if found is None:
            return ProcessingResult.SKIPPED
        entry, account = found

        entry.in_dispute = False
        account.remove_held(entry.amount)
        account.lock()
        return ProcessingResult.APPLIED
