import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Iterator, Optional

from ledger import AccountLedger, TransactionLog
from models import ClientAccount, Transaction, TransactionType
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)

TYPE_COLUMN = "type"
CLIENT_COLUMN = "client"
TX_COLUMN = "tx"
AMOUNT_COLUMN = "amount"

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1
# Keeps every balance within the 28-digit decimal context at 4 places
MAX_AMOUNT = Decimal("1e15")


class PaymentsEngine:
    """
    Runs a transaction stream through a fresh ledger, strictly in order.
    The first LedgerError aborts the run and propagates to the caller.
    """

    def ingest(self, transactions: Iterable[Transaction]) -> Dict[int, ClientAccount]:
        """Process transactions in order and return final account states."""
        ledger = AccountLedger()
        log = TransactionLog()
        processor = TransactionProcessor(ledger, log)

        line = 0
        for line, transaction in enumerate(transactions, start=1):
            processor.process_transaction(transaction, line)

        logger.info(f"Processed {line} records for {len(ledger)} clients")
        return ledger.accounts()

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        with open(filepath, "r", newline="") as f:
            return self.ingest(self.read_records(f))

    def process_text(self, text: str) -> Dict[int, ClientAccount]:
        """Process CSV content given as a string. Indentation and blank lines are ignored."""
        lines = [line.strip() for line in text.splitlines()]
        return self.ingest(self.read_records(line for line in lines if line))

    def read_records(self, lines: Iterable[str]) -> Iterator[Transaction]:
        """Lazily parse CSV lines (header first) into Transactions."""
        reader = csv.DictReader(lines)
        if reader.fieldnames is not None:
            reader.fieldnames = [name.strip().lower() for name in reader.fieldnames]
        for row in reader:
            yield self._parse_csv_row(row)

    def _parse_csv_row(self, row: Dict[str, Optional[str]]) -> Transaction:
        """Parse CSV row into Transaction. Unparseable fields become None, never zero."""
        # Short rows leave None values; extra columns land under a None key.
        normalized = {k: (v or "").strip() for k, v in row.items() if k is not None}

        return Transaction(
            transaction_type=TransactionType.parse(normalized.get(TYPE_COLUMN, "")),
            client_id=_parse_id(normalized.get(CLIENT_COLUMN, ""), MAX_CLIENT_ID),
            transaction_id=_parse_id(normalized.get(TX_COLUMN, ""), MAX_TRANSACTION_ID),
            amount=_parse_amount(normalized.get(AMOUNT_COLUMN, "")),
        )


def _parse_id(value: str, upper_bound: int) -> Optional[int]:
    # Plain ASCII digits only; int() would also take "1_0" or non-ASCII digits
    digits = value[1:] if value.startswith("+") else value
    if not (digits.isascii() and digits.isdigit()):
        logger.debug(f"Failed to parse id {value!r}")
        return None
    parsed = int(digits)
    if parsed > upper_bound:
        logger.debug(f"Id {parsed} out of range [0, {upper_bound}]")
        return None
    return parsed


def _parse_amount(value: str) -> Optional[Decimal]:
    if not value:
        return None
    if "_" in value or not value.isascii():
        logger.debug(f"Failed to parse amount {value!r}")
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation:
        logger.debug(f"Failed to parse amount {value!r}")
        return None
    if not amount.is_finite() or amount < 0:
        logger.debug(f"Amount {value!r} is not a finite non-negative decimal")
        return None
    if amount >= MAX_AMOUNT:
        logger.debug(f"Amount {value!r} exceeds {MAX_AMOUNT}")
        return None
    return amount
