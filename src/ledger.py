from typing import Dict, Optional

from models import ClientAccount, TransactionLogEntry


class AccountLedger:
    """
    Client accounts keyed by client id.
    Accounts are created lazily and never removed.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}

    def get_or_create(self, client_id: int) -> ClientAccount:
        """Get existing account or create a zeroed, unlocked one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def get(self, client_id: int) -> Optional[ClientAccount]:
        return self._accounts.get(client_id)

    def accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)

    def __contains__(self, client_id: int) -> bool:
        return client_id in self._accounts

    def __len__(self) -> int:
        return len(self._accounts)


class TransactionLog:
    """
    Deposits and withdrawals keyed by transaction id, kept for dispute lookups.
    Dispute, resolve and chargeback records only reference existing entries.
    """

    def __init__(self):
        self._entries: Dict[int, TransactionLogEntry] = {}

    def insert_if_absent(self, entry: TransactionLogEntry) -> bool:
        """Store entry unless its transaction id is taken. Returns False on conflict."""
        if entry.transaction_id in self._entries:
            return False
        self._entries[entry.transaction_id] = entry
        return True

    def get(self, transaction_id: int) -> Optional[TransactionLogEntry]:
        """Retrieve the live entry by ID."""
        return self._entries.get(transaction_id)

    def __contains__(self, transaction_id: int) -> bool:
        return transaction_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
