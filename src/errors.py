"""Fatal errors raised while ingesting a transaction stream.

Every error aborts the whole run. Each carries the kind of failure and the
1-based line number of the offending record.
"""

from enum import Enum


class ErrorKind(Enum):
    INVALID_OPERATION = "invalid_operation"
    INVALID_CLIENT = "invalid_client"
    INVALID_TX = "invalid_tx"
    INVALID_AMOUNT = "invalid_amount"
    CONFLICT_TRANSACTION = "conflict_transaction"
    DIVERGENT_CLIENT_ID = "divergent_client_id"


class LedgerError(Exception):
    """Base exception for all ledger errors."""

    kind: ErrorKind
    description = "Ledger error"

    def __init__(self, line: int):
        super().__init__(f"{self.description} at line: {line}")
        self.line = line

    def __eq__(self, other) -> bool:
        if not isinstance(other, LedgerError):
            return NotImplemented
        return (self.kind, self.line) == (other.kind, other.line)

    def __hash__(self) -> int:
        return hash((self.kind, self.line))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(line={self.line})"


class InvalidRecordError(LedgerError):
    """Raised when a required field of a record is missing or unparseable."""


class InvalidOperationError(InvalidRecordError):
    kind = ErrorKind.INVALID_OPERATION
    description = "Invalid Operation"


class InvalidClientError(InvalidRecordError):
    kind = ErrorKind.INVALID_CLIENT
    description = "Invalid Client"


class InvalidTxError(InvalidRecordError):
    kind = ErrorKind.INVALID_TX
    description = "Invalid Tx"


class InvalidAmountError(InvalidRecordError):
    kind = ErrorKind.INVALID_AMOUNT
    description = "Invalid Amount"


class ConflictTransactionError(LedgerError):
    """Raised when a deposit or withdrawal reuses a logged transaction id."""

    kind = ErrorKind.CONFLICT_TRANSACTION
    description = "Conflicting Transaction"


class DivergentClientIdError(LedgerError):
    """Raised when a dispute references a transaction owned by another client."""

    kind = ErrorKind.DIVERGENT_CLIENT_ID
    description = "Divergent Transaction and Client ID"
