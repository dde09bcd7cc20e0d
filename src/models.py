from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional

AMOUNT_PRECISION = Decimal("0.0001")


def round_amount(amount: Decimal) -> Decimal:
    """Round to 4 decimal places, half away from zero."""
    return amount.quantize(AMOUNT_PRECISION, rounding=ROUND_HALF_UP)


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @classmethod
    def parse(cls, value: str) -> Optional["TransactionType"]:
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @property
    def moves_funds(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class ProcessingResult(Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"


@dataclass
class Transaction:
    """An input record. A field is None when its raw value failed to parse."""

    transaction_type: Optional[TransactionType]
    client_id: Optional[int]
    transaction_id: Optional[int]
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        kind = self.transaction_type.value if self.transaction_type else None
        return f"Transaction({kind}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class TransactionLogEntry:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Decimal
    in_dispute: bool = False


@dataclass
class ClientAccount:
    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    locked: bool = False

    def credit(self, amount: Decimal) -> None:
        self.available = round_amount(self.available + amount)
        self.total = round_amount(self.total + amount)

    def debit(self, amount: Decimal) -> None:
        self.available = round_amount(self.available - amount)
        self.total = round_amount(self.total - amount)

    def hold(self, amount: Decimal) -> None:
        self.available = round_amount(self.available - amount)
        self.held = round_amount(self.held + amount)

    def release_hold(self, amount: Decimal) -> None:
        self.held = round_amount(self.held - amount)
        self.available = round_amount(self.available + amount)

    def remove_held(self, amount: Decimal) -> None:
        self.held = round_amount(self.held - amount)
        self.total = round_amount(self.total - amount)

    def lock(self) -> None:
        self.locked = True
