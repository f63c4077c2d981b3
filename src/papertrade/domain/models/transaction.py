"""Transaction domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from papertrade.domain.models.enums import TransactionType


@dataclass(frozen=True)
class Transaction:
    """Executed trade (append-only audit record)."""

    txn_id: str
    user_id: str
    txn_type: TransactionType
    symbol: str
    shares: int
    price: Decimal
    total_amount: Decimal
    timestamp: datetime

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str) and not isinstance(self.txn_type, TransactionType):
            object.__setattr__(self, "txn_type", TransactionType(self.txn_type))
