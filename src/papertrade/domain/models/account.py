"""Account domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Account:
    """
    Virtual cash account, one per user.

    cash_balance never goes negative after a committed trade; total_invested
    tracks the cost basis currently deployed in positions.
    """

    user_id: str
    cash_balance: Decimal
    total_invested: Decimal = field(default_factory=lambda: Decimal("0"))
    created_at: Optional[datetime] = field(default=None)
