"""Position domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Position:
    """
    Holding of a single symbol with weighted-average cost basis.

    Invariant: total_cost == avg_price * shares (within rounding), shares > 0.
    version is bumped on every write and used for compare-and-swap updates.
    """

    user_id: str
    symbol: str
    shares: int
    avg_price: Decimal
    total_cost: Decimal
    first_purchased: Optional[datetime] = field(default=None)
    last_updated: Optional[datetime] = field(default=None)
    version: int = 0
