"""Portfolio snapshot domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Snapshot:
    """
    Point-in-time account valuation.

    portfolio_value is cash plus positions at average cost, not market price.
    """

    snapshot_id: str
    user_id: str
    cash_balance: Decimal
    portfolio_value: Decimal
    timestamp: datetime
