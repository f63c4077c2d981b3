"""Cache models for externally sourced data."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class QuoteCacheEntry:
    """Last known price for a symbol and when it was fetched."""

    symbol: str
    price: Decimal
    fetched_at: datetime
