"""Watchlist domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WatchlistItem:
    """Symbol a user follows without holding it."""

    user_id: str
    symbol: str
    added_at: datetime
