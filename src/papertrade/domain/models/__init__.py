"""Domain models package."""

from papertrade.domain.models.enums import TransactionType
from papertrade.domain.models.account import Account
from papertrade.domain.models.position import Position
from papertrade.domain.models.transaction import Transaction
from papertrade.domain.models.snapshot import Snapshot
from papertrade.domain.models.cache import QuoteCacheEntry
from papertrade.domain.models.watchlist import WatchlistItem

__all__ = [
    "TransactionType",
    "Account",
    "Position",
    "Transaction",
    "Snapshot",
    "QuoteCacheEntry",
    "WatchlistItem",
]
