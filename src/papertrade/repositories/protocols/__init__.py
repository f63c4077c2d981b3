"""Repository protocol definitions (interfaces)."""

from papertrade.repositories.protocols.account_repo import AccountRepository
from papertrade.repositories.protocols.position_repo import PositionRepository
from papertrade.repositories.protocols.transaction_repo import TransactionRepository
from papertrade.repositories.protocols.snapshot_repo import SnapshotRepository
from papertrade.repositories.protocols.cache_repo import QuoteCacheRepository
from papertrade.repositories.protocols.watchlist_repo import WatchlistRepository

__all__ = [
    "AccountRepository",
    "PositionRepository",
    "TransactionRepository",
    "SnapshotRepository",
    "QuoteCacheRepository",
    "WatchlistRepository",
]
