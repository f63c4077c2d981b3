"""Repository layer - data access abstractions and implementations."""

from papertrade.repositories.protocols import (
    AccountRepository,
    PositionRepository,
    TransactionRepository,
    SnapshotRepository,
    QuoteCacheRepository,
    WatchlistRepository,
)
from papertrade.repositories.memory import InMemoryQuoteCacheRepository

__all__ = [
    "AccountRepository",
    "PositionRepository",
    "TransactionRepository",
    "SnapshotRepository",
    "QuoteCacheRepository",
    "WatchlistRepository",
    "InMemoryQuoteCacheRepository",
]
