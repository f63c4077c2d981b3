"""Domain layer - pure business models with no external dependencies."""

from papertrade.domain.models import (
    Account,
    Position,
    Transaction,
    Snapshot,
    QuoteCacheEntry,
    WatchlistItem,
    TransactionType,
)

__all__ = [
    "Account",
    "Position",
    "Transaction",
    "Snapshot",
    "QuoteCacheEntry",
    "WatchlistItem",
    "TransactionType",
]
