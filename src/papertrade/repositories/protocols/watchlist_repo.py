"""Watchlist repository protocol."""

from typing import Protocol

from papertrade.domain.models import WatchlistItem


class WatchlistRepository(Protocol):
    """Interface for per-user watchlists."""

    def add(self, item: WatchlistItem) -> bool:
        """Add a symbol; False if it was already present."""
        ...

    def remove(self, user_id: str, symbol: str) -> bool:
        """Remove a symbol; False if it was not present."""
        ...

    def list_by_user(self, user_id: str) -> list[WatchlistItem]:
        """List a user's watchlist in insertion order."""
        ...
