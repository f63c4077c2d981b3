"""Quote cache repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import QuoteCacheEntry


class QuoteCacheRepository(Protocol):
    """Interface for the market-wide quote cache store."""

    def get(self, symbol: str) -> Optional[QuoteCacheEntry]:
        """Get the cached entry for a symbol, fresh or not."""
        ...

    def put(self, entry: QuoteCacheEntry) -> None:
        """Insert or overwrite the entry for entry.symbol."""
        ...
