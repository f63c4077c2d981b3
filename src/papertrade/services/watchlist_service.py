"""Per-user watchlist."""

from datetime import datetime
from typing import Callable, Optional

from papertrade.core.exceptions import NotFoundError
from papertrade.core.timezone import now_eastern
from papertrade.core.util import normalize_symbol
from papertrade.domain.models import WatchlistItem
from papertrade.domain.views import BatchQuoteResult
from papertrade.repositories.protocols import WatchlistRepository
from papertrade.services.quote_cache import QuoteCache


class WatchlistService:
    """Symbols a user follows, optionally priced in one budgeted batch."""

    def __init__(
        self,
        watchlist_repo: WatchlistRepository,
        quote_cache: QuoteCache,
        clock: Callable[[], datetime] = now_eastern,
    ):
        self._watchlist_repo = watchlist_repo
        self._quotes = quote_cache
        self._clock = clock

    def add(self, user_id: str, symbol: str) -> WatchlistItem:
        """Add a symbol; adding one already present is a no-op."""
        symbol = normalize_symbol(symbol)
        item = WatchlistItem(user_id=user_id, symbol=symbol, added_at=self._clock())
        if self._watchlist_repo.add(item):
            return item
        for existing in self._watchlist_repo.list_by_user(user_id):
            if existing.symbol == symbol:
                return existing
        return item

    def remove(self, user_id: str, symbol: str) -> None:
        symbol = normalize_symbol(symbol)
        if not self._watchlist_repo.remove(user_id, symbol):
            raise NotFoundError("Watchlist symbol", symbol)

    def list_items(
        self,
        user_id: str,
        include_quotes: bool = False,
    ) -> tuple[list[WatchlistItem], Optional[BatchQuoteResult]]:
        items = self._watchlist_repo.list_by_user(user_id)
        if not include_quotes or not items:
            return items, None
        return items, self._quotes.get_prices(i.symbol for i in items)
