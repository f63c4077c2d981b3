"""In-process repository implementations."""

import threading
from typing import Optional

from papertrade.domain.models import QuoteCacheEntry


class InMemoryQuoteCacheRepository:
    """Process-wide quote cache shared by all requests."""

    def __init__(self) -> None:
        self._entries: dict[str, QuoteCacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, symbol: str) -> Optional[QuoteCacheEntry]:
        with self._lock:
            return self._entries.get(symbol)

    def put(self, entry: QuoteCacheEntry) -> None:
        with self._lock:
            self._entries[entry.symbol] = entry

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
