"""Crypto spot prices with the same TTL and stale-fallback policy as equities."""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable

from papertrade.core.exceptions import (
    QuoteProviderError,
    QuoteUnavailableError,
    RateLimitedError,
    ValidationError,
)
from papertrade.core.timezone import now_eastern
from papertrade.domain.views import CryptoQuote
from papertrade.providers.market_data_provider import CryptoPriceProvider

logger = logging.getLogger(__name__)


class CryptoPriceService:
    """Caches crypto quotes per coin id; fetches all misses in one provider call."""

    def __init__(
        self,
        provider: CryptoPriceProvider,
        ttl_seconds: int = 300,
        clock: Callable[[], datetime] = now_eastern,
    ):
        self._provider = provider
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._cache: dict[str, CryptoQuote] = {}
        self._lock = threading.Lock()

    def get_prices(self, coin_ids: list[str]) -> dict[str, CryptoQuote]:
        """
        Return quotes for the requested coin ids.

        Unknown ids are omitted. Raises QuoteUnavailableError only when the
        provider fails and nothing at all can be served.
        """
        ids = list(dict.fromkeys(c.strip().lower() for c in coin_ids if c and c.strip()))
        if not ids:
            raise ValidationError("At least one coin id is required")

        now = self._clock()
        result: dict[str, CryptoQuote] = {}
        missing: list[str] = []
        with self._lock:
            for coin_id in ids:
                cached = self._cache.get(coin_id)
                if cached is not None and now - cached.fetched_at < self._ttl:
                    result[coin_id] = cached
                else:
                    missing.append(coin_id)

        if not missing:
            return result

        try:
            fetched = self._provider.fetch_prices(missing)
        except (RateLimitedError, QuoteProviderError) as exc:
            logger.warning("Crypto provider degraded (%s); serving cached prices", exc)
            with self._lock:
                for coin_id in missing:
                    cached = self._cache.get(coin_id)
                    if cached is not None:
                        result[coin_id] = CryptoQuote(
                            coin_id=coin_id,
                            price_usd=cached.price_usd,
                            change_24h_percent=cached.change_24h_percent,
                            fetched_at=cached.fetched_at,
                            is_stale=True,
                        )
            if not result:
                raise QuoteUnavailableError(",".join(missing), str(exc)) from exc
            return result

        fetched_at = self._clock()
        with self._lock:
            for coin_id, quote in fetched.items():
                quote.fetched_at = fetched_at
                self._cache[coin_id] = quote
                result[coin_id] = quote
        return result
