"""Quote cache: TTL-memoized prices with stale fallback under provider degradation."""

import logging
import time
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

from papertrade.core.exceptions import (
    InvalidSymbolError,
    QuoteProviderError,
    QuoteUnavailableError,
    RateLimitedError,
)
from papertrade.core.timezone import now_eastern
from papertrade.core.util import normalize_symbol
from papertrade.domain.models import QuoteCacheEntry
from papertrade.domain.views import BatchQuoteResult, PriceQuote
from papertrade.providers.market_data_provider import QuoteProvider
from papertrade.repositories.protocols import QuoteCacheRepository

logger = logging.getLogger(__name__)


class QuoteCache:
    """
    Price lookups memoized per symbol with a short TTL.

    The upstream provider has a small per-minute call budget. When it is
    rate limited or unreachable, the last cached price is served (flagged
    stale) rather than failing the request; with no cached price the lookup
    fails with QuoteUnavailableError. A price is never invented.
    """

    def __init__(
        self,
        provider: QuoteProvider,
        cache_repo: QuoteCacheRepository,
        ttl_seconds: int = 300,
        min_interval_seconds: float = 12.0,
        batch_max_fetches: int = 5,
        batch_time_budget_seconds: float = 30.0,
        fetch_timeout_seconds: float = 0.0,
        clock: Callable[[], datetime] = now_eastern,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._provider = provider
        self._cache_repo = cache_repo
        self._ttl = timedelta(seconds=ttl_seconds)
        self._min_interval = min_interval_seconds
        self._batch_max_fetches = batch_max_fetches
        self._batch_budget = timedelta(seconds=batch_time_budget_seconds)
        self._fetch_timeout = fetch_timeout_seconds
        self._clock = clock
        self._sleep = sleep

    def get_price(self, symbol: str) -> PriceQuote:
        """Return the price of a symbol from cache or provider."""
        symbol = normalize_symbol(symbol)
        cached = self._cache_repo.get(symbol)
        if cached is not None and self._is_fresh(cached):
            return PriceQuote(symbol=symbol, price=cached.price, fetched_at=cached.fetched_at)

        try:
            return self._fetch_and_store(symbol)
        except RateLimitedError:
            return self._stale_or_fail(symbol, cached, "rate limited")
        except QuoteProviderError as exc:
            return self._stale_or_fail(symbol, cached, str(exc))

    def get_prices(self, symbols: Iterable[str]) -> BatchQuoteResult:
        """
        Price many symbols within the provider's call budget.

        Fresh cache hits cost nothing. Misses are fetched one at a time, at
        most batch_max_fetches calls spaced min_interval_seconds apart and
        within batch_time_budget_seconds overall; a rate-limit signal ends the
        loop. A call only starts if its wait plus fetch_timeout_seconds still
        fits the budget. Symbols left unfetched get their stale price if one
        is cached and are reported missing otherwise.
        """
        result = BatchQuoteResult()
        pending: list[tuple[str, Optional[QuoteCacheEntry]]] = []
        seen: set[str] = set()

        for raw in symbols:
            symbol = normalize_symbol(raw)
            if symbol in seen:
                continue
            seen.add(symbol)
            cached = self._cache_repo.get(symbol)
            if cached is not None and self._is_fresh(cached):
                result.prices[symbol] = PriceQuote(
                    symbol=symbol, price=cached.price, fetched_at=cached.fetched_at
                )
            else:
                pending.append((symbol, cached))

        deadline = self._clock() + self._batch_budget
        fetches = 0
        stop_reason: Optional[str] = None

        for symbol, cached in pending:
            if stop_reason is None:
                if fetches >= self._batch_max_fetches:
                    stop_reason = "call budget"
                elif self._clock() + self._reserve(fetches) > deadline:
                    stop_reason = "time budget"
            if stop_reason is not None:
                self._add_fallback(result, symbol, cached)
                continue

            if fetches:
                self._sleep(self._min_interval)
            fetches += 1
            try:
                quote = self._fetch_and_store(symbol)
            except RateLimitedError:
                stop_reason = "rate limited"
                logger.warning("Provider rate limited during batch at %s; stopping early", symbol)
                self._add_fallback(result, symbol, cached)
                continue
            except QuoteProviderError as exc:
                logger.warning("Batch fetch failed for %s: %s", symbol, exc)
                self._add_fallback(result, symbol, cached)
                continue
            except InvalidSymbolError:
                result.missing_symbols.append(symbol)
                continue
            result.prices[symbol] = quote

        if result.is_partial:
            logger.info(
                "Partial batch quote: %d priced, stale=%s, missing=%s (stopped: %s)",
                len(result.prices),
                result.stale_symbols,
                result.missing_symbols,
                stop_reason or "provider errors",
            )
        return result

    def _fetch_and_store(self, symbol: str) -> PriceQuote:
        quote = self._provider.fetch_quote(symbol)
        if quote.price is None or quote.price <= 0:
            raise QuoteProviderError(f"Provider returned non-positive price for {symbol}")
        entry = QuoteCacheEntry(symbol=symbol, price=quote.price, fetched_at=self._clock())
        self._cache_repo.put(entry)
        return PriceQuote(symbol=symbol, price=entry.price, fetched_at=entry.fetched_at)

    def _stale_or_fail(
        self,
        symbol: str,
        cached: Optional[QuoteCacheEntry],
        reason: str,
    ) -> PriceQuote:
        if cached is None:
            logger.warning("No price for %s and nothing cached (%s)", symbol, reason)
            raise QuoteUnavailableError(symbol, reason)
        age = self._clock() - cached.fetched_at
        logger.warning(
            "Serving stale price for %s (%s old) because provider is degraded: %s",
            symbol,
            age,
            reason,
        )
        return PriceQuote(
            symbol=symbol, price=cached.price, fetched_at=cached.fetched_at, is_stale=True
        )

    @staticmethod
    def _add_fallback(
        result: BatchQuoteResult,
        symbol: str,
        cached: Optional[QuoteCacheEntry],
    ) -> None:
        if cached is None:
            result.missing_symbols.append(symbol)
            return
        result.prices[symbol] = PriceQuote(
            symbol=symbol, price=cached.price, fetched_at=cached.fetched_at, is_stale=True
        )
        result.stale_symbols.append(symbol)

    def _reserve(self, fetches: int) -> timedelta:
        """Time the next fetch may take, including the wait before it."""
        wait = self._min_interval if fetches else 0.0
        return timedelta(seconds=wait + self._fetch_timeout)

    def _is_fresh(self, entry: QuoteCacheEntry) -> bool:
        return self._clock() - entry.fetched_at < self._ttl
