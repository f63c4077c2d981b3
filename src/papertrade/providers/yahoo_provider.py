"""
Yahoo Finance quote provider via yfinance.

yfinance has no request timeout of its own, so each lookup runs in a worker
thread that is abandoned after the configured timeout.
"""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from decimal import Decimal
from typing import Optional

from papertrade.core.exceptions import InvalidSymbolError, QuoteProviderError, RateLimitedError
from papertrade.core.timezone import now_eastern
from papertrade.domain.views import QuoteData

DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _to_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(float(value)))
    except (TypeError, ValueError):
        return None


def _fetch_info(symbol: str) -> dict:
    yf = _get_yf()
    info = yf.Ticker(symbol).info
    return info if isinstance(info, dict) else {}


def _is_rate_limit(exc: Exception) -> bool:
    return type(exc).__name__ == "YFRateLimitError" or "Too Many Requests" in str(exc)


class YahooQuoteProvider:
    """Fetches quotes from Yahoo Finance."""

    def __init__(self, fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS):
        self._fetch_timeout = fetch_timeout_seconds
        self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="yfinance")

    def fetch_quote(self, symbol: str) -> QuoteData:
        future = self._executor.submit(_fetch_info, symbol)
        try:
            info = future.result(timeout=self._fetch_timeout)
        except FuturesTimeoutError as exc:
            future.cancel()
            raise QuoteProviderError(f"Timed out fetching {symbol}") from exc
        except Exception as exc:
            if _is_rate_limit(exc):
                raise RateLimitedError(str(exc)) from exc
            raise QuoteProviderError(f"yfinance failed for {symbol}: {exc}") from exc

        # Price: currentPrice preferred, then regularMarketPrice
        price = _to_decimal(info.get("currentPrice"))
        if price is None:
            price = _to_decimal(info.get("regularMarketPrice"))
        if price is None or price <= 0:
            raise InvalidSymbolError(symbol)

        return QuoteData(
            symbol=symbol,
            price=price,
            day_high=_to_decimal(info.get("dayHigh") or info.get("regularMarketDayHigh")),
            day_low=_to_decimal(info.get("dayLow") or info.get("regularMarketDayLow")),
            change_percent=_to_decimal(info.get("regularMarketChangePercent")),
            as_of=now_eastern(),
        )
