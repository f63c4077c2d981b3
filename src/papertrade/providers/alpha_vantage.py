"""Alpha Vantage GLOBAL_QUOTE provider."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

import requests

from papertrade.core.exceptions import InvalidSymbolError, QuoteProviderError, RateLimitedError
from papertrade.core.timezone import now_eastern
from papertrade.domain.views import QuoteData

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _parse_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value).strip().rstrip("%"))
    except (InvalidOperation, ValueError):
        return None


class AlphaVantageQuoteProvider:
    """
    Fetches equities quotes from Alpha Vantage.

    The free tier allows 5 calls per minute; exhausting it returns HTTP 200
    with a "Note" or "Information" message instead of data.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def fetch_quote(self, symbol: str) -> QuoteData:
        params = {"function": "GLOBAL_QUOTE", "symbol": symbol, "apikey": self._api_key}
        try:
            response = self._session.get(self._base_url, params=params, timeout=self._timeout)
        except requests.Timeout as exc:
            raise QuoteProviderError(f"Timed out fetching {symbol}") from exc
        except requests.RequestException as exc:
            raise QuoteProviderError(f"Request for {symbol} failed: {exc}") from exc

        if response.status_code == 429:
            raise RateLimitedError(f"HTTP 429 for {symbol}")
        try:
            response.raise_for_status()
            payload = response.json()
        except (requests.HTTPError, ValueError) as exc:
            raise QuoteProviderError(f"Bad response for {symbol}: {exc}") from exc

        if not isinstance(payload, dict):
            raise QuoteProviderError(f"Unexpected payload for {symbol}")
        if "Note" in payload or "Information" in payload:
            logger.info("Alpha Vantage call budget exhausted while fetching %s", symbol)
            raise RateLimitedError(payload.get("Note") or payload.get("Information"))
        if "Error Message" in payload:
            raise InvalidSymbolError(symbol)

        quote = payload.get("Global Quote") or {}
        if not quote:
            raise InvalidSymbolError(symbol)

        price = _parse_decimal(quote.get("05. price"))
        if price is None or price <= 0:
            raise QuoteProviderError(f"No usable price for {symbol}")

        return QuoteData(
            symbol=symbol,
            price=price,
            day_high=_parse_decimal(quote.get("03. high")),
            day_low=_parse_decimal(quote.get("04. low")),
            change_percent=_parse_decimal(quote.get("10. change percent")),
            as_of=now_eastern(),
        )
