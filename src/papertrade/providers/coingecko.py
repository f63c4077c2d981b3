"""CoinGecko public crypto price provider."""

from decimal import Decimal, InvalidOperation
from typing import Optional

import requests

from papertrade.core.exceptions import QuoteProviderError, RateLimitedError
from papertrade.core.timezone import now_eastern
from papertrade.domain.views import CryptoQuote

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"


def _to_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


class CoinGeckoCryptoProvider:
    """Fetches USD spot prices from CoinGecko's /simple/price endpoint."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def fetch_prices(self, coin_ids: list[str]) -> dict[str, CryptoQuote]:
        if not coin_ids:
            return {}
        params = {
            "ids": ",".join(coin_ids),
            "vs_currencies": "usd",
            "include_24hr_change": "true",
        }
        try:
            response = self._session.get(
                f"{self._base_url}/simple/price", params=params, timeout=self._timeout
            )
        except requests.RequestException as exc:
            raise QuoteProviderError(f"CoinGecko request failed: {exc}") from exc

        if response.status_code == 429:
            raise RateLimitedError("CoinGecko rate limit reached")
        try:
            response.raise_for_status()
            payload = response.json()
        except (requests.HTTPError, ValueError) as exc:
            raise QuoteProviderError(f"Bad CoinGecko response: {exc}") from exc

        fetched_at = now_eastern()
        result: dict[str, CryptoQuote] = {}
        for coin_id in coin_ids:
            entry = payload.get(coin_id) if isinstance(payload, dict) else None
            if not entry:
                continue
            price = _to_decimal(entry.get("usd"))
            if price is None or price <= 0:
                continue
            result[coin_id] = CryptoQuote(
                coin_id=coin_id,
                price_usd=price,
                change_24h_percent=_to_decimal(entry.get("usd_24h_change")),
                fetched_at=fetched_at,
            )
        return result
