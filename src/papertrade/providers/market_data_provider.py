"""Market data provider protocols."""

from typing import Protocol

from papertrade.domain.views import QuoteData, CryptoQuote


class QuoteProvider(Protocol):
    """
    Protocol for equities quote providers.

    fetch_quote returns a QuoteData with a positive price, or raises:
    - RateLimitedError when the upstream call budget is exhausted
    - InvalidSymbolError when the symbol is unknown
    - QuoteProviderError when the upstream is unreachable or returns garbage
    Implementations must bound each call with a timeout.
    """

    def fetch_quote(self, symbol: str) -> QuoteData:
        ...


class CryptoPriceProvider(Protocol):
    """
    Protocol for crypto spot price providers.

    fetch_prices returns a dict keyed by coin id; unknown ids are omitted.
    Raises RateLimitedError or QuoteProviderError like QuoteProvider.
    """

    def fetch_prices(self, coin_ids: list[str]) -> dict[str, CryptoQuote]:
        ...
