"""Market data providers module."""

from papertrade.config.settings import Settings
from papertrade.providers.market_data_provider import QuoteProvider, CryptoPriceProvider
from papertrade.providers.stub_provider import StubQuoteProvider, StubCryptoProvider
from papertrade.providers.alpha_vantage import AlphaVantageQuoteProvider
from papertrade.providers.yahoo_provider import YahooQuoteProvider
from papertrade.providers.coingecko import CoinGeckoCryptoProvider


def build_quote_provider(settings: Settings) -> QuoteProvider:
    """Create the equities provider selected in settings."""
    if settings.quote_provider == "alphavantage":
        if not settings.alpha_vantage_api_key:
            raise ValueError("quote_provider=alphavantage requires alpha_vantage_api_key")
        return AlphaVantageQuoteProvider(
            api_key=settings.alpha_vantage_api_key,
            base_url=settings.alpha_vantage_base_url,
            timeout_seconds=settings.quote_fetch_timeout_seconds,
        )
    if settings.quote_provider == "yahoo":
        return YahooQuoteProvider(fetch_timeout_seconds=settings.quote_fetch_timeout_seconds)
    return StubQuoteProvider()


def build_crypto_provider(settings: Settings) -> CryptoPriceProvider:
    """Create the crypto provider selected in settings."""
    if settings.crypto_provider == "coingecko":
        return CoinGeckoCryptoProvider(
            base_url=settings.coingecko_base_url,
            timeout_seconds=settings.quote_fetch_timeout_seconds,
        )
    return StubCryptoProvider()


__all__ = [
    "QuoteProvider",
    "CryptoPriceProvider",
    "StubQuoteProvider",
    "StubCryptoProvider",
    "AlphaVantageQuoteProvider",
    "YahooQuoteProvider",
    "CoinGeckoCryptoProvider",
    "build_quote_provider",
    "build_crypto_provider",
]
