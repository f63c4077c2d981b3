"""Stub market data providers for offline/testing use."""

import random
import re
from decimal import Decimal

from papertrade.core.exceptions import InvalidSymbolError
from papertrade.core.timezone import now_eastern
from papertrade.domain.views import QuoteData, CryptoQuote


# Deterministic fake prices for common symbols
_STUB_PRICES: dict[str, Decimal] = {
    "AAPL": Decimal("185.50"),
    "GOOGL": Decimal("142.75"),
    "MSFT": Decimal("378.25"),
    "AMZN": Decimal("178.50"),
    "TSLA": Decimal("248.75"),
    "NVDA": Decimal("485.25"),
    "META": Decimal("505.50"),
    "SPY": Decimal("485.25"),
    "QQQ": Decimal("418.75"),
    "VTI": Decimal("252.30"),
}

_STUB_CRYPTO: dict[str, Decimal] = {
    "bitcoin": Decimal("64250.00"),
    "ethereum": Decimal("3120.40"),
    "solana": Decimal("145.85"),
    "dogecoin": Decimal("0.1523"),
}

_TICKER_PATTERN = re.compile(r"^[A-Z][A-Z0-9.\-]{0,9}$")


class StubQuoteProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; other well-formed tickers get a
    price seeded from the symbol so repeated lookups agree.
    """

    def __init__(self, seed: int = 42):
        self._seed = seed

    def fetch_quote(self, symbol: str) -> QuoteData:
        upper_symbol = symbol.upper()
        if upper_symbol in _STUB_PRICES:
            price = _STUB_PRICES[upper_symbol]
        elif _TICKER_PATTERN.match(upper_symbol):
            rng = random.Random(f"{self._seed}:{upper_symbol}")
            price = Decimal(str(50 + rng.random() * 200)).quantize(Decimal("0.01"))
        else:
            raise InvalidSymbolError(upper_symbol)

        return QuoteData(
            symbol=upper_symbol,
            price=price,
            day_high=(price * Decimal("1.01")).quantize(Decimal("0.01")),
            day_low=(price * Decimal("0.99")).quantize(Decimal("0.01")),
            change_percent=Decimal("0.00"),
            as_of=now_eastern(),
        )


class StubCryptoProvider:
    """Stub crypto provider with fixed prices for a handful of coins."""

    def fetch_prices(self, coin_ids: list[str]) -> dict[str, CryptoQuote]:
        as_of = now_eastern()
        return {
            coin_id: CryptoQuote(
                coin_id=coin_id,
                price_usd=_STUB_CRYPTO[coin_id],
                change_24h_percent=Decimal("0.00"),
                fetched_at=as_of,
            )
            for coin_id in coin_ids
            if coin_id in _STUB_CRYPTO
        }
