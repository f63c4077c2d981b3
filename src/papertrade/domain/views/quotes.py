"""View models for market data."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class QuoteData:
    """Quote as returned by an equities quote provider."""

    symbol: str
    price: Decimal
    day_high: Optional[Decimal] = None
    day_low: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    as_of: Optional[datetime] = None


@dataclass
class PriceQuote:
    """Price resolved through the quote cache."""

    symbol: str
    price: Decimal
    fetched_at: datetime
    is_stale: bool = False


@dataclass
class BatchQuoteResult:
    """
    Result of a budgeted multi-symbol price lookup.

    is_partial is set whenever a symbol is missing or served from a stale entry.
    """

    prices: dict[str, PriceQuote] = field(default_factory=dict)
    stale_symbols: list[str] = field(default_factory=list)
    missing_symbols: list[str] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return bool(self.stale_symbols or self.missing_symbols)


@dataclass
class CryptoQuote:
    """Spot price of a crypto asset in USD."""

    coin_id: str
    price_usd: Decimal
    change_24h_percent: Optional[Decimal] = None
    fetched_at: Optional[datetime] = None
    is_stale: bool = False
