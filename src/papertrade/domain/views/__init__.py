"""View models for service outputs."""

from papertrade.domain.views.quotes import (
    QuoteData,
    PriceQuote,
    BatchQuoteResult,
    CryptoQuote,
)
from papertrade.domain.views.portfolio import (
    SellOutcome,
    BuyResult,
    SellResult,
    HistoryPoint,
    PositionView,
    PortfolioView,
)

__all__ = [
    "QuoteData",
    "PriceQuote",
    "BatchQuoteResult",
    "CryptoQuote",
    "SellOutcome",
    "BuyResult",
    "SellResult",
    "HistoryPoint",
    "PositionView",
    "PortfolioView",
]
