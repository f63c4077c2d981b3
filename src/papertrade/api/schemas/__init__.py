"""Pydantic schemas for API request/response."""

from papertrade.api.schemas.trade import (
    TradeRequest,
    BuyResponse,
    SellResponse,
)
from papertrade.api.schemas.quote import (
    PriceResponse,
    BatchPriceResponse,
    CryptoPriceResponse,
    CryptoPricesResponse,
)
from papertrade.api.schemas.portfolio import (
    PositionResponse,
    PortfolioResponse,
    HistoryPointResponse,
    HistoryResponse,
    TransactionResponse,
    TransactionListResponse,
)
from papertrade.api.schemas.watchlist import (
    WatchlistAddRequest,
    WatchlistItemResponse,
    WatchlistResponse,
)

__all__ = [
    "TradeRequest",
    "BuyResponse",
    "SellResponse",
    "PriceResponse",
    "BatchPriceResponse",
    "CryptoPriceResponse",
    "CryptoPricesResponse",
    "PositionResponse",
    "PortfolioResponse",
    "HistoryPointResponse",
    "HistoryResponse",
    "TransactionResponse",
    "TransactionListResponse",
    "WatchlistAddRequest",
    "WatchlistItemResponse",
    "WatchlistResponse",
]
