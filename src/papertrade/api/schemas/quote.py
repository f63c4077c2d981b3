"""Pydantic schemas for quote endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from papertrade.api.schemas._money import money
from papertrade.domain.views import PriceQuote, CryptoQuote


class PriceResponse(BaseModel):
    """Response schema for a single equity price."""

    symbol: str
    price: float
    fetched_at: datetime
    is_stale: bool = False

    @classmethod
    def from_quote(cls, quote: PriceQuote) -> "PriceResponse":
        return cls(
            symbol=quote.symbol,
            price=money(quote.price),
            fetched_at=quote.fetched_at,
            is_stale=quote.is_stale,
        )


class BatchPriceResponse(BaseModel):
    """Response schema for a multi-symbol lookup; partial when anything is stale or missing."""

    prices: list[PriceResponse]
    stale_symbols: list[str]
    missing_symbols: list[str]
    is_partial: bool


class CryptoPriceResponse(BaseModel):
    """Response schema for one coin price."""

    coin_id: str
    price_usd: float
    change_24h_percent: Optional[float] = None
    fetched_at: datetime
    is_stale: bool = False

    @classmethod
    def from_quote(cls, quote: CryptoQuote) -> "CryptoPriceResponse":
        # Sub-cent coins keep full precision
        return cls(
            coin_id=quote.coin_id,
            price_usd=float(quote.price_usd),
            change_24h_percent=(
                float(quote.change_24h_percent)
                if quote.change_24h_percent is not None
                else None
            ),
            fetched_at=quote.fetched_at,
            is_stale=quote.is_stale,
        )


class CryptoPricesResponse(BaseModel):
    """Response schema for crypto price lookup."""

    prices: list[CryptoPriceResponse]
    missing_ids: list[str]
