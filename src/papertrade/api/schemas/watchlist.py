"""Pydantic schemas for watchlist endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from papertrade.domain.models import WatchlistItem


class WatchlistAddRequest(BaseModel):
    """Request schema for adding a symbol to the watchlist."""

    symbol: str = Field(..., max_length=20)


class WatchlistItemResponse(BaseModel):
    """A watched symbol with its price when quotes were requested."""

    symbol: str
    added_at: datetime
    price: Optional[float] = None
    is_stale: bool = False

    @classmethod
    def from_item(cls, item: WatchlistItem) -> "WatchlistItemResponse":
        return cls(symbol=item.symbol, added_at=item.added_at)


class WatchlistResponse(BaseModel):
    """Response schema for GET /watchlist."""

    items: list[WatchlistItemResponse]
    is_partial: bool = False
