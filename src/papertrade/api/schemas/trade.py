"""Pydantic schemas for trade endpoints."""

from pydantic import BaseModel, Field

from papertrade.api.schemas._money import money
from papertrade.domain.views import BuyResult, SellResult


class TradeRequest(BaseModel):
    """Request schema for a buy or sell order."""

    symbol: str = Field(..., max_length=20, description="Ticker symbol, e.g. AAPL")
    # strict: JSON true or "3" must not coerce to a share count
    quantity: int = Field(..., strict=True, description="Whole number of shares, at least 1")


class BuyResponse(BaseModel):
    """Response schema for an executed buy."""

    symbol: str
    shares: int
    price: float
    total_cost: float
    new_balance: float
    is_stale_price: bool = False

    @classmethod
    def from_result(cls, result: BuyResult) -> "BuyResponse":
        return cls(
            symbol=result.symbol,
            shares=result.shares,
            price=money(result.price),
            total_cost=money(result.total_cost),
            new_balance=money(result.new_balance),
            is_stale_price=result.is_stale_price,
        )


class SellResponse(BaseModel):
    """Response schema for an executed sell."""

    symbol: str
    shares: int
    price: float
    proceeds: float
    profit_loss: float
    new_balance: float
    is_stale_price: bool = False

    @classmethod
    def from_result(cls, result: SellResult) -> "SellResponse":
        return cls(
            symbol=result.symbol,
            shares=result.shares,
            price=money(result.price),
            proceeds=money(result.proceeds),
            profit_loss=money(result.profit_loss),
            new_balance=money(result.new_balance),
            is_stale_price=result.is_stale_price,
        )
