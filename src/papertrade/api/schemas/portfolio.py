"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from papertrade.api.schemas._money import money, optional_money
from papertrade.domain.models import Transaction, TransactionType
from papertrade.domain.views import HistoryPoint, PortfolioView, PositionView


class PositionResponse(BaseModel):
    """A single holding; price fields are null when quotes were not requested or unavailable."""

    symbol: str
    shares: int
    avg_price: float
    total_cost: float
    last_price: Optional[float] = None
    market_value: Optional[float] = None
    unrealized_pnl: Optional[float] = None
    is_stale_price: bool = False

    @classmethod
    def from_view(cls, view: PositionView) -> "PositionResponse":
        return cls(
            symbol=view.symbol,
            shares=view.shares,
            avg_price=money(view.avg_price),
            total_cost=money(view.total_cost),
            last_price=optional_money(view.last_price),
            market_value=optional_money(view.market_value),
            unrealized_pnl=optional_money(view.unrealized_pnl),
            is_stale_price=view.is_stale_price,
        )


class PortfolioResponse(BaseModel):
    """Response schema for GET /portfolio."""

    cash_balance: float
    total_invested: float
    cost_basis_value: float
    market_value: Optional[float] = None
    is_partial: bool = False
    as_of: Optional[datetime] = None
    positions: list[PositionResponse]

    @classmethod
    def from_view(cls, view: PortfolioView) -> "PortfolioResponse":
        return cls(
            cash_balance=money(view.cash_balance),
            total_invested=money(view.total_invested),
            cost_basis_value=money(view.cost_basis_value),
            market_value=optional_money(view.market_value),
            is_partial=view.is_partial,
            as_of=view.as_of,
            positions=[PositionResponse.from_view(p) for p in view.positions],
        )


class HistoryPointResponse(BaseModel):
    """One chart point."""

    timestamp: datetime
    portfolio_value: float
    cash_balance: float
    synthetic: bool = False

    @classmethod
    def from_point(cls, point: HistoryPoint) -> "HistoryPointResponse":
        return cls(
            timestamp=point.timestamp,
            portfolio_value=money(point.portfolio_value),
            cash_balance=money(point.cash_balance),
            synthetic=point.synthetic,
        )


class HistoryResponse(BaseModel):
    """Response schema for GET /portfolio/history, oldest point first."""

    points: list[HistoryPointResponse]


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    txn_id: str
    txn_type: TransactionType
    symbol: str
    shares: int
    price: float
    total_amount: float
    timestamp: datetime

    @classmethod
    def from_model(cls, txn: Transaction) -> "TransactionResponse":
        return cls(
            txn_id=txn.txn_id,
            txn_type=txn.txn_type,
            symbol=txn.symbol,
            shares=txn.shares,
            price=money(txn.price),
            total_amount=money(txn.total_amount),
            timestamp=txn.timestamp,
        )


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions, newest first."""

    transactions: list[TransactionResponse]
    count: int
