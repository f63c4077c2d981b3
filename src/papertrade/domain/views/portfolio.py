"""View models for trade and portfolio outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from papertrade.domain.models import Position


@dataclass
class SellOutcome:
    """Ledger effect of a sell: the remaining position (None if closed) and realized P&L."""

    position: Optional[Position]
    proceeds: Decimal
    cost_basis_sold: Decimal
    realized_pnl: Decimal


@dataclass
class BuyResult:
    """Result of an executed buy."""

    symbol: str
    shares: int
    price: Decimal
    total_cost: Decimal
    new_balance: Decimal
    is_stale_price: bool = False


@dataclass
class SellResult:
    """Result of an executed sell."""

    symbol: str
    shares: int
    price: Decimal
    proceeds: Decimal
    profit_loss: Decimal
    new_balance: Decimal
    is_stale_price: bool = False


@dataclass
class HistoryPoint:
    """Single point of the portfolio value chart."""

    timestamp: datetime
    portfolio_value: Decimal
    cash_balance: Decimal
    synthetic: bool = False


@dataclass
class PositionView:
    """Holding with optional market valuation."""

    symbol: str
    shares: int
    avg_price: Decimal
    total_cost: Decimal
    last_price: Optional[Decimal] = None
    market_value: Optional[Decimal] = None
    unrealized_pnl: Optional[Decimal] = None
    is_stale_price: bool = False


@dataclass
class PortfolioView:
    """Cash plus holdings for one user."""

    cash_balance: Decimal
    total_invested: Decimal
    positions: list[PositionView] = field(default_factory=list)
    cost_basis_value: Decimal = field(default_factory=lambda: Decimal("0"))
    market_value: Optional[Decimal] = None
    is_partial: bool = False
    as_of: Optional[datetime] = None
