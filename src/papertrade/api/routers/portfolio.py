"""Portfolio endpoints: holdings, value history and trade history."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from papertrade.api.deps import get_app_settings, get_current_user, get_portfolio_service
from papertrade.api.schemas.portfolio import (
    PortfolioResponse,
    HistoryPointResponse,
    HistoryResponse,
    TransactionResponse,
    TransactionListResponse,
)
from papertrade.config.settings import Settings
from papertrade.core.timezone import parse_timestamp
from papertrade.services import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioResponse)
def get_portfolio(
    quotes: bool = Query(False, description="Value positions at market through the quote cache"),
    user_id: str = Depends(get_current_user),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """
    Return cash and open positions.

    - quotes: when true, positions carry last_price, market_value and
      unrealized_pnl; is_partial is set if any price was stale or missing.
    """
    return PortfolioResponse.from_view(service.get_portfolio(user_id, include_quotes=quotes))


@router.get("/history", response_model=HistoryResponse)
def get_history(
    limit: Optional[int] = Query(None, ge=1, description="Most recent N points"),
    user_id: str = Depends(get_current_user),
    service: PortfolioService = Depends(get_portfolio_service),
) -> HistoryResponse:
    """Portfolio value series for charting, oldest first."""
    points = service.get_history(user_id, limit=limit)
    return HistoryResponse(points=[HistoryPointResponse.from_point(p) for p in points])


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    since: Optional[str] = Query(None, description="Only trades at or after this time (US/Eastern if naive)"),
    user_id: str = Depends(get_current_user),
    service: PortfolioService = Depends(get_portfolio_service),
    settings: Settings = Depends(get_app_settings),
) -> TransactionListResponse:
    """Executed trades, newest first."""
    since_dt = parse_timestamp(since) if since else None
    txns = service.list_transactions(
        user_id,
        limit=limit or settings.transaction_history_limit,
        since=since_dt,
    )
    return TransactionListResponse(
        transactions=[TransactionResponse.from_model(t) for t in txns],
        count=len(txns),
    )
