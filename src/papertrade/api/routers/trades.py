"""Trade endpoints: market buy and sell at the cached quote."""

from fastapi import APIRouter, Depends

from papertrade.api.deps import get_current_user, get_trade_service
from papertrade.api.schemas.trade import TradeRequest, BuyResponse, SellResponse
from papertrade.services import TradeService

router = APIRouter(prefix="/trades", tags=["trades"])


@router.post("/buy", response_model=BuyResponse)
def buy(
    data: TradeRequest,
    user_id: str = Depends(get_current_user),
    service: TradeService = Depends(get_trade_service),
) -> BuyResponse:
    """Buy whole shares; the account is opened with starting cash on first use."""
    result = service.buy(user_id, data.symbol, data.quantity)
    return BuyResponse.from_result(result)


@router.post("/sell", response_model=SellResponse)
def sell(
    data: TradeRequest,
    user_id: str = Depends(get_current_user),
    service: TradeService = Depends(get_trade_service),
) -> SellResponse:
    """Sell whole shares of an existing position."""
    result = service.sell(user_id, data.symbol, data.quantity)
    return SellResponse.from_result(result)
