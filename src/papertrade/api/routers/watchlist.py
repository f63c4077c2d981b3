"""Watchlist endpoints."""

from fastapi import APIRouter, Depends, Query, Response

from papertrade.api.deps import get_current_user, get_watchlist_service
from papertrade.api.schemas._money import money
from papertrade.api.schemas.watchlist import (
    WatchlistAddRequest,
    WatchlistItemResponse,
    WatchlistResponse,
)
from papertrade.services import WatchlistService

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get("", response_model=WatchlistResponse)
def list_watchlist(
    quotes: bool = Query(False, description="Include prices via the budgeted batch lookup"),
    user_id: str = Depends(get_current_user),
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistResponse:
    """List watched symbols in the order they were added."""
    items, batch = service.list_items(user_id, include_quotes=quotes)
    out = [WatchlistItemResponse.from_item(i) for i in items]
    if batch is None:
        return WatchlistResponse(items=out)
    for entry in out:
        quote = batch.prices.get(entry.symbol)
        if quote is not None:
            entry.price = money(quote.price)
            entry.is_stale = quote.is_stale
    return WatchlistResponse(items=out, is_partial=batch.is_partial)


@router.post("", response_model=WatchlistItemResponse, status_code=201)
def add_to_watchlist(
    data: WatchlistAddRequest,
    user_id: str = Depends(get_current_user),
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistItemResponse:
    """Add a symbol; re-adding an existing symbol returns the original entry."""
    return WatchlistItemResponse.from_item(service.add(user_id, data.symbol))


@router.delete("/{symbol}", status_code=204)
def remove_from_watchlist(
    symbol: str,
    user_id: str = Depends(get_current_user),
    service: WatchlistService = Depends(get_watchlist_service),
) -> Response:
    """Remove a symbol from the watchlist."""
    service.remove(user_id, symbol)
    return Response(status_code=204)
