"""API routers package."""

from papertrade.api.routers.trades import router as trades_router
from papertrade.api.routers.quotes import router as quotes_router
from papertrade.api.routers.portfolio import router as portfolio_router
from papertrade.api.routers.watchlist import router as watchlist_router

__all__ = [
    "trades_router",
    "quotes_router",
    "portfolio_router",
    "watchlist_router",
]
