"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from papertrade import __version__
from papertrade.config.settings import get_settings
from papertrade.config.logging_config import setup_logging
from papertrade.repositories.sqlalchemy.database import init_db
from papertrade.api.routers import (
    trades_router,
    quotes_router,
    portfolio_router,
    watchlist_router,
)
from papertrade.core.exceptions import AppError, QuoteUnavailableError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    init_db()
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Paper-trading ledger with cached market quotes",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(trades_router)
app.include_router(quotes_router)
app.include_router(portfolio_router)
app.include_router(watchlist_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    headers = None
    if isinstance(exc, QuoteUnavailableError):
        headers = {"Retry-After": str(int(get_settings().provider_min_interval_seconds))}
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
        headers=headers,
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
