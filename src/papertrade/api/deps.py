"""Dependency injection for FastAPI."""

from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from papertrade.auth import IdentityVerifier, StaticTokenVerifier
from papertrade.config.settings import Settings, get_settings
from papertrade.core.exceptions import UnauthorizedError
from papertrade.providers import (
    QuoteProvider,
    build_crypto_provider,
    build_quote_provider,
)
from papertrade.repositories import InMemoryQuoteCacheRepository, QuoteCacheRepository
from papertrade.repositories.sqlalchemy import (
    get_db,
    SqlAlchemyAccountRepository,
    SqlAlchemyPositionRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemySnapshotRepository,
    SqlAlchemyQuoteCacheRepository,
    SqlAlchemyWatchlistRepository,
)
from papertrade.services import (
    AccountStore,
    CryptoPriceService,
    PortfolioService,
    PositionLedger,
    QuoteCache,
    SnapshotRecorder,
    TradeService,
    TransactionLog,
    WatchlistService,
)

_bearer = HTTPBearer(auto_error=False)


# Process-wide collaborators: quote prices are market-wide, not per user

@lru_cache(maxsize=1)
def _memory_quote_cache_repo() -> InMemoryQuoteCacheRepository:
    return InMemoryQuoteCacheRepository()


@lru_cache(maxsize=1)
def _quote_provider() -> QuoteProvider:
    return build_quote_provider(get_settings())


@lru_cache(maxsize=1)
def _crypto_price_service() -> CryptoPriceService:
    settings = get_settings()
    return CryptoPriceService(
        provider=build_crypto_provider(settings),
        ttl_seconds=settings.quote_cache_ttl_seconds,
    )


def reset_dependency_caches() -> None:
    """Drop process-wide providers and caches (after settings change)."""
    _memory_quote_cache_repo.cache_clear()
    _quote_provider.cache_clear()
    _crypto_price_service.cache_clear()


def get_app_settings() -> Settings:
    """Provide current Settings."""
    return get_settings()


# Authentication

def get_identity_verifier(settings: Settings = Depends(get_app_settings)) -> IdentityVerifier:
    """Provide the IdentityVerifier."""
    return StaticTokenVerifier(settings.api_tokens)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> str:
    """Resolve the bearer credential to a user id; runs before any ledger access."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return verifier.verify(credentials.credentials)


# Repositories

def get_account_repo(db: Session = Depends(get_db)) -> SqlAlchemyAccountRepository:
    """Provide AccountRepository instance."""
    return SqlAlchemyAccountRepository(db)


def get_position_repo(db: Session = Depends(get_db)) -> SqlAlchemyPositionRepository:
    """Provide PositionRepository instance."""
    return SqlAlchemyPositionRepository(db)


def get_transaction_repo(db: Session = Depends(get_db)) -> SqlAlchemyTransactionRepository:
    """Provide TransactionRepository instance."""
    return SqlAlchemyTransactionRepository(db)


def get_snapshot_repo(db: Session = Depends(get_db)) -> SqlAlchemySnapshotRepository:
    """Provide SnapshotRepository instance."""
    return SqlAlchemySnapshotRepository(db)


def get_watchlist_repo(db: Session = Depends(get_db)) -> SqlAlchemyWatchlistRepository:
    """Provide WatchlistRepository instance."""
    return SqlAlchemyWatchlistRepository(db)


def get_quote_cache_repo(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> QuoteCacheRepository:
    """Provide the shared quote cache store."""
    if settings.quote_cache_backend == "database":
        return SqlAlchemyQuoteCacheRepository(db)
    return _memory_quote_cache_repo()


def get_quote_provider() -> QuoteProvider:
    """Provide the equities QuoteProvider."""
    return _quote_provider()


# Services

def get_quote_cache(
    provider: QuoteProvider = Depends(get_quote_provider),
    cache_repo: QuoteCacheRepository = Depends(get_quote_cache_repo),
    settings: Settings = Depends(get_app_settings),
) -> QuoteCache:
    """Provide QuoteCache instance."""
    return QuoteCache(
        provider=provider,
        cache_repo=cache_repo,
        ttl_seconds=settings.quote_cache_ttl_seconds,
        min_interval_seconds=settings.provider_min_interval_seconds,
        batch_max_fetches=settings.batch_max_fetches,
        batch_time_budget_seconds=settings.batch_time_budget_seconds,
        fetch_timeout_seconds=settings.quote_fetch_timeout_seconds,
    )


def get_crypto_service() -> CryptoPriceService:
    """Provide CryptoPriceService instance."""
    return _crypto_price_service()


def get_snapshot_recorder(
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
    position_repo: SqlAlchemyPositionRepository = Depends(get_position_repo),
    snapshot_repo: SqlAlchemySnapshotRepository = Depends(get_snapshot_repo),
) -> SnapshotRecorder:
    """Provide SnapshotRecorder instance."""
    return SnapshotRecorder(
        account_repo=account_repo,
        position_repo=position_repo,
        snapshot_repo=snapshot_repo,
    )


def get_account_store(
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
    snapshot_recorder: SnapshotRecorder = Depends(get_snapshot_recorder),
    settings: Settings = Depends(get_app_settings),
) -> AccountStore:
    """Provide AccountStore instance."""
    return AccountStore(
        account_repo=account_repo,
        snapshot_recorder=snapshot_recorder,
        starting_cash=settings.starting_cash,
    )


def get_position_ledger(
    position_repo: SqlAlchemyPositionRepository = Depends(get_position_repo),
    settings: Settings = Depends(get_app_settings),
) -> PositionLedger:
    """Provide PositionLedger instance."""
    return PositionLedger(
        position_repo=position_repo,
        max_retries=settings.position_update_retries,
    )


def get_transaction_log(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
) -> TransactionLog:
    """Provide TransactionLog instance."""
    return TransactionLog(transaction_repo=transaction_repo)


def get_trade_service(
    account_store: AccountStore = Depends(get_account_store),
    position_ledger: PositionLedger = Depends(get_position_ledger),
    quote_cache: QuoteCache = Depends(get_quote_cache),
    transaction_log: TransactionLog = Depends(get_transaction_log),
    snapshot_recorder: SnapshotRecorder = Depends(get_snapshot_recorder),
) -> TradeService:
    """Provide TradeService instance."""
    return TradeService(
        account_store=account_store,
        position_ledger=position_ledger,
        quote_cache=quote_cache,
        transaction_log=transaction_log,
        snapshot_recorder=snapshot_recorder,
    )


def get_portfolio_service(
    account_store: AccountStore = Depends(get_account_store),
    position_ledger: PositionLedger = Depends(get_position_ledger),
    snapshot_recorder: SnapshotRecorder = Depends(get_snapshot_recorder),
    transaction_log: TransactionLog = Depends(get_transaction_log),
    quote_cache: QuoteCache = Depends(get_quote_cache),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(
        account_store=account_store,
        position_ledger=position_ledger,
        snapshot_recorder=snapshot_recorder,
        transaction_log=transaction_log,
        quote_cache=quote_cache,
    )


def get_watchlist_service(
    watchlist_repo: SqlAlchemyWatchlistRepository = Depends(get_watchlist_repo),
    quote_cache: QuoteCache = Depends(get_quote_cache),
) -> WatchlistService:
    """Provide WatchlistService instance."""
    return WatchlistService(watchlist_repo=watchlist_repo, quote_cache=quote_cache)
