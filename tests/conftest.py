"""
Pytest configuration and fixtures for paper-trading ledger tests.

This module provides:
- In-memory SQLite database fixtures
- A manual clock for TTL and batch-budget tests
- Deterministic fake quote and crypto providers
- Service and repository fixtures
- A FastAPI test client with bearer tokens
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from papertrade.main import app
from papertrade.api import deps
from papertrade.auth import StaticTokenVerifier
from papertrade.config.settings import Settings, set_settings, reset_settings
from papertrade.core.exceptions import (
    InvalidSymbolError,
    QuoteProviderError,
    RateLimitedError,
)
from papertrade.core.timezone import EASTERN_TZ
from papertrade.domain.views import QuoteData, CryptoQuote
from papertrade.repositories import InMemoryQuoteCacheRepository
from papertrade.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from papertrade.repositories.sqlalchemy import orm_models  # noqa: F401
from papertrade.repositories.sqlalchemy import (
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


# =============================================================================
# TIME HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


class ManualClock:
    """
    Clock that only moves when told to.

    Passing clock.sleep as a service's sleep function makes waiting advance
    time instantly, so batch budgets can be tested without real delays.
    """

    def __init__(self, start: datetime):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 0, minutes: float = 0) -> None:
        self.now = self.now + timedelta(seconds=seconds, minutes=minutes)

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.advance(seconds=seconds)


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return eastern_datetime(2024, 6, 15, 14, 30, 0)


@pytest.fixture
def clock(fixed_now) -> ManualClock:
    """Provide a manual clock starting at fixed_now."""
    return ManualClock(fixed_now)


# =============================================================================
# FAKE PROVIDERS
# =============================================================================


class FakeQuoteProvider:
    """
    Deterministic equities provider with switchable failure modes.

    Symbols not in the price table raise InvalidSymbolError.
    """

    DEFAULT_PRICES = {
        "AAPL": Decimal("150.00"),
        "MSFT": Decimal("300.00"),
        "GOOGL": Decimal("140.00"),
        "TSLA": Decimal("250.00"),
        "NVDA": Decimal("480.00"),
        "SPY": Decimal("480.00"),
        "QQQ": Decimal("410.00"),
    }

    def __init__(self, prices: Optional[dict[str, Decimal]] = None):
        self.prices = dict(prices or self.DEFAULT_PRICES)
        self.calls: list[str] = []
        self.rate_limited = False
        self.unavailable = False
        self.rate_limit_after: Optional[int] = None

    def set_price(self, symbol: str, price: str) -> None:
        self.prices[symbol] = Decimal(price)

    def fetch_quote(self, symbol: str) -> QuoteData:
        self.calls.append(symbol)
        if self.rate_limited or (
            self.rate_limit_after is not None and len(self.calls) > self.rate_limit_after
        ):
            raise RateLimitedError("Too many requests")
        if self.unavailable:
            raise QuoteProviderError("Connection refused")
        if symbol not in self.prices:
            raise InvalidSymbolError(symbol)
        return QuoteData(symbol=symbol, price=self.prices[symbol])


class FakeCryptoProvider:
    """Deterministic crypto provider."""

    def __init__(self, prices: Optional[dict[str, Decimal]] = None):
        self.prices = dict(prices or {
            "bitcoin": Decimal("64000.00"),
            "ethereum": Decimal("3100.00"),
            "dogecoin": Decimal("0.1523"),
        })
        self.calls: list[list[str]] = []
        self.unavailable = False

    def fetch_prices(self, coin_ids: list[str]) -> dict[str, CryptoQuote]:
        self.calls.append(list(coin_ids))
        if self.unavailable:
            raise QuoteProviderError("CoinGecko unreachable")
        return {
            c: CryptoQuote(coin_id=c, price_usd=self.prices[c], change_24h_percent=Decimal("1.5"))
            for c in coin_ids
            if c in self.prices
        }


@pytest.fixture
def quote_provider() -> FakeQuoteProvider:
    """Provide a fake equities provider."""
    return FakeQuoteProvider()


@pytest.fixture
def crypto_provider() -> FakeCryptoProvider:
    """Provide a fake crypto provider."""
    return FakeCryptoProvider()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def position_repo(test_session) -> SqlAlchemyPositionRepository:
    """Provide test PositionRepository."""
    return SqlAlchemyPositionRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def snapshot_repo(test_session) -> SqlAlchemySnapshotRepository:
    """Provide test SnapshotRepository."""
    return SqlAlchemySnapshotRepository(test_session)


@pytest.fixture
def db_cache_repo(test_session) -> SqlAlchemyQuoteCacheRepository:
    """Provide database-backed quote cache repository."""
    return SqlAlchemyQuoteCacheRepository(test_session)


@pytest.fixture
def watchlist_repo(test_session) -> SqlAlchemyWatchlistRepository:
    """Provide test WatchlistRepository."""
    return SqlAlchemyWatchlistRepository(test_session)


@pytest.fixture
def cache_repo() -> InMemoryQuoteCacheRepository:
    """Provide a fresh in-memory quote cache."""
    return InMemoryQuoteCacheRepository()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def quote_cache(quote_provider, cache_repo, clock) -> QuoteCache:
    """Provide QuoteCache on the manual clock (sleeping advances time)."""
    return QuoteCache(
        provider=quote_provider,
        cache_repo=cache_repo,
        ttl_seconds=300,
        min_interval_seconds=12.0,
        batch_max_fetches=5,
        batch_time_budget_seconds=30.0,
        clock=clock,
        sleep=clock.sleep,
    )


@pytest.fixture
def snapshot_recorder(account_repo, position_repo, snapshot_repo, clock) -> SnapshotRecorder:
    """Provide test SnapshotRecorder."""
    return SnapshotRecorder(
        account_repo=account_repo,
        position_repo=position_repo,
        snapshot_repo=snapshot_repo,
        clock=clock,
    )


@pytest.fixture
def account_store(account_repo, snapshot_recorder, clock) -> AccountStore:
    """Provide test AccountStore with $10,000 starting cash."""
    return AccountStore(
        account_repo=account_repo,
        snapshot_recorder=snapshot_recorder,
        starting_cash=Decimal("10000.00"),
        clock=clock,
    )


@pytest.fixture
def position_ledger(position_repo, clock) -> PositionLedger:
    """Provide test PositionLedger."""
    return PositionLedger(position_repo=position_repo, max_retries=3, clock=clock)


@pytest.fixture
def transaction_log(transaction_repo, clock) -> TransactionLog:
    """Provide test TransactionLog."""
    return TransactionLog(transaction_repo=transaction_repo, clock=clock)


@pytest.fixture
def trade_service(
    account_store,
    position_ledger,
    quote_cache,
    transaction_log,
    snapshot_recorder,
) -> TradeService:
    """Provide test TradeService."""
    return TradeService(
        account_store=account_store,
        position_ledger=position_ledger,
        quote_cache=quote_cache,
        transaction_log=transaction_log,
        snapshot_recorder=snapshot_recorder,
    )


@pytest.fixture
def portfolio_service(
    account_store,
    position_ledger,
    snapshot_recorder,
    transaction_log,
    quote_cache,
) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(
        account_store=account_store,
        position_ledger=position_ledger,
        snapshot_recorder=snapshot_recorder,
        transaction_log=transaction_log,
        quote_cache=quote_cache,
    )


@pytest.fixture
def watchlist_service(watchlist_repo, quote_cache, clock) -> WatchlistService:
    """Provide test WatchlistService."""
    return WatchlistService(watchlist_repo=watchlist_repo, quote_cache=quote_cache, clock=clock)


@pytest.fixture
def crypto_service(crypto_provider, clock) -> CryptoPriceService:
    """Provide test CryptoPriceService."""
    return CryptoPriceService(provider=crypto_provider, ttl_seconds=300, clock=clock)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


API_TOKENS = {
    "alice-token": "alice",
    "bob-token": "bob",
}

ALICE = {"Authorization": "Bearer alice-token"}
BOB = {"Authorization": "Bearer bob-token"}


@pytest.fixture
def client(test_engine, quote_cache, crypto_service) -> TestClient:
    """Provide FastAPI test client with test database and fake providers."""
    set_settings(Settings(database_url="sqlite://", api_tokens=API_TOKENS))
    reset_database()
    deps.reset_dependency_caches()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_quote_cache] = lambda: quote_cache
    app.dependency_overrides[deps.get_crypto_service] = lambda: crypto_service
    app.dependency_overrides[deps.get_identity_verifier] = lambda: StaticTokenVerifier(API_TOKENS)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
