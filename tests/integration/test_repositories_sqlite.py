"""
Integration tests for the SQLAlchemy repositories on SQLite.

Tests cover:
- Account create-if-absent and the guarded atomic increment
- Position insert conflicts and version compare-and-swap
- Transaction and snapshot ordering
- Quote cache upsert
- Watchlist uniqueness
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import timedelta
from decimal import Decimal

from sqlalchemy.orm import sessionmaker

from papertrade.domain.models import (
    Account,
    Position,
    QuoteCacheEntry,
    Snapshot,
    Transaction,
    TransactionType,
    WatchlistItem,
)
from papertrade.repositories.sqlalchemy import (
    Base,
    build_engine,
    SqlAlchemyAccountRepository,
    SqlAlchemyPositionRepository,
    SqlAlchemyQuoteCacheRepository,
    SqlAlchemySnapshotRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyWatchlistRepository,
)

from tests.conftest import eastern_datetime


def _account(user_id: str = "alice", cash: str = "10000.00") -> Account:
    return Account(
        user_id=user_id,
        cash_balance=Decimal(cash),
        total_invested=Decimal("0"),
        created_at=eastern_datetime(2024, 6, 15),
    )


def _position(shares: int = 10, price: str = "150", version: int = 1) -> Position:
    return Position(
        user_id="alice",
        symbol="AAPL",
        shares=shares,
        avg_price=Decimal(price),
        total_cost=Decimal(price) * shares,
        first_purchased=eastern_datetime(2024, 6, 15),
        last_updated=eastern_datetime(2024, 6, 15),
        version=version,
    )


class TestAccountRepository:
    """Tests for SqlAlchemyAccountRepository."""

    def test_create_if_absent_is_idempotent(self, account_repo: SqlAlchemyAccountRepository):
        """
        GIVEN an account created once
        WHEN create_if_absent is called again with different cash
        THEN the original account is returned and created is False
        """
        first, created = account_repo.create_if_absent(_account())
        second, created_again = account_repo.create_if_absent(_account(cash="1.00"))

        assert created is True
        assert created_again is False
        assert second.cash_balance == first.cash_balance == Decimal("10000.00")

    def test_created_at_round_trips_in_eastern(self, account_repo: SqlAlchemyAccountRepository):
        account, _ = account_repo.create_if_absent(_account())

        assert account.created_at == eastern_datetime(2024, 6, 15)

    def test_increment_is_visible_to_other_sessions(self, test_engine, account_repo):
        """
        GIVEN an account
        WHEN one session increments it
        THEN a second session reads the new balance
        """
        account_repo.create_if_absent(_account())
        other = SqlAlchemyAccountRepository(
            sessionmaker(autocommit=False, autoflush=False, bind=test_engine)()
        )

        assert account_repo.increment("alice", Decimal("-250.50"), Decimal("250.50")) is True

        account = other.get("alice")
        assert account.cash_balance == Decimal("9749.50")
        assert account.total_invested == Decimal("250.50")

    def test_increment_refuses_negative_balance(self, account_repo: SqlAlchemyAccountRepository):
        """
        GIVEN $100 cash
        WHEN a $100.01 debit is attempted
        THEN no row is updated
        """
        account_repo.create_if_absent(_account(cash="100.00"))

        assert account_repo.increment("alice", Decimal("-100.01"), Decimal("100.01")) is False
        assert account_repo.get("alice").cash_balance == Decimal("100.00")

    def test_increment_missing_account(self, account_repo: SqlAlchemyAccountRepository):
        assert account_repo.increment("ghost", Decimal("1"), Decimal("0")) is False


class TestPositionRepository:
    """Tests for SqlAlchemyPositionRepository."""

    def test_insert_conflict_returns_false(self, position_repo: SqlAlchemyPositionRepository):
        assert position_repo.insert(_position()) is True
        assert position_repo.insert(_position(shares=3)) is False
        assert position_repo.get("alice", "AAPL").shares == 10

    def test_compare_and_swap_checks_version(self, position_repo: SqlAlchemyPositionRepository):
        """
        GIVEN a position at version 1
        WHEN two writers both read version 1 and write
        THEN only the first write lands
        """
        position_repo.insert(_position())
        read = position_repo.get("alice", "AAPL")

        first = replace(read, shares=12, total_cost=Decimal("1800"), version=2)
        second = replace(read, shares=11, total_cost=Decimal("1650"), version=2)

        assert position_repo.compare_and_swap(first, expected_version=1) is True
        assert position_repo.compare_and_swap(second, expected_version=1) is False
        stored = position_repo.get("alice", "AAPL")
        assert stored.shares == 12
        assert stored.version == 2

    def test_delete_if_version(self, position_repo: SqlAlchemyPositionRepository):
        position_repo.insert(_position())

        assert position_repo.delete_if_version("alice", "AAPL", expected_version=7) is False
        assert position_repo.delete_if_version("alice", "AAPL", expected_version=1) is True
        assert position_repo.get("alice", "AAPL") is None

    def test_reinsert_after_delete(self, position_repo: SqlAlchemyPositionRepository):
        """
        GIVEN a position loaded into the session and then deleted
        WHEN the same symbol is inserted again
        THEN the insert succeeds
        """
        position_repo.insert(_position())
        position_repo.get("alice", "AAPL")
        position_repo.delete_if_version("alice", "AAPL", expected_version=1)

        assert position_repo.insert(_position(shares=2, price="140")) is True
        assert position_repo.get("alice", "AAPL").shares == 2

    def test_list_by_user_sorted_by_symbol(self, position_repo: SqlAlchemyPositionRepository):
        position_repo.insert(replace(_position(), symbol="MSFT"))
        position_repo.insert(_position())

        assert [p.symbol for p in position_repo.list_by_user("alice")] == ["AAPL", "MSFT"]


class TestTransactionAndSnapshotRepositories:
    """Tests for the append-only stores."""

    def test_transactions_newest_first(self, transaction_repo: SqlAlchemyTransactionRepository):
        base = eastern_datetime(2024, 6, 15, 10)
        for i, symbol in enumerate(["AAPL", "MSFT", "GOOGL"]):
            transaction_repo.create(Transaction(
                txn_id=f"t{i}",
                user_id="alice",
                txn_type=TransactionType.BUY,
                symbol=symbol,
                shares=1,
                price=Decimal("100"),
                total_amount=Decimal("100"),
                timestamp=base + timedelta(minutes=i),
            ))

        txns = transaction_repo.list_by_user("alice")

        assert [t.symbol for t in txns] == ["GOOGL", "MSFT", "AAPL"]
        assert txns[0].txn_type == TransactionType.BUY
        assert txns[0].timestamp == base + timedelta(minutes=2)
        since = transaction_repo.list_by_user("alice", since=base + timedelta(minutes=1))
        assert [t.symbol for t in since] == ["GOOGL", "MSFT"]

    def test_snapshots_oldest_first_with_limit(self, snapshot_repo: SqlAlchemySnapshotRepository):
        base = eastern_datetime(2024, 6, 15, 10)
        for i in range(4):
            snapshot_repo.create(Snapshot(
                snapshot_id=f"s{i}",
                user_id="alice",
                cash_balance=Decimal(1000 + i),
                portfolio_value=Decimal(1000 + i),
                timestamp=base + timedelta(hours=i),
            ))

        assert [s.snapshot_id for s in snapshot_repo.list_by_user("alice")] == ["s0", "s1", "s2", "s3"]
        assert [s.snapshot_id for s in snapshot_repo.list_by_user("alice", limit=2)] == ["s2", "s3"]


class TestQuoteCacheAndWatchlist:
    """Tests for the cache table and watchlist."""

    def test_cache_put_overwrites(self, db_cache_repo: SqlAlchemyQuoteCacheRepository):
        t0 = eastern_datetime(2024, 6, 15, 10)
        db_cache_repo.put(QuoteCacheEntry(symbol="AAPL", price=Decimal("150"), fetched_at=t0))
        db_cache_repo.put(QuoteCacheEntry(
            symbol="AAPL", price=Decimal("151.25"), fetched_at=t0 + timedelta(minutes=5)
        ))

        entry = db_cache_repo.get("AAPL")

        assert entry.price == Decimal("151.25")
        assert entry.fetched_at == t0 + timedelta(minutes=5)
        assert db_cache_repo.get("MSFT") is None

    def test_watchlist_unique_per_user(self, watchlist_repo: SqlAlchemyWatchlistRepository):
        t0 = eastern_datetime(2024, 6, 15, 10)

        assert watchlist_repo.add(WatchlistItem(user_id="alice", symbol="AAPL", added_at=t0)) is True
        assert watchlist_repo.add(WatchlistItem(user_id="alice", symbol="AAPL", added_at=t0)) is False
        assert watchlist_repo.add(WatchlistItem(user_id="bob", symbol="AAPL", added_at=t0)) is True
        assert [i.symbol for i in watchlist_repo.list_by_user("alice")] == ["AAPL"]
        assert watchlist_repo.remove("alice", "AAPL") is True
        assert watchlist_repo.remove("alice", "AAPL") is False


class TestConcurrentIncrements:
    """Concurrent debits against a file-backed SQLite database."""

    def test_parallel_debits_never_overdraw(self, tmp_path):
        """
        GIVEN an account with $1,000 and 20 threads each debiting $100
        WHEN they run concurrently on separate sessions
        THEN exactly 10 debits succeed and the balance ends at zero
        """
        engine = build_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
        Base.metadata.create_all(bind=engine)
        factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        setup_session = factory()
        SqlAlchemyAccountRepository(setup_session).create_if_absent(_account(cash="1000.00"))

        def debit(_):
            session = factory()
            try:
                return SqlAlchemyAccountRepository(session).increment(
                    "alice", Decimal("-100"), Decimal("100")
                )
            finally:
                session.close()

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(debit, range(20)))

        assert results.count(True) == 10
        account = SqlAlchemyAccountRepository(setup_session).get("alice")
        assert account.cash_balance == Decimal("0")
        assert account.total_invested == Decimal("1000")
        setup_session.close()
        engine.dispose()
