"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    UniqueConstraint,
    Index,
    Enum as SqlEnum,
)

from papertrade.repositories.sqlalchemy.database import Base
from papertrade.domain.models.enums import TransactionType

MONEY = Numeric(precision=20, scale=6)
PRICE = Numeric(precision=18, scale=6)


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    user_id = Column(String(128), primary_key=True)
    cash_balance = Column(MONEY, nullable=False)
    total_invested = Column(MONEY, nullable=False, default=Decimal("0"))
    created_at = Column(DateTime(timezone=True), nullable=False)


class PositionORM(Base):
    """SQLAlchemy model for Position."""

    __tablename__ = "positions"

    user_id = Column(String(128), primary_key=True)
    symbol = Column(String(20), primary_key=True)
    shares = Column(Integer, nullable=False)
    avg_price = Column(PRICE, nullable=False)
    total_cost = Column(MONEY, nullable=False)
    first_purchased = Column(DateTime(timezone=True), nullable=False)
    last_updated = Column(DateTime(timezone=True), nullable=False)
    version = Column(Integer, nullable=False, default=0)


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (append-only trade log)."""

    __tablename__ = "transactions"
    __table_args__ = (Index("ix_transactions_user_time", "user_id", "timestamp"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    txn_id = Column(String(36), unique=True, nullable=False)
    user_id = Column(String(128), nullable=False)
    txn_type = Column(SqlEnum(TransactionType), nullable=False)
    symbol = Column(String(20), nullable=False)
    shares = Column(Integer, nullable=False)
    price = Column(PRICE, nullable=False)
    total_amount = Column(MONEY, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)


class SnapshotORM(Base):
    """SQLAlchemy model for Snapshot (portfolio value time series)."""

    __tablename__ = "snapshots"
    __table_args__ = (Index("ix_snapshots_user_time", "user_id", "timestamp"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    snapshot_id = Column(String(36), unique=True, nullable=False)
    user_id = Column(String(128), nullable=False)
    cash_balance = Column(MONEY, nullable=False)
    portfolio_value = Column(MONEY, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)


class QuoteCacheORM(Base):
    """SQLAlchemy model for the shared quote cache."""

    __tablename__ = "quote_cache"

    symbol = Column(String(20), primary_key=True)
    price = Column(PRICE, nullable=False)
    fetched_at = Column(DateTime(timezone=True), nullable=False)


class WatchlistORM(Base):
    """SQLAlchemy model for watchlist entries."""

    __tablename__ = "watchlist"
    __table_args__ = (UniqueConstraint("user_id", "symbol", name="uq_watchlist_user_symbol"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(128), nullable=False)
    symbol = Column(String(20), nullable=False)
    added_at = Column(DateTime(timezone=True), nullable=False)
