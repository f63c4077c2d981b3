"""SQLAlchemy repository implementations."""

from papertrade.repositories.sqlalchemy.database import (
    build_engine,
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from papertrade.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from papertrade.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository
from papertrade.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from papertrade.repositories.sqlalchemy.snapshot_repo import SqlAlchemySnapshotRepository
from papertrade.repositories.sqlalchemy.cache_repo import SqlAlchemyQuoteCacheRepository
from papertrade.repositories.sqlalchemy.watchlist_repo import SqlAlchemyWatchlistRepository

__all__ = [
    "build_engine",
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyPositionRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemySnapshotRepository",
    "SqlAlchemyQuoteCacheRepository",
    "SqlAlchemyWatchlistRepository",
]
