"""SQLAlchemy implementation of QuoteCacheRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from papertrade.domain.models import QuoteCacheEntry
from papertrade.repositories.sqlalchemy._convert import to_decimal, to_datetime
from papertrade.repositories.sqlalchemy.orm_models import QuoteCacheORM


class SqlAlchemyQuoteCacheRepository:
    """Quote cache persisted in the shared database (visible to every worker)."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, symbol: str) -> Optional[QuoteCacheEntry]:
        orm_entry = self._db.get(QuoteCacheORM, symbol, populate_existing=True)
        return self._to_domain(orm_entry) if orm_entry else None

    def put(self, entry: QuoteCacheEntry) -> None:
        # merge() is insert-or-update keyed on symbol
        self._db.merge(
            QuoteCacheORM(
                symbol=entry.symbol,
                price=entry.price,
                fetched_at=entry.fetched_at,
            )
        )
        self._db.commit()

    @staticmethod
    def _to_domain(orm: QuoteCacheORM) -> QuoteCacheEntry:
        return QuoteCacheEntry(
            symbol=orm.symbol,
            price=to_decimal(orm.price),
            fetched_at=to_datetime(orm.fetched_at),
        )
