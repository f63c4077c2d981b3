"""SQLAlchemy implementation of WatchlistRepository."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from papertrade.domain.models import WatchlistItem
from papertrade.repositories.sqlalchemy._convert import to_datetime
from papertrade.repositories.sqlalchemy.orm_models import WatchlistORM


class SqlAlchemyWatchlistRepository:
    """SQLAlchemy-backed watchlist repository."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, item: WatchlistItem) -> bool:
        self._db.add(
            WatchlistORM(user_id=item.user_id, symbol=item.symbol, added_at=item.added_at)
        )
        try:
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            return False
        return True

    def remove(self, user_id: str, symbol: str) -> bool:
        deleted = (
            self._db.query(WatchlistORM)
            .filter(WatchlistORM.user_id == user_id, WatchlistORM.symbol == symbol)
            .delete()
        )
        self._db.commit()
        return deleted > 0

    def list_by_user(self, user_id: str) -> list[WatchlistItem]:
        rows = (
            self._db.query(WatchlistORM)
            .filter(WatchlistORM.user_id == user_id)
            .order_by(WatchlistORM.id)
            .all()
        )
        return [
            WatchlistItem(user_id=r.user_id, symbol=r.symbol, added_at=to_datetime(r.added_at))
            for r in rows
        ]
