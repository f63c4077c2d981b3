"""SQLAlchemy implementation of SnapshotRepository."""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from papertrade.domain.models import Snapshot
from papertrade.repositories.sqlalchemy._convert import to_decimal, to_datetime
from papertrade.repositories.sqlalchemy.orm_models import SnapshotORM


class SqlAlchemySnapshotRepository:
    """SQLAlchemy-backed portfolio value series."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, snapshot: Snapshot) -> Snapshot:
        """Persist a new snapshot."""
        orm_snap = SnapshotORM(
            snapshot_id=snapshot.snapshot_id,
            user_id=snapshot.user_id,
            cash_balance=snapshot.cash_balance,
            portfolio_value=snapshot.portfolio_value,
            timestamp=snapshot.timestamp,
        )
        self._db.add(orm_snap)
        try:
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise
        self._db.refresh(orm_snap)
        return self._to_domain(orm_snap)

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> list[Snapshot]:
        """List snapshots oldest first; with a limit, the most recent `limit` of them."""
        query = self._db.query(SnapshotORM).filter(SnapshotORM.user_id == user_id)
        if limit is not None:
            rows = (
                query.order_by(SnapshotORM.timestamp.desc(), SnapshotORM.id.desc())
                .limit(limit)
                .all()
            )
            rows.reverse()
        else:
            rows = query.order_by(SnapshotORM.timestamp, SnapshotORM.id).all()
        return [self._to_domain(s) for s in rows]

    @staticmethod
    def _to_domain(orm: SnapshotORM) -> Snapshot:
        """Convert ORM model to domain model."""
        return Snapshot(
            snapshot_id=orm.snapshot_id,
            user_id=orm.user_id,
            cash_balance=to_decimal(orm.cash_balance),
            portfolio_value=to_decimal(orm.portfolio_value),
            timestamp=to_datetime(orm.timestamp),
        )
