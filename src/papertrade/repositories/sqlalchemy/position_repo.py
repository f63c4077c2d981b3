"""SQLAlchemy implementation of PositionRepository."""

from typing import Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import FlushError

from papertrade.domain.models import Position
from papertrade.repositories.sqlalchemy._convert import to_decimal, to_datetime
from papertrade.repositories.sqlalchemy.orm_models import PositionORM


class SqlAlchemyPositionRepository:
    """SQLAlchemy-backed position repository using version compare-and-swap."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, user_id: str, symbol: str) -> Optional[Position]:
        """Retrieve one position."""
        orm_pos = self._db.get(PositionORM, (user_id, symbol), populate_existing=True)
        return self._to_domain(orm_pos) if orm_pos else None

    def list_by_user(self, user_id: str) -> list[Position]:
        """List all positions of a user ordered by symbol."""
        orm_positions = (
            self._db.query(PositionORM)
            .filter(PositionORM.user_id == user_id)
            .order_by(PositionORM.symbol)
            .populate_existing()
            .all()
        )
        return [self._to_domain(p) for p in orm_positions]

    def insert(self, position: Position) -> bool:
        """Insert a new position; False if the symbol is already held."""
        orm_pos = PositionORM(
            user_id=position.user_id,
            symbol=position.symbol,
            shares=position.shares,
            avg_price=position.avg_price,
            total_cost=position.total_cost,
            first_purchased=position.first_purchased,
            last_updated=position.last_updated,
            version=position.version,
        )
        self._db.add(orm_pos)
        try:
            self._db.commit()
        except (IntegrityError, FlushError):
            self._db.rollback()
            return False
        return True

    def compare_and_swap(self, position: Position, expected_version: int) -> bool:
        """Overwrite the position only if nobody wrote it since it was read."""
        stmt = (
            update(PositionORM)
            .where(
                PositionORM.user_id == position.user_id,
                PositionORM.symbol == position.symbol,
                PositionORM.version == expected_version,
            )
            .values(
                shares=position.shares,
                avg_price=position.avg_price,
                total_cost=position.total_cost,
                last_updated=position.last_updated,
                version=position.version,
            )
            .execution_options(synchronize_session=False)
        )
        result = self._db.execute(stmt)
        self._db.commit()
        return result.rowcount == 1

    def delete_if_version(self, user_id: str, symbol: str, expected_version: int) -> bool:
        """Delete the position only if nobody wrote it since it was read."""
        stmt = (
            delete(PositionORM)
            .where(
                PositionORM.user_id == user_id,
                PositionORM.symbol == symbol,
                PositionORM.version == expected_version,
            )
            # "fetch" evicts the row from the identity map so the symbol can be re-bought
            .execution_options(synchronize_session="fetch")
        )
        result = self._db.execute(stmt)
        self._db.commit()
        return result.rowcount == 1

    @staticmethod
    def _to_domain(orm: PositionORM) -> Position:
        """Convert ORM model to domain model."""
        return Position(
            user_id=orm.user_id,
            symbol=orm.symbol,
            shares=orm.shares,
            avg_price=to_decimal(orm.avg_price),
            total_cost=to_decimal(orm.total_cost),
            first_purchased=to_datetime(orm.first_purchased),
            last_updated=to_datetime(orm.last_updated),
            version=orm.version,
        )
