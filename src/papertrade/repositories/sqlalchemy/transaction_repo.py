"""SQLAlchemy implementation of TransactionRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from papertrade.core.timezone import to_eastern
from papertrade.domain.models import Transaction
from papertrade.repositories.sqlalchemy._convert import to_decimal, to_datetime
from papertrade.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed trade log."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        orm_txn = TransactionORM(
            txn_id=transaction.txn_id,
            user_id=transaction.user_id,
            txn_type=transaction.txn_type,
            symbol=transaction.symbol,
            shares=transaction.shares,
            price=transaction.price,
            total_amount=transaction.total_amount,
            timestamp=transaction.timestamp,
        )
        self._db.add(orm_txn)
        try:
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise
        self._db.refresh(orm_txn)
        return self._to_domain(orm_txn)

    def list_by_user(
        self,
        user_id: str,
        limit: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> list[Transaction]:
        """List a user's transactions, most recent first."""
        query = self._db.query(TransactionORM).filter(TransactionORM.user_id == user_id)
        if since is not None:
            query = query.filter(TransactionORM.timestamp >= to_eastern(since))
        query = query.order_by(TransactionORM.timestamp.desc(), TransactionORM.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [self._to_domain(t) for t in query.all()]

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            user_id=orm.user_id,
            txn_type=orm.txn_type,
            symbol=orm.symbol,
            shares=orm.shares,
            price=to_decimal(orm.price),
            total_amount=to_decimal(orm.total_amount),
            timestamp=to_datetime(orm.timestamp),
        )
