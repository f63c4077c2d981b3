"""SQLAlchemy implementation of AccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from papertrade.domain.models import Account
from papertrade.repositories.sqlalchemy._convert import to_decimal, to_datetime
from papertrade.repositories.sqlalchemy.orm_models import AccountORM

# Tolerance for float-backed numeric storage (SQLite)
_BALANCE_EPSILON = Decimal("0.000001")


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, user_id: str) -> Optional[Account]:
        """Retrieve the account of a user."""
        orm_account = self._db.get(AccountORM, user_id, populate_existing=True)
        return self._to_domain(orm_account) if orm_account else None

    def create_if_absent(self, account: Account) -> tuple[Account, bool]:
        """Persist a new account; a concurrent creator wins without error."""
        existing = self.get(account.user_id)
        if existing:
            return existing, False

        orm_account = AccountORM(
            user_id=account.user_id,
            cash_balance=account.cash_balance,
            total_invested=account.total_invested,
            created_at=account.created_at,
        )
        self._db.add(orm_account)
        try:
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            winner = self.get(account.user_id)
            if winner is None:
                raise
            return winner, False
        self._db.refresh(orm_account)
        return self._to_domain(orm_account), True

    def increment(self, user_id: str, cash_delta: Decimal, invested_delta: Decimal) -> bool:
        """Apply both deltas in a single guarded UPDATE (no read-modify-write)."""
        stmt = (
            update(AccountORM)
            .where(AccountORM.user_id == user_id)
            .where(AccountORM.cash_balance + cash_delta >= -_BALANCE_EPSILON)
            .values(
                cash_balance=AccountORM.cash_balance + cash_delta,
                total_invested=AccountORM.total_invested + invested_delta,
            )
            .execution_options(synchronize_session=False)
        )
        result = self._db.execute(stmt)
        self._db.commit()
        return result.rowcount == 1

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            user_id=orm.user_id,
            cash_balance=to_decimal(orm.cash_balance),
            total_invested=to_decimal(orm.total_invested),
            created_at=to_datetime(orm.created_at),
        )
