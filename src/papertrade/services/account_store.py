"""Account store: lazily seeded virtual cash accounts."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from papertrade.core.exceptions import InsufficientBalanceError, NotFoundError
from papertrade.core.timezone import now_eastern
from papertrade.domain.models import Account
from papertrade.repositories.protocols import AccountRepository
from papertrade.services.snapshot_recorder import SnapshotRecorder

logger = logging.getLogger(__name__)

DEFAULT_STARTING_CASH = Decimal("10000.00")


class AccountStore:
    """
    Per-user cash balance and invested total.

    Accounts are created on first use with the starting cash and an initial
    snapshot. Balance changes are atomic increments in the store.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        snapshot_recorder: SnapshotRecorder,
        starting_cash: Decimal = DEFAULT_STARTING_CASH,
        clock: Callable[[], datetime] = now_eastern,
    ):
        self._account_repo = account_repo
        self._snapshot_recorder = snapshot_recorder
        self._starting_cash = starting_cash
        self._clock = clock

    def get_account(self, user_id: str) -> Optional[Account]:
        """Return the account if it exists, without creating it."""
        return self._account_repo.get(user_id)

    def get_or_create_account(self, user_id: str) -> Account:
        """
        Return the user's account, creating and seeding it on first access.

        The account row and its seed snapshot are separate writes. An account
        found without any snapshot lost its seed on creation and is re-seeded.
        """
        existing = self._account_repo.get(user_id)
        if existing is not None:
            if not self._snapshot_recorder.has_history(user_id):
                logger.warning("Account %s has no seed snapshot; recording it now", user_id)
                self._snapshot_recorder.record_initial(existing)
            return existing

        account, created = self._account_repo.create_if_absent(
            Account(
                user_id=user_id,
                cash_balance=self._starting_cash,
                total_invested=Decimal("0"),
                created_at=self._clock(),
            )
        )
        if created:
            self._snapshot_recorder.record_initial(account)
            logger.info("Created account for %s with %s starting cash", user_id, account.cash_balance)
        return account

    def adjust_balance(self, user_id: str, delta: Decimal, invested_delta: Decimal) -> Account:
        """
        Atomically apply cash_balance += delta and total_invested += invested_delta.

        Callers validate funds first; the store refuses any change that would
        leave the balance negative.
        """
        if not self._account_repo.increment(user_id, delta, invested_delta):
            account = self._account_repo.get(user_id)
            if account is None:
                raise NotFoundError("Account", user_id)
            raise InsufficientBalanceError(required=-delta, available=account.cash_balance)

        account = self._account_repo.get(user_id)
        if account is None:
            raise NotFoundError("Account", user_id)
        return account
