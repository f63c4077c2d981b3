"""Snapshot recorder for the portfolio value time series."""

import logging
import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Iterable, Optional

from papertrade.core.timezone import now_eastern
from papertrade.domain.models import Account, Position, Snapshot
from papertrade.domain.views import HistoryPoint
from papertrade.repositories.protocols import (
    AccountRepository,
    PositionRepository,
    SnapshotRepository,
)

logger = logging.getLogger(__name__)

SEED_POINT_OFFSET = timedelta(days=1)


def cost_basis_value(cash_balance: Decimal, positions: Iterable[Position]) -> Decimal:
    """
    Value an account as cash plus every position at its average cost.

    This is deliberately not mark-to-market: valuing at live prices would spend
    the quote provider's call budget on every trade.
    """
    return cash_balance + sum(
        (Decimal(p.shares) * p.avg_price for p in positions), Decimal("0")
    )


class SnapshotRecorder:
    """
    Records point-in-time account valuations.

    Snapshots after trades are best-effort: a failure is logged and the
    originating trade still succeeds.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        position_repo: PositionRepository,
        snapshot_repo: SnapshotRepository,
        clock: Callable[[], datetime] = now_eastern,
    ):
        self._account_repo = account_repo
        self._position_repo = position_repo
        self._snapshot_repo = snapshot_repo
        self._clock = clock

    def record_snapshot(self, user_id: str) -> Optional[Snapshot]:
        """Append a snapshot of the user's current value; None if skipped or failed."""
        try:
            account = self._account_repo.get(user_id)
            if account is None:
                logger.debug("No account for %s; snapshot skipped", user_id)
                return None
            positions = self._position_repo.list_by_user(user_id)
            return self._append(account, positions)
        except Exception:
            logger.exception("Failed to record snapshot for user %s", user_id)
            return None

    def record_initial(self, account: Account) -> Snapshot:
        """Record the time-zero snapshot of an account that has none yet."""
        return self._append(account, self._position_repo.list_by_user(account.user_id))

    def has_history(self, user_id: str) -> bool:
        return bool(self._snapshot_repo.list_by_user(user_id, limit=1))

    def get_history(self, user_id: str, limit: Optional[int] = None) -> list[HistoryPoint]:
        """
        Return the value series oldest first.

        A lone snapshot cannot draw a line, so a synthetic seed point one day
        earlier with the same values is prepended.
        """
        points = [
            HistoryPoint(
                timestamp=s.timestamp,
                portfolio_value=s.portfolio_value,
                cash_balance=s.cash_balance,
            )
            for s in self._snapshot_repo.list_by_user(user_id, limit=limit)
        ]
        if len(points) == 1:
            first = points[0]
            points.insert(
                0,
                HistoryPoint(
                    timestamp=first.timestamp - SEED_POINT_OFFSET,
                    portfolio_value=first.portfolio_value,
                    cash_balance=first.cash_balance,
                    synthetic=True,
                ),
            )
        return points

    def _append(self, account: Account, positions: list[Position]) -> Snapshot:
        snapshot = Snapshot(
            snapshot_id=str(uuid.uuid4()),
            user_id=account.user_id,
            cash_balance=account.cash_balance,
            portfolio_value=cost_basis_value(account.cash_balance, positions),
            timestamp=self._clock(),
        )
        return self._snapshot_repo.create(snapshot)
