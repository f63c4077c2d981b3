"""Position ledger with weighted-average cost basis."""

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from papertrade.core.exceptions import (
    ConcurrentModificationError,
    InsufficientSharesError,
    NoSuchPositionError,
)
from papertrade.core.timezone import now_eastern
from papertrade.domain.models import Position
from papertrade.domain.views import SellOutcome
from papertrade.repositories.protocols import PositionRepository

logger = logging.getLogger(__name__)


class PositionLedger:
    """
    Per-user, per-symbol holdings mutated only by buys and sells.

    Every write is a compare-and-swap on the position's version; on conflict
    the position is re-read and the change recomputed, up to max_retries.
    """

    def __init__(
        self,
        position_repo: PositionRepository,
        max_retries: int = 3,
        clock: Callable[[], datetime] = now_eastern,
    ):
        self._position_repo = position_repo
        self._max_retries = max_retries
        self._clock = clock

    def get_position(self, user_id: str, symbol: str) -> Optional[Position]:
        return self._position_repo.get(user_id, symbol)

    def list_positions(self, user_id: str) -> list[Position]:
        return self._position_repo.list_by_user(user_id)

    def apply_buy(self, user_id: str, symbol: str, shares: int, price: Decimal) -> Position:
        """Add shares bought at price, blending them into the average cost."""
        return self._add_shares(user_id, symbol, shares, Decimal(shares) * price, "buy")

    def restore_shares(
        self,
        user_id: str,
        symbol: str,
        shares: int,
        cost_basis: Decimal,
        first_purchased: Optional[datetime] = None,
    ) -> Position:
        """
        Put back shares removed by apply_sell at the cost basis they left with.

        Used to undo a sell whose cash credit could not be committed.
        """
        return self._add_shares(user_id, symbol, shares, cost_basis, "restore", first_purchased)

    def _add_shares(
        self,
        user_id: str,
        symbol: str,
        shares: int,
        cost: Decimal,
        action: str,
        first_purchased: Optional[datetime] = None,
    ) -> Position:
        for attempt in range(1, self._max_retries + 1):
            now = self._clock()
            existing = self._position_repo.get(user_id, symbol)
            if existing is None:
                position = Position(
                    user_id=user_id,
                    symbol=symbol,
                    shares=shares,
                    avg_price=self._average_cost(cost, shares),
                    total_cost=cost,
                    first_purchased=first_purchased or now,
                    last_updated=now,
                    version=1,
                )
                if self._position_repo.insert(position):
                    return position
            else:
                new_shares = existing.shares + shares
                new_total_cost = existing.total_cost + cost
                position = replace(
                    existing,
                    shares=new_shares,
                    total_cost=new_total_cost,
                    avg_price=self._average_cost(new_total_cost, new_shares),
                    last_updated=now,
                    version=existing.version + 1,
                )
                if self._position_repo.compare_and_swap(position, existing.version):
                    return position
            logger.info("Concurrent update of %s/%s on %s (attempt %d)", user_id, symbol, action, attempt)

        raise ConcurrentModificationError("Position", f"{user_id}/{symbol}")

    def apply_sell(self, user_id: str, symbol: str, shares: int, price: Decimal) -> SellOutcome:
        """Remove sold shares at their proportional cost basis and realize P&L."""
        proceeds = Decimal(shares) * price
        for attempt in range(1, self._max_retries + 1):
            existing = self._position_repo.get(user_id, symbol)
            if existing is None:
                raise NoSuchPositionError(symbol)
            if existing.shares < shares:
                raise InsufficientSharesError(symbol, requested=shares, available=existing.shares)

            if shares == existing.shares:
                cost_basis_sold = existing.total_cost
                if self._position_repo.delete_if_version(user_id, symbol, existing.version):
                    return SellOutcome(
                        position=None,
                        proceeds=proceeds,
                        cost_basis_sold=cost_basis_sold,
                        realized_pnl=proceeds - cost_basis_sold,
                    )
            else:
                cost_basis_sold = (existing.total_cost / Decimal(existing.shares)) * Decimal(shares)
                remaining_shares = existing.shares - shares
                remaining_cost = existing.total_cost - cost_basis_sold
                position = replace(
                    existing,
                    shares=remaining_shares,
                    total_cost=remaining_cost,
                    # Numerically unchanged under average cost; recomputed so
                    # another cost-basis method can slot in here.
                    avg_price=self._average_cost(remaining_cost, remaining_shares),
                    last_updated=self._clock(),
                    version=existing.version + 1,
                )
                if self._position_repo.compare_and_swap(position, existing.version):
                    return SellOutcome(
                        position=position,
                        proceeds=proceeds,
                        cost_basis_sold=cost_basis_sold,
                        realized_pnl=proceeds - cost_basis_sold,
                    )
            logger.info("Concurrent update of %s/%s on sell (attempt %d)", user_id, symbol, attempt)

        raise ConcurrentModificationError("Position", f"{user_id}/{symbol}")

    @staticmethod
    def _average_cost(total_cost: Decimal, shares: int) -> Decimal:
        return total_cost / Decimal(shares)
