"""Append-only trade log."""

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from papertrade.core.timezone import now_eastern
from papertrade.domain.models import Transaction, TransactionType
from papertrade.repositories.protocols import TransactionRepository

logger = logging.getLogger(__name__)


class TransactionLog:
    """Audit record of executed trades."""

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        clock: Callable[[], datetime] = now_eastern,
    ):
        self._transaction_repo = transaction_repo
        self._clock = clock

    def append(
        self,
        user_id: str,
        txn_type: TransactionType,
        symbol: str,
        shares: int,
        price: Decimal,
        total_amount: Decimal,
    ) -> Optional[Transaction]:
        """
        Record an executed trade.

        The trade is already committed when this runs, so a write failure is
        logged and None returned instead of raising.
        """
        try:
            return self._transaction_repo.create(
                Transaction(
                    txn_id=str(uuid.uuid4()),
                    user_id=user_id,
                    txn_type=txn_type,
                    symbol=symbol,
                    shares=shares,
                    price=price,
                    total_amount=total_amount,
                    timestamp=self._clock(),
                )
            )
        except Exception:
            logger.exception(
                "Failed to log %s %d %s for user %s", txn_type.value, shares, symbol, user_id
            )
            return None

    def list_recent(
        self,
        user_id: str,
        limit: int = 50,
        since: Optional[datetime] = None,
    ) -> list[Transaction]:
        """List trades most recent first."""
        return self._transaction_repo.list_by_user(user_id, limit=limit, since=since)
