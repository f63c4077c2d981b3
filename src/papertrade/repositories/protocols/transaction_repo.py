"""Transaction repository protocol."""

from datetime import datetime
from typing import Protocol, Optional

from papertrade.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for the append-only trade log."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        ...

    def list_by_user(
        self,
        user_id: str,
        limit: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> list[Transaction]:
        """List a user's transactions, most recent first."""
        ...
