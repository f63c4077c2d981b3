"""Snapshot repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import Snapshot


class SnapshotRepository(Protocol):
    """Interface for the portfolio value time series."""

    def create(self, snapshot: Snapshot) -> Snapshot:
        """Persist a new snapshot."""
        ...

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> list[Snapshot]:
        """List a user's snapshots oldest first (the latest `limit` if given)."""
        ...
