"""Position repository protocol."""

from typing import Protocol, Optional

from papertrade.domain.models import Position


class PositionRepository(Protocol):
    """Interface for position data access with optimistic concurrency."""

    def get(self, user_id: str, symbol: str) -> Optional[Position]:
        """Retrieve one position."""
        ...

    def list_by_user(self, user_id: str) -> list[Position]:
        """List all positions of a user ordered by symbol."""
        ...

    def insert(self, position: Position) -> bool:
        """Insert a new position; False if one already exists for the symbol."""
        ...

    def compare_and_swap(self, position: Position, expected_version: int) -> bool:
        """Overwrite a position if its stored version still matches."""
        ...

    def delete_if_version(self, user_id: str, symbol: str, expected_version: int) -> bool:
        """Delete a position if its stored version still matches."""
        ...
