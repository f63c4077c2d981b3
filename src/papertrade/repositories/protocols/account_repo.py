"""Account repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from papertrade.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access."""

    def get(self, user_id: str) -> Optional[Account]:
        """Retrieve the account of a user."""
        ...

    def create_if_absent(self, account: Account) -> tuple[Account, bool]:
        """
        Persist a new account unless one exists for the user.

        Returns the stored account and whether this call created it.
        """
        ...

    def increment(self, user_id: str, cash_delta: Decimal, invested_delta: Decimal) -> bool:
        """
        Atomically add deltas to cash_balance and total_invested.

        Returns False (and changes nothing) when the account is missing or
        the update would leave cash_balance negative.
        """
        ...
