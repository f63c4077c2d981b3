"""Column value conversions shared by the SQLAlchemy repositories."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from papertrade.core.timezone import to_eastern


def to_decimal(value) -> Decimal:
    """Convert a stored numeric to Decimal (stored money is never NULL)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Return stored timestamps as aware US/Eastern datetimes."""
    return to_eastern(value) if value is not None else None
