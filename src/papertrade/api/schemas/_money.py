"""Presentation rounding for monetary values."""

from decimal import Decimal
from typing import Optional

from papertrade.core.util import round2


def money(value: Decimal) -> float:
    """Round to cents for display."""
    return float(round2(value))


def optional_money(value: Optional[Decimal]) -> Optional[float]:
    return None if value is None else money(value)
