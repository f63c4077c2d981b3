"""Input normalization and presentation helpers."""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from papertrade.core.exceptions import ValidationError

_SYMBOL_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9.\-=^]{0,19}$")
_CENT = Decimal("0.01")


def normalize_symbol(symbol: Optional[str]) -> str:
    """Strip and uppercase a ticker; reject empty or malformed input."""
    if symbol is None or not str(symbol).strip():
        raise ValidationError("Symbol is required")
    normalized = str(symbol).strip().upper()
    if not _SYMBOL_PATTERN.match(normalized):
        raise ValidationError(f"Invalid symbol: {symbol!r}")
    return normalized


def validate_quantity(quantity) -> int:
    """Return quantity if it is a whole number of shares >= 1."""
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(f"Quantity must be a whole number of shares, got {quantity!r}")
    if quantity < 1:
        raise ValidationError(f"Quantity must be at least 1, got {quantity}")
    return quantity


def round2(value: Decimal) -> Decimal:
    """Round a monetary value to cents for display."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)
