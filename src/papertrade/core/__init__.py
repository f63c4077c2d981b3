"""Core utilities and shared functionality."""

from papertrade.core.timezone import (
    now_eastern,
    to_eastern,
    parse_timestamp,
    EASTERN_TZ,
)
from papertrade.core.util import normalize_symbol, validate_quantity, round2
from papertrade.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    InsufficientBalanceError,
    InsufficientSharesError,
    NoSuchPositionError,
    InvalidSymbolError,
    QuoteUnavailableError,
    ConcurrentModificationError,
    RateLimitedError,
    QuoteProviderError,
)

__all__ = [
    "now_eastern",
    "to_eastern",
    "parse_timestamp",
    "EASTERN_TZ",
    "normalize_symbol",
    "validate_quantity",
    "round2",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "InsufficientBalanceError",
    "InsufficientSharesError",
    "NoSuchPositionError",
    "InvalidSymbolError",
    "QuoteUnavailableError",
    "ConcurrentModificationError",
    "RateLimitedError",
    "QuoteProviderError",
]
