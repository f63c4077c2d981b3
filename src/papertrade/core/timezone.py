"""Clock and timestamp helpers; ledger timestamps are kept in US/Eastern market time."""

from datetime import datetime

import pytz
from dateutil import parser as date_parser

from papertrade.core.exceptions import ValidationError

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Default clock for services; tests inject their own."""
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        # SQLite drops the offset; stored wall-clock values are Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def parse_timestamp(value: str) -> datetime:
    """
    Parse a client-supplied timestamp such as "2024-06-15T10:30:00-04:00".

    A value without an offset is read as Eastern. Unparseable input raises
    ValidationError.
    """
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError) as exc:
        raise ValidationError(f"Invalid timestamp: {value!r}") from exc
    return to_eastern(parsed)
