"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Types of executed trades."""

    BUY = "BUY"
    SELL = "SELL"
