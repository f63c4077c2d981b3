"""Paper-trading ledger and portfolio valuation service."""

__version__ = "0.1.0"
