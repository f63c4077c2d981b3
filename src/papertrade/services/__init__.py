"""Service layer - business logic and orchestration."""

from papertrade.services.quote_cache import QuoteCache
from papertrade.services.crypto_service import CryptoPriceService
from papertrade.services.snapshot_recorder import SnapshotRecorder, cost_basis_value
from papertrade.services.account_store import AccountStore
from papertrade.services.position_ledger import PositionLedger
from papertrade.services.transaction_log import TransactionLog
from papertrade.services.trade_service import TradeService
from papertrade.services.portfolio_service import PortfolioService
from papertrade.services.watchlist_service import WatchlistService

__all__ = [
    "QuoteCache",
    "CryptoPriceService",
    "SnapshotRecorder",
    "cost_basis_value",
    "AccountStore",
    "PositionLedger",
    "TransactionLog",
    "TradeService",
    "PortfolioService",
    "WatchlistService",
]
