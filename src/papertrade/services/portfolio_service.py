"""Read-side views of a user's portfolio."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from papertrade.core.timezone import now_eastern
from papertrade.domain.models import Transaction
from papertrade.domain.views import HistoryPoint, PortfolioView, PositionView
from papertrade.services.account_store import AccountStore
from papertrade.services.position_ledger import PositionLedger
from papertrade.services.quote_cache import QuoteCache
from papertrade.services.snapshot_recorder import SnapshotRecorder, cost_basis_value
from papertrade.services.transaction_log import TransactionLog


class PortfolioService:
    """Holdings, value history and trade history for one user."""

    def __init__(
        self,
        account_store: AccountStore,
        position_ledger: PositionLedger,
        snapshot_recorder: SnapshotRecorder,
        transaction_log: TransactionLog,
        quote_cache: QuoteCache,
    ):
        self._accounts = account_store
        self._ledger = position_ledger
        self._snapshots = snapshot_recorder
        self._log = transaction_log
        self._quotes = quote_cache

    def get_portfolio(self, user_id: str, include_quotes: bool = False) -> PortfolioView:
        """
        Return cash and holdings at cost.

        With include_quotes, positions are also valued at market through the
        budgeted batch lookup; positions without a price keep market fields
        empty and the view is flagged partial.
        """
        account = self._accounts.get_or_create_account(user_id)
        positions = self._ledger.list_positions(user_id)
        view = PortfolioView(
            cash_balance=account.cash_balance,
            total_invested=account.total_invested,
            positions=[
                PositionView(
                    symbol=p.symbol,
                    shares=p.shares,
                    avg_price=p.avg_price,
                    total_cost=p.total_cost,
                )
                for p in positions
            ],
            cost_basis_value=cost_basis_value(account.cash_balance, positions),
            as_of=now_eastern(),
        )
        if not include_quotes or not positions:
            return view

        batch = self._quotes.get_prices(p.symbol for p in positions)
        market_value = account.cash_balance
        for item in view.positions:
            quote = batch.prices.get(item.symbol)
            if quote is None:
                continue
            item.last_price = quote.price
            item.market_value = quote.price * Decimal(item.shares)
            item.unrealized_pnl = item.market_value - item.total_cost
            item.is_stale_price = quote.is_stale
            market_value += item.market_value
        view.is_partial = batch.is_partial
        view.market_value = None if batch.missing_symbols else market_value
        return view

    def get_history(self, user_id: str, limit: Optional[int] = None) -> list[HistoryPoint]:
        """Portfolio value series oldest first; seeds the account on first access."""
        self._accounts.get_or_create_account(user_id)
        return self._snapshots.get_history(user_id, limit=limit)

    def list_transactions(
        self,
        user_id: str,
        limit: int = 50,
        since: Optional[datetime] = None,
    ) -> list[Transaction]:
        return self._log.list_recent(user_id, limit=limit, since=since)
