"""
Trade orchestrator for buy and sell requests.

Each request moves through: validate -> price -> balance/holdings check ->
commit -> log -> snapshot. Anything failing before the commit leaves no trade
behind. The commit touches cash and the position in two steps; if the second
fails the first is reversed. Logging and snapshotting run after the commit and
never undo it.
"""

import logging
from decimal import Decimal

from papertrade.core.exceptions import (
    InsufficientBalanceError,
    InsufficientSharesError,
    NoSuchPositionError,
)
from papertrade.core.util import normalize_symbol, validate_quantity
from papertrade.domain.models import TransactionType
from papertrade.domain.views import BuyResult, SellResult
from papertrade.services.account_store import AccountStore
from papertrade.services.position_ledger import PositionLedger
from papertrade.services.quote_cache import QuoteCache
from papertrade.services.snapshot_recorder import SnapshotRecorder
from papertrade.services.transaction_log import TransactionLog

logger = logging.getLogger(__name__)


class TradeService:
    """
    Executes simulated market orders.

    The execution price always comes from the quote cache; clients never
    supply a price.
    """

    def __init__(
        self,
        account_store: AccountStore,
        position_ledger: PositionLedger,
        quote_cache: QuoteCache,
        transaction_log: TransactionLog,
        snapshot_recorder: SnapshotRecorder,
    ):
        self._accounts = account_store
        self._ledger = position_ledger
        self._quotes = quote_cache
        self._log = transaction_log
        self._snapshots = snapshot_recorder

    def buy(self, user_id: str, symbol: str, quantity: int) -> BuyResult:
        """Buy quantity shares of symbol at the current price."""
        symbol = normalize_symbol(symbol)
        quantity = validate_quantity(quantity)

        account = self._accounts.get_or_create_account(user_id)
        quote = self._quotes.get_price(symbol)
        total_cost = quote.price * Decimal(quantity)
        if total_cost > account.cash_balance:
            raise InsufficientBalanceError(required=total_cost, available=account.cash_balance)

        updated = self._accounts.adjust_balance(user_id, -total_cost, total_cost)
        try:
            self._ledger.apply_buy(user_id, symbol, quantity, quote.price)
        except Exception:
            logger.error(
                "Position update failed for %s buy of %s; refunding %s", user_id, symbol, total_cost
            )
            self._accounts.adjust_balance(user_id, total_cost, -total_cost)
            raise

        logger.info(
            "BUY %d %s @ %s for %s (stale price: %s)",
            quantity,
            symbol,
            quote.price,
            user_id,
            quote.is_stale,
        )
        self._log.append(user_id, TransactionType.BUY, symbol, quantity, quote.price, total_cost)
        self._snapshots.record_snapshot(user_id)

        return BuyResult(
            symbol=symbol,
            shares=quantity,
            price=quote.price,
            total_cost=total_cost,
            new_balance=updated.cash_balance,
            is_stale_price=quote.is_stale,
        )

    def sell(self, user_id: str, symbol: str, quantity: int) -> SellResult:
        """Sell quantity shares of symbol at the current price."""
        symbol = normalize_symbol(symbol)
        quantity = validate_quantity(quantity)

        self._accounts.get_or_create_account(user_id)
        position = self._ledger.get_position(user_id, symbol)
        if position is None:
            raise NoSuchPositionError(symbol)
        if position.shares < quantity:
            raise InsufficientSharesError(symbol, requested=quantity, available=position.shares)

        quote = self._quotes.get_price(symbol)
        outcome = self._ledger.apply_sell(user_id, symbol, quantity, quote.price)
        try:
            updated = self._accounts.adjust_balance(
                user_id, outcome.proceeds, -outcome.cost_basis_sold
            )
        except Exception:
            logger.error(
                "Cash credit failed for %s sell of %s; restoring %d shares", user_id, symbol, quantity
            )
            self._ledger.restore_shares(
                user_id, symbol, quantity, outcome.cost_basis_sold, position.first_purchased
            )
            raise

        logger.info(
            "SELL %d %s @ %s for %s, realized %s (stale price: %s)",
            quantity,
            symbol,
            quote.price,
            user_id,
            outcome.realized_pnl,
            quote.is_stale,
        )
        self._log.append(user_id, TransactionType.SELL, symbol, quantity, quote.price, outcome.proceeds)
        self._snapshots.record_snapshot(user_id)

        return SellResult(
            symbol=symbol,
            shares=quantity,
            price=quote.price,
            proceeds=outcome.proceeds,
            profit_loss=outcome.realized_pnl,
            new_balance=updated.cash_balance,
            is_stale_price=quote.is_stale,
        )
