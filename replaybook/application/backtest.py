"""Sequential trade replay through execution and position tracking."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from ..domain.models import Price, Trade
from ..domain.results import BacktestResults
from ..domain.strategy.base import StrategyBase
from ..infrastructure.logging import get_logger
from ..ports.execution import ExecutionModel
from .position_tracker import PositionTracker

logger = get_logger(__name__)


class TradeFedMarketView(Protocol):
    def on_trade(self, price: Price) -> None:
        ...


class BacktestRunner:
    """Replays trades one at a time in a fixed order.

    Per trade: update the market view, match, drain fills FIFO into the
    tracker and strategy, then let the strategy react. Orders the strategy
    submits on a trade can only fill on a later trade.
    """

    def __init__(
        self,
        market_view: TradeFedMarketView,
        execution: ExecutionModel,
        tracker: PositionTracker,
        strategy: Optional[StrategyBase] = None,
    ) -> None:
        self.market_view = market_view
        self.execution = execution
        self.tracker = tracker
        self.strategy = strategy
        if strategy is not None:
            strategy.set_execution_model(execution)

    def run(self, trades: Iterable[Trade]) -> BacktestResults:
        results = BacktestResults()
        peak_equity: Optional[float] = None
        last_trade: Optional[Trade] = None

        if self.strategy is not None:
            self.strategy.initialize()

        for trade in trades:
            if last_trade is None:
                results.start_timestamp = trade.timestamp
            last_trade = trade

            self.market_view.on_trade(trade.price)
            self.execution.on_tick()
            self._drain_fills(results)

            if self.strategy is not None:
                self.strategy.on_trade(trade)

            equity = self.tracker.total_pnl(trade.price)
            if peak_equity is None or equity > peak_equity:
                peak_equity = equity
            results.max_drawdown = max(results.max_drawdown, peak_equity - equity)

        if self.strategy is not None:
            self.strategy.finalize()

        results.realized_pnl = self.tracker.realized_pnl()
        if last_trade is not None:
            results.end_timestamp = last_trade.timestamp
            results.unrealized_pnl = self.tracker.unrealized_pnl(last_trade.price)
        results.total_pnl = results.realized_pnl + results.unrealized_pnl

        logger.info("backtest_complete", **results.as_dict())
        return results

    def _drain_fills(self, results: BacktestResults) -> None:
        while True:
            fill = self.execution.poll_fill()
            if fill is None:
                return
            realized = self.tracker.on_fill(fill)
            results.total_trades += 1
            results.max_position = max(results.max_position, abs(self.tracker.position()))
            if realized != 0.0:
                results.record_close(realized)
            if self.strategy is not None:
                self.strategy.on_fill(fill)
