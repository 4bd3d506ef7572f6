from collections import deque
from typing import Deque, List, Optional

from ..models import Fill, OrderIntent, Side, Trade
from .base import StrategyBase


class MovingAverageCrossStrategy(StrategyBase):
    """Moving average crossover that trades on each change of regime.

    A short average above the long one is a BID regime, below it an ASK
    regime. A MARKET order is submitted only when the regime flips, so
    orders never stack while the regime holds.
    """

    def __init__(self, short_window: int = 5, long_window: int = 20, quantity: int = 1) -> None:
        super().__init__()
        if short_window >= long_window:
            raise ValueError("short_window must be smaller than long_window")
        self.short_window = short_window
        self.long_window = long_window
        self.quantity = quantity
        self._short: Deque[int] = deque(maxlen=short_window)
        self._long: Deque[int] = deque(maxlen=long_window)
        self._regime: Optional[Side] = None
        self.fills: List[Fill] = []

    def on_trade(self, trade: Trade) -> None:
        self._short.append(trade.price)
        self._long.append(trade.price)
        if len(self._long) < self.long_window:
            return
        short_avg = sum(self._short) / len(self._short)
        long_avg = sum(self._long) / len(self._long)
        if short_avg == long_avg:
            return
        regime: Side = "BID" if short_avg > long_avg else "ASK"
        if regime == self._regime:
            return
        if self.execution is None:
            raise RuntimeError("execution model must be set before replaying trades")

        # first signal opens, later flips close and reverse
        quantity = self.quantity if self._regime is None else 2 * self.quantity
        self._regime = regime
        self.execution.submit(OrderIntent(side=regime, type="MARKET", limit_price=0, quantity=quantity))

    def on_fill(self, fill: Fill) -> None:
        self.fills.append(fill)
