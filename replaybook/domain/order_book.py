"""Price-level order book with eagerly cached best bid and ask."""

from __future__ import annotations

import operator
from typing import List, Optional, Tuple

from sortedcontainers import SortedDict

from .models import NO_ASK, NO_BID, Price, Quantity, Side


class OrderBook:
    """Two sorted price -> quantity ledgers, bids best-first descending, asks ascending.

    Every stored quantity is strictly positive. A level whose quantity drops to
    zero or below is deleted, never kept. Best prices are recomputed after each
    mutation so reads are always current; an empty side reports NO_BID / NO_ASK.
    """

    def __init__(self) -> None:
        self._bids: SortedDict = SortedDict(operator.neg)
        self._asks: SortedDict = SortedDict()
        self._best_bid: Price = NO_BID
        self._best_ask: Price = NO_ASK

    def clear(self) -> None:
        self._bids.clear()
        self._asks.clear()
        self._update_best_levels()

    def set_level(self, side: Side, price: Price, quantity: Quantity) -> None:
        """Overwrite a level to a snapshot quantity; quantity <= 0 removes it."""

        levels = self._ledger(side)
        if quantity <= 0:
            levels.pop(price, None)
        else:
            levels[price] = quantity
        self._update_best_levels()

    def add_level(self, side: Side, price: Price, delta: Quantity) -> None:
        """Increase a level by delta, creating it if missing. delta <= 0 is ignored."""

        if delta <= 0:
            return
        levels = self._ledger(side)
        levels[price] = levels.get(price, 0) + delta
        self._update_best_levels()

    def remove_level(self, side: Side, price: Price, delta: Quantity) -> None:
        """Decrease a level by delta, deleting it when nothing positive remains."""

        if delta <= 0:
            return
        levels = self._ledger(side)
        if price in levels:
            remaining = levels[price] - delta
            if remaining <= 0:
                del levels[price]
            else:
                levels[price] = remaining
        self._update_best_levels()

    def best_bid(self) -> Price:
        return self._best_bid

    def best_ask(self) -> Price:
        return self._best_ask

    def has_bid(self) -> bool:
        return bool(self._bids)

    def has_ask(self) -> bool:
        return bool(self._asks)

    def level_qty(self, side: Side, price: Price) -> Quantity:
        return self._ledger(side).get(price, 0)

    def depth(self, side: Side) -> List[Tuple[Price, Quantity]]:
        """Return (price, quantity) pairs for one side, best level first."""

        return list(self._ledger(side).items())

    def spread(self) -> Optional[Price]:
        if not self._bids or not self._asks:
            return None
        return self._best_ask - self._best_bid

    def is_crossed(self) -> bool:
        return bool(self._bids) and bool(self._asks) and self._best_bid >= self._best_ask

    def _ledger(self, side: Side) -> SortedDict:
        return self._bids if side == "BID" else self._asks

    def _update_best_levels(self) -> None:
        self._best_bid = self._bids.peekitem(0)[0] if self._bids else NO_BID
        self._best_ask = self._asks.peekitem(0)[0] if self._asks else NO_ASK
