"""Trade-through matching of open orders against the last trade print."""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional, Set

from ..domain.models import Fill, Order, OrderId, OrderIntent, OrderState, Price
from ..infrastructure.logging import get_logger
from ..ports.execution import ExecutionModel
from ..ports.market_view import MarketView
from .fsm import OrderStateMachine

logger = get_logger(__name__)


class TradeThroughExecution(ExecutionModel):
    """Fills whole orders when the last trade reaches or passes their limit.

    MARKET orders fill at the last trade price. A LIMIT bid fills when the
    trade prints at or below its limit, a LIMIT ask when it prints at or above,
    and in both cases the fill is at the trade price rather than the limit.
    Fills are queued in submission order of the orders that produced them.
    """

    def __init__(self, market_view: MarketView) -> None:
        self._market_view = market_view
        self._next_id: OrderId = 0
        self._open: List[Order] = []
        self._open_by_id: Dict[OrderId, Order] = {}
        self._fills: Deque[Fill] = deque()

    def submit(self, intent: OrderIntent) -> OrderId:
        self._next_id += 1
        order = Order(order_id=self._next_id, intent=intent)
        self._open.append(order)
        self._open_by_id[order.order_id] = order
        logger.debug(
            "order_submitted",
            order_id=order.order_id,
            side=intent.side,
            type=intent.type,
            limit_price=intent.limit_price,
            quantity=intent.quantity,
        )
        return order.order_id

    def on_tick(self) -> None:
        if not self._market_view.has_last():
            return
        last_price = self._market_view.last_price()

        matched: Set[OrderId] = set()
        for order in self._open:
            if self._crosses(order.intent, last_price):
                matched.add(order.order_id)
                self._fill(order, last_price)

        if matched:
            self._open = [order for order in self._open if order.order_id not in matched]
            for order_id in matched:
                del self._open_by_id[order_id]

    def poll_fill(self) -> Optional[Fill]:
        if not self._fills:
            return None
        return self._fills.popleft()

    def open_orders(self) -> List[Order]:
        """Return open orders in submission order."""

        return list(self._open)

    def order_state(self, order_id: OrderId) -> OrderState:
        """Report OPEN or FILLED for any id this model has issued.

        Only open orders are retained. Ids are issued sequentially and orders
        never leave the open set except by filling, so an issued id that is no
        longer open is FILLED.
        """

        order = self._open_by_id.get(order_id)
        if order is not None:
            return order.state
        if 1 <= order_id <= self._next_id:
            return "FILLED"
        raise KeyError(order_id)

    def pending_fills(self) -> int:
        return len(self._fills)

    @staticmethod
    def _crosses(intent: OrderIntent, last_price: Price) -> bool:
        if intent.type == "MARKET":
            return True
        if intent.side == "BID":
            return last_price <= intent.limit_price
        return last_price >= intent.limit_price

    def _fill(self, order: Order, price: Price) -> None:
        OrderStateMachine(order).transition("FILLED")
        fill = Fill(
            order_id=order.order_id,
            side=order.intent.side,
            price=price,
            quantity=order.intent.quantity,
        )
        self._fills.append(fill)
        logger.debug("order_filled", order_id=fill.order_id, side=fill.side, price=fill.price, quantity=fill.quantity)
