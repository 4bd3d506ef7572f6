"""Position tracking and P&L calculation utilities."""

from __future__ import annotations

from ..domain.models import PRICE_SCALE, Fill, Position, Price, Quantity, to_currency
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)


class PositionTracker:
    """Tracks a single net position and its P&L from a stream of fills.

    Prices stay in integer ticks internally; P&L figures are converted to
    currency units only when read.
    """

    def __init__(self, price_scale: int = PRICE_SCALE) -> None:
        self._position = Position()
        self._price_scale = price_scale

    def on_fill(self, fill: Fill) -> float:
        """Ingest a Fill, update the position and return the P&L it realized."""

        realized = self._position.apply_fill(fill.side, fill.quantity, fill.price)
        logger.debug(
            "position_updated",
            order_id=fill.order_id,
            position=self._position.quantity,
            avg_entry_price=self._position.average_price,
            realized=to_currency(realized, self._price_scale),
        )
        return to_currency(realized, self._price_scale)

    def position(self) -> Quantity:
        return self._position.quantity

    def avg_entry_price(self) -> Price:
        """Weighted average entry in ticks. Meaningless while flat."""

        return self._position.average_price

    def realized_pnl(self) -> float:
        """Return realized P&L accumulated from closed quantities."""

        return to_currency(self._position.realized_ticks, self._price_scale)

    def unrealized_pnl(self, current_price: Price) -> float:
        """Return mark-to-market P&L of the open position at current_price."""

        quantity = self._position.quantity
        if quantity == 0:
            return 0.0
        entry = self._position.average_price
        if quantity > 0:
            ticks = (current_price - entry) * quantity
        else:
            ticks = (entry - current_price) * abs(quantity)
        return to_currency(ticks, self._price_scale)

    def total_pnl(self, current_price: Price) -> float:
        return self.realized_pnl() + self.unrealized_pnl(current_price)
