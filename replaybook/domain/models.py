from dataclasses import dataclass
from typing import Literal


Side = Literal["BID", "ASK"]
OrderType = Literal["MARKET", "LIMIT"]
OrderState = Literal["OPEN", "FILLED"]

# Prices and quantities are fixed-point integer ticks.
Price = int
Quantity = int
OrderId = int

PRICE_SCALE = 100

NO_BID: Price = -(2**63)
NO_ASK: Price = 2**63 - 1


def div_trunc(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""

    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def to_currency(ticks: int, scale: int = PRICE_SCALE) -> float:
    """Convert a tick amount to currency units for display."""

    return ticks / scale


@dataclass(frozen=True)
class Trade:
    """A single market print from historical data."""

    trade_id: int
    price: Price
    timestamp: int


@dataclass(frozen=True)
class OrderIntent:
    """What a strategy wants to trade. limit_price is ignored for MARKET."""

    side: Side
    type: OrderType
    limit_price: Price
    quantity: Quantity


@dataclass
class Order:
    """An accepted order owned by an execution model."""

    order_id: OrderId
    intent: OrderIntent
    state: OrderState = "OPEN"


@dataclass(frozen=True)
class Fill:
    order_id: OrderId
    side: Side
    price: Price
    quantity: Quantity


@dataclass
class Position:
    """Net position with weighted-average-cost basis, all in ticks."""

    quantity: Quantity = 0
    average_price: Price = 0
    realized_ticks: int = 0

    def apply_fill(self, side: Side, quantity: Quantity, price: Price) -> int:
        """Update the position with a fill and return the realized ticks it produced."""
        delta = quantity if side == "BID" else -quantity
        closing = (self.quantity > 0 and delta < 0) or (self.quantity < 0 and delta > 0)

        if not closing:
            if self.quantity == 0:
                self.average_price = price
            else:
                old_qty = abs(self.quantity)
                total_cost = self.average_price * old_qty + price * quantity
                self.average_price = div_trunc(total_cost, old_qty + quantity)
            self.quantity += delta
            return 0

        closed = min(abs(self.quantity), abs(delta))
        if self.quantity > 0:
            realized = (price - self.average_price) * closed
        else:
            realized = (self.average_price - price) * closed
        self.realized_ticks += realized

        self.quantity += delta
        if self.quantity == 0:
            self.average_price = 0
        elif (self.quantity > 0) == (delta > 0):
            # flipped through flat; the remainder opened at this fill's price
            self.average_price = price
        return realized
