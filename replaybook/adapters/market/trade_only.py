from ...domain.models import Price
from ...ports.market_view import MarketView


class TradeOnlyMarketView(MarketView):
    """Market view built from trade prints alone.

    With no quotes available, best bid and ask both approximate to the last
    trade price.
    """

    def __init__(self) -> None:
        self._has_last = False
        self._last: Price = 0

    def on_trade(self, price: Price) -> None:
        self._last = price
        self._has_last = True

    def has_top(self) -> bool:
        return self._has_last

    def best_bid(self) -> Price:
        return self._last

    def best_ask(self) -> Price:
        return self._last

    def has_last(self) -> bool:
        return self._has_last

    def last_price(self) -> Price:
        return self._last
