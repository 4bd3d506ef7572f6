from ...domain.models import Price
from ...domain.order_book import OrderBook
from ...ports.market_view import MarketView


class BookMarketView(MarketView):
    """Market view reading top of book from an OrderBook it does not own."""

    def __init__(self, book: OrderBook) -> None:
        self._book = book
        self._has_last = False
        self._last: Price = 0

    def on_trade(self, price: Price) -> None:
        self._last = price
        self._has_last = True

    def has_top(self) -> bool:
        return self._book.has_bid() and self._book.has_ask()

    def best_bid(self) -> Price:
        return self._book.best_bid()

    def best_ask(self) -> Price:
        return self._book.best_ask()

    def has_last(self) -> bool:
        return self._has_last

    def last_price(self) -> Price:
        return self._last
