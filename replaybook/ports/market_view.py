from abc import ABC, abstractmethod

from ..domain.models import Price


class MarketView(ABC):
    """Read-only view of current market state.

    The price accessors are only meaningful while the matching has_* guard
    returns True.
    """

    @abstractmethod
    def has_top(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def best_bid(self) -> Price:
        raise NotImplementedError

    @abstractmethod
    def best_ask(self) -> Price:
        raise NotImplementedError

    @abstractmethod
    def has_last(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def last_price(self) -> Price:
        raise NotImplementedError
