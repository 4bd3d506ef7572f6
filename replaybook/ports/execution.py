from abc import ABC, abstractmethod
from typing import Optional

from ..domain.models import Fill, OrderId, OrderIntent


class ExecutionModel(ABC):
    """Abstract matching engine driven one market tick at a time."""

    @abstractmethod
    def submit(self, intent: OrderIntent) -> OrderId:
        raise NotImplementedError

    @abstractmethod
    def on_tick(self) -> None:
        """Match open orders against the current market view."""
        raise NotImplementedError

    @abstractmethod
    def poll_fill(self) -> Optional[Fill]:
        """Return the oldest pending fill, or None when the queue is empty."""
        raise NotImplementedError
