from abc import ABC, abstractmethod
from typing import Optional

from ...ports.execution import ExecutionModel
from ..models import Fill, Trade


class StrategyBase(ABC):
    """Base class for strategies driven by a backtest replay."""

    def __init__(self) -> None:
        self.execution: Optional[ExecutionModel] = None

    def set_execution_model(self, execution: ExecutionModel) -> None:
        self.execution = execution

    def initialize(self) -> None:
        """Called once before the first trade."""

    @abstractmethod
    def on_trade(self, trade: Trade) -> None:
        """Process an incoming trade print, optionally submitting orders."""
        raise NotImplementedError

    @abstractmethod
    def on_fill(self, fill: Fill) -> None:
        raise NotImplementedError

    def finalize(self) -> None:
        """Called once after the last trade."""
