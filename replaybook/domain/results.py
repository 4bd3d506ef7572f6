from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class BacktestResults:
    """Summary of a single backtest run. Money fields are in currency units."""

    total_pnl: float = 0.0
    realized_pnl: float = 0.0
    unrealized_pnl: float = 0.0

    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0

    max_drawdown: float = 0.0
    max_position: int = 0

    start_timestamp: int = 0
    end_timestamp: int = 0

    def record_close(self, realized: float) -> None:
        if realized > 0:
            self.winning_trades += 1
        elif realized < 0:
            self.losing_trades += 1
        closed = self.winning_trades + self.losing_trades
        self.win_rate = 100.0 * self.winning_trades / closed if closed else 0.0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
