"""Locating, loading and time-bucket sampling of daily trade files."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

from ...domain.models import Trade
from ...infrastructure.logging import get_logger
from .csv_loader import TradeCsvLoader

logger = get_logger(__name__)

Granularity = Literal["RAW", "PER_SECOND", "PER_MINUTE", "PER_HOUR", "PER_DAY"]

BUCKET_MS: Dict[str, Optional[int]] = {
    "RAW": None,
    "PER_SECOND": 1_000,
    "PER_MINUTE": 60 * 1_000,
    "PER_HOUR": 60 * 60 * 1_000,
    "PER_DAY": 24 * 60 * 60 * 1_000,
}

DOWNLOAD_URL = "https://data.binance.vision/data/spot/daily/trades"


class DataFileNotFound(FileNotFoundError):
    """Raised when no trade file exists for the requested symbol and day."""


@dataclass(frozen=True)
class LoadStats:
    raw_trade_count: int = 0
    sampled_trade_count: int = 0
    sampling_ratio: float = 0.0


def sample_trades(trades: List[Trade], granularity: str) -> List[Trade]:
    """Keep the first trade of every time bucket of the given granularity."""

    if granularity not in BUCKET_MS:
        raise ValueError(f"Unknown granularity: {granularity}")
    interval = BUCKET_MS[granularity]
    if interval is None:
        return list(trades)

    sampled: List[Trade] = []
    last_bucket: Optional[int] = None
    for trade in trades:
        bucket = trade.timestamp // interval
        if bucket != last_bucket:
            sampled.append(trade)
            last_bucket = bucket
    return sampled


class DataManager:
    """Loads one symbol-day of trades from <data_dir>/<SYMBOL>/trades-<date>.csv."""

    def __init__(self, data_dir: Union[str, Path] = "data", loader: Optional[TradeCsvLoader] = None) -> None:
        self.data_dir = Path(data_dir)
        self.loader = loader or TradeCsvLoader()
        self._last_stats = LoadStats()

    def get_file_path(self, symbol: str, date: str) -> Path:
        return self.data_dir / symbol / f"trades-{date}.csv"

    def has_data(self, symbol: str, date: str) -> bool:
        return self.get_file_path(symbol, date).exists()

    def load_day(self, symbol: str, date: str, granularity: Granularity = "PER_MINUTE") -> List[Trade]:
        path = self.get_file_path(symbol, date)
        if not path.exists():
            raise DataFileNotFound(
                f"Data file not found: {path}. "
                f"Download it from {DOWNLOAD_URL}/{symbol}/{symbol}-trades-{date}.zip"
            )

        raw = self.loader.load(path)
        sampled = sample_trades(raw, granularity)
        self._last_stats = LoadStats(
            raw_trade_count=len(raw),
            sampled_trade_count=len(sampled),
            sampling_ratio=len(sampled) / len(raw) if raw else 0.0,
        )
        logger.info(
            "trades_loaded",
            symbol=symbol,
            date=date,
            granularity=granularity,
            raw=len(raw),
            sampled=len(sampled),
        )
        return sampled

    def last_load_stats(self) -> LoadStats:
        return self._last_stats
