import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import tomllib

from .adapters.data.data_manager import BUCKET_MS, DataManager
from .adapters.market.trade_only import TradeOnlyMarketView
from .application.backtest import BacktestRunner
from .application.execution import TradeThroughExecution
from .application.position_tracker import PositionTracker
from .domain.strategy.ma_cross import MovingAverageCrossStrategy
from .infrastructure.logging import LOG_LEVELS

DEFAULT_SETTINGS_PATH = Path("config/settings.toml")


@dataclass
class DataSettings:
    data_dir: str
    symbol: str
    date: str
    granularity: str


@dataclass
class StrategySettings:
    short_window: int
    long_window: int
    order_quantity: int


@dataclass
class LoggingSettings:
    level: str
    json: bool


@dataclass
class Settings:
    data: DataSettings
    strategy: StrategySettings
    logging: LoggingSettings


def load_settings(settings_path: Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load configuration from environment with optional config file defaults."""

    file_settings = _load_file_settings(settings_path)

    granularity = _config_value("REPLAYBOOK_GRANULARITY", file_settings, "data", "granularity", "PER_MINUTE").upper()
    if granularity not in BUCKET_MS:
        raise ValueError(f"Unknown granularity: {granularity}")

    log_level = _config_value("REPLAYBOOK_LOG_LEVEL", file_settings, "logging", "level", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {log_level}")

    return Settings(
        data=DataSettings(
            data_dir=_config_value("REPLAYBOOK_DATA_DIR", file_settings, "data", "dir", "data"),
            symbol=_config_value("REPLAYBOOK_SYMBOL", file_settings, "data", "symbol", "BTCUSDT"),
            date=_config_value("REPLAYBOOK_DATE", file_settings, "data", "date", "2024-01-15"),
            granularity=granularity,
        ),
        strategy=StrategySettings(
            short_window=int(
                _config_value("REPLAYBOOK_SHORT_WINDOW", file_settings, "strategy", "short_window", "5")
            ),
            long_window=int(
                _config_value("REPLAYBOOK_LONG_WINDOW", file_settings, "strategy", "long_window", "20")
            ),
            order_quantity=int(
                _config_value("REPLAYBOOK_ORDER_QUANTITY", file_settings, "strategy", "order_quantity", "1")
            ),
        ),
        logging=LoggingSettings(
            level=log_level,
            json=_parse_bool(_config_value("REPLAYBOOK_LOG_JSON", file_settings, "logging", "json", "false")),
        ),
    )


def _load_file_settings(settings_path: Path) -> Dict[str, Any]:
    if not settings_path.exists():
        return {}

    with settings_path.open("rb") as settings_file:
        return tomllib.load(settings_file)


def _config_value(
    env_key: str, settings: Dict[str, Any], section: str, key: str, default: str
) -> str:
    if env_key in os.environ:
        return os.environ[env_key]

    section_data = settings.get(section, {})
    return str(section_data.get(key, default))


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def build_components(settings: Optional[Settings] = None) -> dict:
    """Construct all backtest components for wiring in main.py."""

    settings = settings or load_settings()
    data_manager = DataManager(data_dir=settings.data.data_dir)
    market_view = TradeOnlyMarketView()
    execution = TradeThroughExecution(market_view)
    tracker = PositionTracker()
    strategy = MovingAverageCrossStrategy(
        short_window=settings.strategy.short_window,
        long_window=settings.strategy.long_window,
        quantity=settings.strategy.order_quantity,
    )
    runner = BacktestRunner(market_view=market_view, execution=execution, tracker=tracker, strategy=strategy)
    return {
        "settings": settings,
        "data_manager": data_manager,
        "market_view": market_view,
        "execution": execution,
        "tracker": tracker,
        "strategy": strategy,
        "runner": runner,
    }
