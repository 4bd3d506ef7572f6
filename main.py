import sys

from replaybook import config
from replaybook.adapters.data.data_manager import DataFileNotFound, DataManager
from replaybook.application.backtest import BacktestRunner
from replaybook.domain.models import to_currency
from replaybook.infrastructure.logging import configure_logging, get_logger

logger = get_logger(__name__)


def run() -> int:
    settings = config.load_settings()
    configure_logging(settings.logging.level, json=settings.logging.json)

    components = config.build_components(settings)
    data_manager: DataManager = components["data_manager"]
    runner: BacktestRunner = components["runner"]

    try:
        trades = data_manager.load_day(
            settings.data.symbol,
            settings.data.date,
            settings.data.granularity,
        )
    except DataFileNotFound as exc:
        logger.error("data_unavailable", error=str(exc))
        return 1

    if not trades:
        logger.warning("no_trades", symbol=settings.data.symbol, date=settings.data.date)
        return 0

    stats = data_manager.last_load_stats()
    logger.info(
        "replay_starting",
        trades=stats.sampled_trade_count,
        sampling_ratio=stats.sampling_ratio,
        low=to_currency(min(t.price for t in trades)),
        high=to_currency(max(t.price for t in trades)),
    )
    runner.run(trades)
    return 0


if __name__ == "__main__":
    sys.exit(run())
