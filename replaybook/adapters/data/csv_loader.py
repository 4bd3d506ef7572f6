import csv
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from pathlib import Path
from typing import List, Union

from ...domain.models import PRICE_SCALE, Price, Trade
from ...infrastructure.logging import get_logger

logger = get_logger(__name__)

MIN_FIELDS = 5


def price_to_ticks(value: str, scale: int = PRICE_SCALE) -> Price:
    """Convert a decimal price string to integer ticks, rounding half away from zero."""

    price = Decimal(value.strip())
    if not price.is_finite():
        raise ValueError(f"Non-finite price: {value!r}")
    return int((price * scale).to_integral_value(rounding=ROUND_HALF_UP))


class TradeCsvLoader:
    """Loads Binance trade dumps: trade_id,price,qty,quote_qty,time,is_buyer_maker.

    Malformed rows are skipped and counted in skipped_rows. A missing file
    raises FileNotFoundError.
    """

    def __init__(self, price_scale: int = PRICE_SCALE) -> None:
        self.price_scale = price_scale
        self.skipped_rows = 0

    def load(self, path: Union[str, Path]) -> List[Trade]:
        trades: List[Trade] = []
        self.skipped_rows = 0

        with Path(path).open(newline="") as handle:
            for line_no, row in enumerate(csv.reader(handle)):
                if line_no == 0 and any("trade_id" in field for field in row):
                    continue
                if not row or all(not field.strip() for field in row):
                    continue
                if len(row) < MIN_FIELDS:
                    self.skipped_rows += 1
                    continue
                try:
                    trades.append(
                        Trade(
                            trade_id=int(row[0]),
                            price=price_to_ticks(row[1], self.price_scale),
                            timestamp=int(row[4]),
                        )
                    )
                except (ValueError, InvalidOperation):
                    self.skipped_rows += 1

        if self.skipped_rows:
            logger.warning("malformed_rows_skipped", path=str(path), skipped=self.skipped_rows)
        return trades
