# oracles/static.py
import datetime
import math

import pytz

from core.errors import OracleUnavailable
from core.logger import get_logger
from core.models import SYMBOL, TROY_OUNCE_GRAMS, Quote

logger = get_logger(__name__)


class StaticOracle:
    """
    Fixed per-ounce price, for offline runs.
    Behaves like a live source: a missing or bad price fails every fetch.
    """

    name = "static"

    def __init__(self, ounce_price: float | None):
        self.ounce_price = ounce_price

    def fetch_quote(self) -> Quote:
        price = self.ounce_price
        if price is None or not math.isfinite(price) or price <= 0:
            logger.error("Static oracle has no usable price: %r", price)
            raise OracleUnavailable(f"static price not usable: {price!r}")

        return Quote(
            symbol=SYMBOL,
            ounce_price=price,
            unit_price=price / TROY_OUNCE_GRAMS,
            source=self.name,
            fetched_at=datetime.datetime.now(tz=pytz.UTC).isoformat(),
        )

    def fetch_unit_price(self) -> float:
        return self.fetch_quote().unit_price
