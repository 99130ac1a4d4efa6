# oracles/__init__.py
from core.config import Settings

from .static import StaticOracle
from .yahoo import YahooGoldOracle

ORACLES = {
    "yahoo": YahooGoldOracle,
    "static": StaticOracle,
}


def build_oracle(settings: Settings):
    if settings.oracle not in ORACLES:
        raise ValueError(
            f"Unknown oracle {settings.oracle!r}; expected one of {sorted(ORACLES)}"
        )
    if settings.oracle == "static":
        return StaticOracle(settings.oracle_static_price)
    return YahooGoldOracle(
        url=settings.oracle_url,
        user_agent=settings.oracle_user_agent,
        timeout=settings.oracle_timeout,
        retry_wait=settings.oracle_retry_wait,
        retry_max_wait=settings.oracle_retry_max_wait,
    )
