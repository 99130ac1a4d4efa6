# core/config.py
import os
from dataclasses import dataclass
from typing import Optional

from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_CATALOG_PATH = "data/products.json"
DEFAULT_ORACLE = "yahoo"
DEFAULT_ORACLE_URL = "https://finance.yahoo.com/quote/GC=F/"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class Settings:
    """
    Everything the storefront needs to build an engine.
    Built once per process by load_settings(); nothing reads the
    environment after that.
    """
    catalog_path: str = DEFAULT_CATALOG_PATH
    oracle: str = DEFAULT_ORACLE
    oracle_url: str = DEFAULT_ORACLE_URL
    oracle_user_agent: str = DEFAULT_USER_AGENT
    oracle_timeout: float = 10.0
    oracle_retry_wait: float = 1.0
    oracle_retry_max_wait: float = 5.0
    oracle_static_price: Optional[float] = None
    output_format: str = "json"


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r; using default %s", name, raw, default)
        return default


def load_settings() -> Settings:
    output_format = os.getenv("OUTPUT_FORMAT", "json").strip().lower()
    if output_format not in ("json", "text"):
        logger.warning("Unknown OUTPUT_FORMAT=%r; falling back to json", output_format)
        output_format = "json"

    timeout = _env_float("ORACLE_TIMEOUT", 10.0)
    if timeout is None or timeout <= 0:
        logger.warning("ORACLE_TIMEOUT must be positive; using 10s")
        timeout = 10.0

    return Settings(
        catalog_path=os.getenv("CATALOG_PATH", DEFAULT_CATALOG_PATH).strip(),
        oracle=os.getenv("ORACLE", DEFAULT_ORACLE).strip().lower(),
        oracle_url=os.getenv("ORACLE_URL", DEFAULT_ORACLE_URL).strip(),
        oracle_user_agent=os.getenv("ORACLE_USER_AGENT", DEFAULT_USER_AGENT),
        oracle_timeout=timeout,
        oracle_retry_wait=_env_float("ORACLE_RETRY_WAIT", 1.0),
        oracle_retry_max_wait=_env_float("ORACLE_RETRY_MAX_WAIT", 5.0),
        oracle_static_price=_env_float("ORACLE_STATIC_PRICE", None),
        output_format=output_format,
    )
