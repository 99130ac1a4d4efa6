# oracles/yahoo.py
import datetime
import math
import time
from typing import Iterable

import pytz
import requests
from bs4 import BeautifulSoup
from bs4.element import Tag
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from core.config import DEFAULT_ORACLE_URL, DEFAULT_USER_AGENT
from core.errors import OracleUnavailable
from core.logger import get_logger
from core.models import SYMBOL, TROY_OUNCE_GRAMS, Quote

logger = get_logger(__name__)

# One initial attempt plus a single retry for transport errors
MAX_ATTEMPTS = 2

QUOTE_SELECTORS = (
    f'fin-streamer[data-symbol="{SYMBOL}"][data-field="regularMarketPrice"]',
    '[data-testid="qsp-price"]',
)


def _select_first(root: Tag | BeautifulSoup, selectors: Iterable[str]) -> Tag | None:
    """Select the first tag that matches any of the given CSS selectors."""
    for sel in selectors:
        found = root.select_one(sel)
        if found is not None:
            return found
    return None


def parse_price_text(text: str) -> float:
    """
    Turn a displayed quote like "2,345.60" into a float.
    Raises OracleUnavailable for empty, non-numeric or non-positive values.
    """
    cleaned = (text or "").strip().replace(",", "")
    if not cleaned:
        raise OracleUnavailable("quote value is empty")
    try:
        value = float(cleaned)
    except ValueError:
        raise OracleUnavailable(f"quote value is not a number: {text!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise OracleUnavailable(f"quote value out of range: {text!r}")
    return value


def extract_ounce_price(html: str) -> float:
    """Locate the regular market price on a Yahoo quote page."""
    soup = BeautifulSoup(html, "html.parser")
    el = _select_first(soup, QUOTE_SELECTORS)
    if el is None:
        raise OracleUnavailable(f"no quote element for {SYMBOL} on page")

    text = el.get_text(strip=True)
    if not text:
        data_value = el.get("data-value")
        text = data_value if isinstance(data_value, str) else ""
    return parse_price_text(text)


class YahooGoldOracle:
    """Gold price per gram, scraped from the Yahoo Finance GC=F quote page."""

    name = "yahoo"

    def __init__(
        self,
        url: str = DEFAULT_ORACLE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
        retry_wait: float = 1.0,
        retry_max_wait: float = 5.0,
        session: requests.Session | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.retry_wait = retry_wait
        self.retry_max_wait = retry_max_wait
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept-Language": "en-US,en;q=0.9",
        })

    def _fetch(self) -> str:
        # requests' timeout bounds each socket wait; the deadline bounds the whole body
        logger.debug("Fetching quote page: %s", self.url)
        deadline = time.monotonic() + self.timeout
        with self.session.get(self.url, timeout=self.timeout, stream=True) as r:
            r.raise_for_status()
            chunks = []
            for chunk in r.iter_content(chunk_size=16384):
                if time.monotonic() > deadline:
                    raise requests.Timeout(
                        f"quote page not received within {self.timeout}s"
                    )
                chunks.append(chunk)
            encoding = r.encoding or "utf-8"
        return b"".join(chunks).decode(encoding, errors="replace")

    def _fetch_with_retry(self) -> str:
        retrying = Retrying(
            stop=stop_after_attempt(MAX_ATTEMPTS),
            wait=wait_exponential_jitter(multiplier=self.retry_wait, max=self.retry_max_wait),
            retry=retry_if_exception_type(requests.RequestException),
        )
        return retrying(self._fetch)

    def fetch_quote(self) -> Quote:
        try:
            html = self._fetch_with_retry()
        except RetryError as e:
            cause = e.last_attempt.exception()
            logger.error(
                "Gold quote fetch failed for %s after %d attempts: %s",
                self.url, MAX_ATTEMPTS, cause,
            )
            raise OracleUnavailable(f"quote fetch failed: {cause}") from cause

        try:
            ounce_price = extract_ounce_price(html)
        except OracleUnavailable as e:
            logger.error("Gold quote scraping failed for %s: %s", self.url, e)
            raise

        quote = Quote(
            symbol=SYMBOL,
            ounce_price=ounce_price,
            unit_price=ounce_price / TROY_OUNCE_GRAMS,
            source=self.name,
            fetched_at=datetime.datetime.now(tz=pytz.UTC).isoformat(),
        )
        logger.info(
            "Gold quote %s: %.2f per oz (%.4f per gram).",
            SYMBOL, quote.ounce_price, quote.unit_price,
        )
        return quote

    def fetch_unit_price(self) -> float:
        return self.fetch_quote().unit_price
