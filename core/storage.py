# core/storage.py
import json
import math
from typing import Any, List

from .errors import CatalogUnavailable, MalformedCatalogRecord
from .logger import get_logger
from .models import IMAGE_VARIANTS, CatalogItem

logger = get_logger(__name__)


def _number(raw: dict, key: str, index: int) -> float:
    if key not in raw or raw[key] is None:
        raise MalformedCatalogRecord(index, f"missing '{key}'")
    value = raw[key]
    # bool is an int subclass; true/false in the file is never a valid number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedCatalogRecord(index, f"'{key}' is not a number: {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise MalformedCatalogRecord(index, f"'{key}' is not finite: {value!r}")
    return value


def parse_record(raw: Any, index: int = 0) -> CatalogItem:
    """
    Validate one raw catalog record and build a CatalogItem from it.
    Raises MalformedCatalogRecord naming the first problem found.
    """
    if not isinstance(raw, dict):
        raise MalformedCatalogRecord(index, f"expected an object, got {type(raw).__name__}")

    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise MalformedCatalogRecord(index, "missing 'name'")

    popularity = _number(raw, "popularityScore", index)
    if not 0.0 <= popularity <= 1.0:
        raise MalformedCatalogRecord(index, f"'popularityScore' out of [0, 1]: {popularity}")

    weight = _number(raw, "weight", index)
    if weight <= 0:
        raise MalformedCatalogRecord(index, f"'weight' must be positive: {weight}")

    raw_images = raw.get("images")
    if raw_images is None:
        raw_images = {}
    if not isinstance(raw_images, dict):
        raise MalformedCatalogRecord(index, "'images' must be an object")

    images = {}
    for variant, locator in raw_images.items():
        if variant not in IMAGE_VARIANTS:
            logger.debug("Dropping unknown image variant %r on record %d", variant, index)
            continue
        if locator is None or locator == "":
            continue
        if not isinstance(locator, str):
            raise MalformedCatalogRecord(index, f"image '{variant}' is not a string")
        images[variant] = locator

    return CatalogItem(
        name=name.strip(),
        popularity_score=popularity,
        weight=weight,
        images=images,
    )


class JsonCatalog:
    """
    Read-only view over a JSON file holding a list of catalog records.
    The file is re-read on every call to load_items().
    """

    def __init__(self, path: str):
        self.path = path

    def _read_raw(self) -> list:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.error("Catalog file not found at %s", self.path)
            raise CatalogUnavailable(f"catalog file not found: {self.path}") from None
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load catalog at %s: %s", self.path, e)
            raise CatalogUnavailable(f"catalog file unreadable: {self.path}") from e

        if not isinstance(data, list):
            logger.error("Catalog at %s must be a JSON list of records.", self.path)
            raise CatalogUnavailable(f"catalog is not a list: {self.path}")
        return data

    def load_items(self) -> List[CatalogItem]:
        """Return valid records in file order; malformed ones are logged and skipped."""
        items: List[CatalogItem] = []
        skipped = 0
        for index, raw in enumerate(self._read_raw()):
            try:
                items.append(parse_record(raw, index))
            except MalformedCatalogRecord as e:
                skipped += 1
                logger.error("Skipping malformed catalog record in %s: %s", self.path, e)

        logger.debug(
            "Loaded %d catalog items from %s (%d skipped).",
            len(items), self.path, skipped,
        )
        return items
