# core/pricing.py
from typing import List, Optional, Protocol

from .logger import get_logger
from .models import CatalogItem, Filter, PricedItem

logger = get_logger(__name__)


class Oracle(Protocol):
    def fetch_unit_price(self) -> float: ...


class CatalogSource(Protocol):
    def load_items(self) -> List[CatalogItem]: ...


def derive_price(item: CatalogItem, unit_price: float) -> PricedItem:
    """price = (popularity + 1) * weight * unit_price, rounded to cents."""
    price = round((item.popularity_score + 1) * item.weight * unit_price, 2)
    return PricedItem(
        name=item.name,
        popularity_score=item.popularity_score,
        weight=item.weight,
        images=dict(item.images),
        price=price,
    )


class CatalogEngine:
    """
    Prices and filters the catalog against a fresh oracle quote per call.
    Holds no state between calls beyond its two collaborators.
    """

    def __init__(self, catalog: CatalogSource, oracle: Oracle):
        self.catalog = catalog
        self.oracle = oracle

    def list_items(self, filter: Optional[Filter] = None) -> List[PricedItem]:
        # OracleUnavailable propagates before the catalog is read
        unit_price = self.oracle.fetch_unit_price()
        priced = [derive_price(it, unit_price) for it in self.catalog.load_items()]

        if filter is None or filter.is_empty():
            logger.info("Listing %d items at %.4f per gram.", len(priced), unit_price)
            return priced

        result = [it for it in priced if filter.matches(it)]
        logger.info(
            "Listing %d of %d items at %.4f per gram (filter=%s).",
            len(result), len(priced), unit_price, filter,
        )
        return result

    def find_item(self, name: str) -> Optional[CatalogItem]:
        """Case-insensitive exact name match without pricing; first match wins."""
        wanted = name.casefold()
        for item in self.catalog.load_items():
            if item.name.casefold() == wanted:
                return item
        return None

    def get_item_by_name(self, name: str) -> Optional[PricedItem]:
        item = self.find_item(name)
        if item is None:
            logger.info("No catalog item named %r.", name)
            return None
        return derive_price(item, self.oracle.fetch_unit_price())
