# core/models.py
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidFilter

IMAGE_VARIANTS = ("yellow", "rose", "white")

# Reference instrument (gold futures) and its quote unit
SYMBOL = "GC=F"
TROY_OUNCE_GRAMS = 31.1035


@dataclass(frozen=True)
class CatalogItem:
    """
    A ring as stored in the catalog file.
    popularity_score is in [0, 1]; weight is in grams.
    """
    name: str
    popularity_score: float
    weight: float
    images: Dict[str, str] = field(default_factory=dict)

    def __hash__(self):
        return hash((
            self.name,
            self.popularity_score,
            self.weight,
            frozenset(self.images.items()),
        ))

    @property
    def rating(self) -> float:
        return round(self.popularity_score * 5, 1)

    def stars(self) -> tuple[int, int, int]:
        """Return (full, half, empty) star counts out of five."""
        rating = self.popularity_score * 5
        full = math.floor(rating)
        half = 1 if rating - full >= 0.5 else 0
        return full, half, 5 - full - half

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "popularityScore": self.popularity_score,
            "weight": self.weight,
            "images": dict(self.images),
            "rating": self.rating,
        }


@dataclass(frozen=True)
class PricedItem(CatalogItem):
    """A catalog item with a request-time price, rounded to 2 decimals."""
    price: float = 0.0

    def __hash__(self):
        return hash((super().__hash__(), self.price))

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["price"] = self.price
        return out


@dataclass(frozen=True)
class Quote:
    symbol: str
    ounce_price: float
    unit_price: float
    source: str
    fetched_at: str


FILTER_PARAMS = {
    "minPrice": "min_price",
    "maxPrice": "max_price",
    "minPopularity": "min_popularity",
    "maxPopularity": "max_popularity",
}


@dataclass(frozen=True)
class Filter:
    """
    Independent inclusive bounds; a bound left as None imposes no constraint.
    Price bounds compare against the already rounded price.
    """
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_popularity: Optional[float] = None
    max_popularity: Optional[float] = None

    def __post_init__(self):
        for attr in FILTER_PARAMS.values():
            value = getattr(self, attr)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidFilter(f"{attr} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidFilter(f"{attr} must be finite, got {value!r}")

    @classmethod
    def from_params(cls, params: Mapping[str, Optional[str]]) -> "Filter":
        """
        Build a Filter from query-style parameters (minPrice, maxPrice,
        minPopularity, maxPopularity). Missing or empty values are absent.
        """
        bounds: Dict[str, float] = {}
        for key, attr in FILTER_PARAMS.items():
            raw = params.get(key)
            if raw is None or str(raw).strip() == "":
                continue
            try:
                bounds[attr] = float(str(raw).strip())
            except ValueError:
                raise InvalidFilter(f"{key} is not a number: {raw!r}") from None
        return cls(**bounds)

    def is_empty(self) -> bool:
        return all(getattr(self, attr) is None for attr in FILTER_PARAMS.values())

    def matches(self, item: PricedItem) -> bool:
        if self.min_price is not None and item.price < self.min_price:
            return False
        if self.max_price is not None and item.price > self.max_price:
            return False
        if self.min_popularity is not None and item.popularity_score < self.min_popularity:
            return False
        if self.max_popularity is not None and item.popularity_score > self.max_popularity:
            return False
        return True
