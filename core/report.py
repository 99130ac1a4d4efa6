from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from core.models import PricedItem

# Resolve template directory relative to this file
TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)))


def _price_to_str(price: float) -> str:
    return f"${price:,.2f} USD"


def _stars_to_str(item: PricedItem) -> str:
    full, half, empty = item.stars()
    return "*" * full + "+" * half + "." * empty


def build_plaintext_listing(items: List[PricedItem]) -> str:
    template = env.get_template("catalog.txt")

    rows = [
        {
            "name": it.name,
            "price": _price_to_str(it.price),
            "weight": f"{it.weight:g} g",
            "stars": _stars_to_str(it),
            "rating": f"{it.rating:.1f}/5",
            "variants": ", ".join(sorted(it.images)) or "-",
        }
        for it in items
    ]

    return template.render(items=rows, count=len(rows))
