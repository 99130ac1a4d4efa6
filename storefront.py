import json
import sys
from typing import Any, Dict, List, Mapping, Sequence

from core.config import Settings, load_settings
from core.errors import CatalogUnavailable, InvalidFilter, OracleUnavailable
from core.logger import get_logger
from core.models import Filter, PricedItem
from core.pricing import CatalogEngine
from core.report import build_plaintext_listing
from core.storage import JsonCatalog
from oracles import build_oracle

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Product not found"

USAGE = (
    "usage: storefront.py list [minPrice=N] [maxPrice=N] [minPopularity=N] [maxPopularity=N]\n"
    "       storefront.py get <name>"
)


def build_engine(settings: Settings) -> CatalogEngine:
    return CatalogEngine(
        catalog=JsonCatalog(settings.catalog_path),
        oracle=build_oracle(settings),
    )


def parse_params(args: Sequence[str]) -> Dict[str, str]:
    """Turn ["minPrice=100", "maxPrice=200"] into a query-style dict."""
    params: Dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep or not key:
            raise InvalidFilter(f"expected key=value, got {arg!r}")
        params[key] = value
    return params


def list_products(engine: CatalogEngine, params: Mapping[str, str]) -> List[PricedItem]:
    return engine.list_items(Filter.from_params(params))


def get_product(engine: CatalogEngine, name: str) -> Dict[str, Any]:
    item = engine.get_item_by_name(name)
    if item is None:
        return {"message": NOT_FOUND_MESSAGE}
    return item.to_dict()


def render(payload: Any, items: List[PricedItem] | None, output_format: str) -> str:
    if output_format == "text" and items is not None:
        return build_plaintext_listing(items)
    return json.dumps(payload, indent=2, ensure_ascii=False)


def run(argv: Sequence[str], settings: Settings | None = None) -> int:
    if not argv or argv[0] not in ("list", "get"):
        print(USAGE, file=sys.stderr)
        return 1

    settings = settings or load_settings()
    command, rest = argv[0], list(argv[1:])

    try:
        engine = build_engine(settings)
        if command == "list":
            items = list_products(engine, parse_params(rest))
            out = render([it.to_dict() for it in items], items, settings.output_format)
        else:
            if not rest:
                print(USAGE, file=sys.stderr)
                return 1
            out = render(get_product(engine, " ".join(rest)), None, settings.output_format)
    except ValueError as e:
        logger.error("Invalid request %s: %s", list(argv), e)
        print(json.dumps({"message": str(e)}), file=sys.stderr)
        return 1
    except (OracleUnavailable, CatalogUnavailable) as e:
        logger.error("Request %s failed: %s", list(argv), e)
        print(json.dumps({"message": str(e)}), file=sys.stderr)
        return 2

    print(out)
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(run(sys.argv[1:]))
    except Exception as e:
        logger.exception("Fatal storefront error: %s", e)
        raise SystemExit(2)
