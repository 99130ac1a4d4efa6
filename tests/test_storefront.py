import json

import pytest

import storefront
from core.config import Settings
from core.pricing import CatalogEngine
from tests.fakes import FakeCatalog, FakeOracle, item

# 3110.35 / 31.1035 is 100 per gram
OUNCE_PRICE = 3110.35

CATALOG = [
    {"name": "Aurora", "popularityScore": 0.5, "weight": 2.0, "images": {"yellow": "a.jpg"}},
    {"name": "Solitaire", "popularityScore": 0.9, "weight": 1.0},
    {"name": "Broken", "weight": 1.0},
]


@pytest.fixture
def settings(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return Settings(
        catalog_path=str(path),
        oracle="static",
        oracle_static_price=OUNCE_PRICE,
    )


def test_parse_params():
    assert storefront.parse_params(["minPrice=10", "maxPrice="]) == {
        "minPrice": "10",
        "maxPrice": "",
    }
    with pytest.raises(ValueError):
        storefront.parse_params(["minPrice"])


def test_list_products_applies_query_filter():
    engine = CatalogEngine(FakeCatalog([item("Aurora", 0.5, 2.0)]), FakeOracle(60.0))
    assert storefront.list_products(engine, {"minPrice": "200"}) == []
    [found] = storefront.list_products(engine, {"maxPrice": "200", "minPopularity": ""})
    assert found.name == "Aurora"


def test_get_product_not_found_message():
    engine = CatalogEngine(FakeCatalog([item("Aurora")]), FakeOracle())
    assert storefront.get_product(engine, "Halo") == {"message": storefront.NOT_FOUND_MESSAGE}
    assert storefront.get_product(engine, "aurora")["price"] == 180.0


def test_run_list_prints_json(settings, capsys):
    assert storefront.run(["list", "minPrice=250"], settings) == 0
    out = json.loads(capsys.readouterr().out)

    assert [p["name"] for p in out] == ["Aurora"]
    assert out[0]["price"] == pytest.approx(300.0, abs=0.01)
    assert out[0]["popularityScore"] == 0.5
    assert out[0]["images"] == {"yellow": "a.jpg"}


def test_run_get_is_case_insensitive(settings, capsys):
    assert storefront.run(["get", "SOLITAIRE"], settings) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["name"] == "Solitaire"
    assert out["price"] == pytest.approx(190.0, abs=0.01)


def test_run_get_not_found_is_not_an_error(settings, capsys):
    assert storefront.run(["get", "Halo"], settings) == 0
    assert json.loads(capsys.readouterr().out) == {"message": "Product not found"}


def test_run_text_report(settings, capsys):
    text_settings = Settings(
        catalog_path=settings.catalog_path,
        oracle="static",
        oracle_static_price=OUNCE_PRICE,
        output_format="text",
    )
    assert storefront.run(["list"], text_settings) == 0
    out = capsys.readouterr().out
    assert "Items: 2" in out
    assert "Aurora" in out
    assert "$300.00 USD" in out


def test_run_invalid_filter(settings, capsys):
    assert storefront.run(["list", "minPrice=cheap"], settings) == 1
    assert "minPrice" in capsys.readouterr().err


def test_run_oracle_unavailable(settings, capsys):
    broken = Settings(catalog_path=settings.catalog_path, oracle="static")
    assert storefront.run(["list"], broken) == 2
    assert capsys.readouterr().out == ""


def test_run_missing_catalog(tmp_path, capsys):
    missing = Settings(
        catalog_path=str(tmp_path / "missing.json"),
        oracle="static",
        oracle_static_price=OUNCE_PRICE,
    )
    assert storefront.run(["list"], missing) == 2


def test_run_usage(settings):
    assert storefront.run([], settings) == 1
    assert storefront.run(["delete"], settings) == 1
    assert storefront.run(["get"], settings) == 1


def test_run_get_oracle_unavailable(settings, capsys):
    broken = Settings(catalog_path=settings.catalog_path, oracle="static")
    assert storefront.run(["get", "Aurora"], broken) == 2
    assert capsys.readouterr().out == ""
