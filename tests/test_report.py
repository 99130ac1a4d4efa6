from core.models import PricedItem
from core.report import build_plaintext_listing


def test_plaintext_listing_renders_items():
    items = [
        PricedItem(
            name="Engagement Ring 1",
            popularity_score=0.85,
            weight=2.1,
            images={"yellow": "y.jpg", "rose": "r.jpg"},
            price=1234.5,
        ),
        PricedItem(name="Solitaire", popularity_score=0.9, weight=1.8, price=99.0),
    ]
    text = build_plaintext_listing(items)

    assert "Items: 2" in text
    assert "$1,234.50 USD" in text
    assert "2.1 g" in text
    assert "****. (4.2/5)" in text
    assert "****+ (4.5/5)" in text
    assert "rose, yellow" in text


def test_plaintext_listing_empty():
    text = build_plaintext_listing([])
    assert "Items: 0" in text
    assert "No items match" in text
