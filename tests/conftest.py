"""
Pytest configuration and fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def make_record(
    record_id,
    products=(),
    keywords=(),
    brand_sentiment=None,
    competitors=None,
    quotes=(),
):
    """
    Build a record dict in the upstream input shape.

    ``competitors`` maps competitor name -> sentiment label (or None).
    """
    competitors = competitors or {}
    return {
        "record_id": record_id,
        "analysis": {
            "brand_products": list(products),
            "brand_sentiment_label": brand_sentiment,
            "keywords": [{"keyword": kw} for kw in keywords],
            "competitor_sentiments": {
                name: {"label": label} for name, label in competitors.items() if label
            },
            "quotes": [
                {"text": text, "entity": entity} for text, entity in quotes
            ],
        },
        "competitor_names": list(competitors),
    }


@pytest.fixture
def acme_records():
    """A small batch for brand Acme against competitors Foo and Bar."""
    return [
        make_record(
            1,
            products=["Widget"],
            keywords=["pricing", "durability"],
            brand_sentiment="NEGATIVE",
            competitors={"Foo": "NEGATIVE"},
            quotes=[
                ("Widget costs too much", "Acme"),
                ("Foo keeps raising prices", "Foo"),
                ("Prices are high everywhere", None),
            ],
        ),
        make_record(
            2,
            keywords=["support"],
            brand_sentiment="POSITIVE",
            competitors={"Foo": "NEGATIVE", "Bar": "POSITIVE"},
            quotes=[
                ("Acme support answered in minutes", "Brand"),
                ("Bar support is great too", "Bar"),
            ],
        ),
        make_record(
            3,
            products=["Widget", "Gadget"],
            keywords=["pricing"],
            brand_sentiment="MIXED",
            competitors={"Bar": "POSITIVE"},
        ),
    ]


@pytest.fixture
def record_factory():
    """Factory for upstream-shaped record dicts (see make_record)."""
    return make_record
