"""
Shared fixtures for the discovery test suite.

Fixtures:
---------
- pool:        small hand-built item pool (modern / minimalist / bohemian)
- make_choice: factory for Choice records with sensible defaults
- catalog:     the bundled sample catalog from data/catalog
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from discovery.models.catalog import CandidateItem
from discovery.models.choice import Choice

CATALOG_DIR = Path(__file__).parent.parent / "data" / "catalog"

FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def pool():
    return [
        CandidateItem(id="m1", primary_style="modern", secondary_styles=["minimalist"]),
        CandidateItem(id="m2", primary_style="modern"),
        CandidateItem(id="m3", primary_style="modern"),
        CandidateItem(id="n1", primary_style="minimalist", secondary_styles=["modern"]),
        CandidateItem(id="n2", primary_style="minimalist"),
        CandidateItem(id="b1", primary_style="bohemian"),
        CandidateItem(id="b2", primary_style="bohemian", secondary_styles=["modern"]),
    ]


@pytest.fixture
def make_choice():
    def _make(round_number=1, styles=("modern",), keywords=(), selected="m1", rejected="b1"):
        return Choice(
            round=round_number,
            selected_item_id=selected,
            rejected_item_id=rejected,
            styles=tuple(styles),
            rationale="I like how this room feels",
            keywords=tuple(keywords),
            created_at=FIXED_NOW,
        )

    return _make


@pytest.fixture
def catalog():
    from discovery_server.services import CatalogLoader

    return CatalogLoader(CATALOG_DIR).load()
