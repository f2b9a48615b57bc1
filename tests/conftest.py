"""Shared fixtures for the led-portfolio test suite."""

from datetime import datetime, timezone

import pytest

from led_portfolio.adapters.memory import InMemoryStore


T0 = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def store() -> InMemoryStore:
    """Empty in-memory keyed store."""
    return InMemoryStore()


def stored_project(**overrides) -> dict:
    """A canonical project in the stored (camelCase) layout."""
    record = {
        "id": "p1",
        "title": "Office Retrofit",
        "slug": "office-retrofit",
        "description": "Full LED retrofit of a downtown office floor.",
        "category": "Commercial",
        "featured": False,
        "mainImage": "/img/a.jpg",
        "galleryImages": ["/img/b.jpg"],
        "createdAt": T0.isoformat(),
    }
    record.update(overrides)
    return record
