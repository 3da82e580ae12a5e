"""Shared fixtures for Gladly adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.support.gladly import make_customer

if TYPE_CHECKING:
    from eventrelay.adapters.gladly.schema import Customer


@pytest.fixture
def existing_customer() -> Customer:
    return make_customer(
        name="Joe Bob",
        address="1 Old Rd",
        emails=[{"original": "Joe.Bob@Example.com", "normalized": "joe.bob@example.com"}],
        phones=[{"original": "2345678901", "primary": True}],
        customAttributes={"tier": "regular"},
    )
