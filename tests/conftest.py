from __future__ import annotations

import pytest

from eventrelay.adapters.gladly import GladlyDestination
from eventrelay.config.gladly import GladlyConfig, default_gladly_resilience
from tests.support.gladly import GLADLY_URL, FakeGladly


@pytest.fixture
def gladly_config() -> GladlyConfig:
    return GladlyConfig(
        url=GLADLY_URL,
        username="admin@test-org.com",
        api_key="secret-key",
        resilience=default_gladly_resilience(username="admin@test-org.com", api_key="secret-key"),
    )


@pytest.fixture
def fake_gladly() -> FakeGladly:
    return FakeGladly()


@pytest.fixture
def destination(gladly_config: GladlyConfig, fake_gladly: FakeGladly) -> GladlyDestination:
    return GladlyDestination(config=gladly_config, client_factory=fake_gladly.client_factory)
