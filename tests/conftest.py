"""Root conftest — shared test configuration and registry fakes."""

import os

import pytest

# Ensure tests never point at a real registry
os.environ.setdefault("REGISTRY_BASE_URL", "http://registry.test/api/v1/employee")
os.environ.setdefault("LOG_FORMAT", "text")

from tests.services.fake_registry import FakeRegistry  # noqa: E402


@pytest.fixture
def fake_registry():
    return FakeRegistry()


@pytest.fixture
async def registry_client(fake_registry):
    client = fake_registry.client()
    yield client
    await client.aclose()
