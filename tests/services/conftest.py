"""Service test fixtures — FastAPI test client wired to the fake registry.

Invariants:
    - get_registry_client dependency overridden with a client on FakeRegistry's transport
    - Lifespan does not run under ASGITransport: no real registry client is created

Design Decisions:
    - Override the client dependency, not the service: routes exercise the real
      EmployeeService and RegistryClient end to end
"""

import pytest
from httpx import ASGITransport, AsyncClient

from employee_api.api.dependencies import get_registry_client
from employee_api.main import app


@pytest.fixture
async def client(registry_client):
    """FastAPI test client with the registry dependency overridden."""
    app.dependency_overrides[get_registry_client] = lambda: registry_client

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
