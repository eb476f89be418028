"""API Dependencies — FastAPI providers for the registry client and employee service.

Invariants:
    - Registry client is the lifespan-managed singleton (never created per request)
    - Requests arriving before startup completes fail loudly (RuntimeError)

Design Decisions:
    - Module attribute read at call time: tests swap the client via app.dependency_overrides
"""

from fastapi import Depends

import employee_api.infrastructure.registry_client as registry_module
from employee_api.infrastructure.registry_client import RegistryClient
from employee_api.services.employee_service import EmployeeService


def get_registry_client() -> RegistryClient:
    """FastAPI dependency for the shared registry client."""
    if registry_module.registry_client is None:
        raise RuntimeError("Registry client not initialized")
    return registry_module.registry_client


def get_employee_service(
    registry: RegistryClient = Depends(get_registry_client),
) -> EmployeeService:
    """FastAPI dependency for the employee service."""
    return EmployeeService(registry)
