"""Employee Service — fetch-then-transform over the registry, one fetch per read.

Invariants:
    - Every read calls RegistryClient.list_all() itself; nothing is cached between calls
    - All search/lookup/ranking logic lives in core/employee_query (pure functions)
    - Writes are a single registry round trip; no retries or batching here
    - Absent lookup result is None, never an exception

Design Decisions:
    - Impureim sandwich: IO (fetch) → pure core → return; the service holds only the client
    - Safe to share across concurrent requests: no instance state besides the client reference
"""

import logging

from employee_api.core import employee_query
from employee_api.infrastructure.registry_client import RegistryClient
from employee_api.schemas.employee import Employee, EmployeeCreate

logger = logging.getLogger(__name__)


class EmployeeService:
    """Query engine and write delegation for the facade routes."""

    def __init__(self, registry: RegistryClient):
        self.registry = registry

    async def list_employees(self) -> list[Employee]:
        employees = await self.registry.list_all()
        logger.debug(
            "Listed employees", extra={"record_count": len(employees)},
        )
        return employees

    async def search_by_name(self, query: str) -> list[Employee]:
        logger.debug(f"Searching employees whose name contains '{query}'")
        matches = employee_query.search_by_name(
            await self.registry.list_all(), query,
        )
        logger.debug(
            f"{len(matches)} employee(s) match '{query}'",
            extra={"record_count": len(matches)},
        )
        return matches

    async def find_by_id(self, employee_id: str) -> Employee | None:
        employee = employee_query.find_by_id(
            await self.registry.list_all(), employee_id,
        )
        logger.debug(
            f"Employee lookup {'hit' if employee else 'miss'}",
            extra={"employee_id": employee_id},
        )
        return employee

    async def highest_salary(self) -> int:
        salary = employee_query.highest_salary(await self.registry.list_all())
        logger.debug(f"Highest salary: {salary}")
        return salary

    async def top_earners(
        self, n: int = employee_query.DEFAULT_TOP_EARNERS,
    ) -> list[str]:
        """Names of the n highest earners, ties in registry order."""
        names = employee_query.top_earner_names(
            await self.registry.list_all(), n,
        )
        logger.debug(f"Top {n} earners: {names}")
        return names

    async def create_employee(self, body: EmployeeCreate) -> Employee:
        return await self.registry.create(
            name=body.name, salary=body.salary, age=body.age, title=body.title,
        )

    async def delete_employee(self, employee_id: str) -> bool:
        return await self.registry.delete(employee_id)
