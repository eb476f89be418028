"""Employee Service tests — fetch-then-transform against the fake registry.

Invariants:
    - Every read operation issues its own GET (no caching between calls)
    - Registry failures propagate; they never turn into empty results
    - create → find_by_id round trip returns the submitted fields
"""

import httpx
import pytest

from employee_api.core.errors import RegistryAPIError
from employee_api.schemas.employee import EmployeeCreate
from employee_api.services.employee_service import EmployeeService

from tests.services.fake_registry import wire_employee


@pytest.fixture
def service(registry_client):
    return EmployeeService(registry_client)


async def test_list_employees_returns_all_records(fake_registry, service):
    fake_registry.employees = [
        wire_employee("1", "Alice", 100), wire_employee("2", "Bob", 200),
    ]
    employees = await service.list_employees()
    assert [e.id for e in employees] == ["1", "2"]


async def test_each_read_refetches_from_registry(fake_registry, service):
    fake_registry.employees = [wire_employee("1", "Alice", 100)]

    await service.highest_salary()
    fake_registry.employees.append(wire_employee("2", "Bob", 200))
    assert await service.highest_salary() == 200

    await service.search_by_name("a")
    await service.find_by_id("1")
    await service.top_earners()
    assert fake_registry.count("GET") == 5


async def test_search_by_name_scenario(fake_registry, service):
    fake_registry.employees = [
        wire_employee("1", "Anna", 50),
        wire_employee("2", "annette", 60),
        wire_employee("3", "Beth", 70),
    ]
    found = await service.search_by_name("Ann")
    assert [e.name for e in found] == ["Anna", "annette"]


async def test_find_by_id_returns_record(fake_registry, service):
    fake_registry.employees = [wire_employee("42", "Carol", 70)]
    employee = await service.find_by_id("42")
    assert employee.name == "Carol"


async def test_find_by_id_absent_returns_none(fake_registry, service):
    fake_registry.employees = [wire_employee("42", "Carol", 70)]
    assert await service.find_by_id("7") is None


async def test_highest_salary_scenario(fake_registry, service):
    fake_registry.employees = [
        wire_employee("1", "X", 100), wire_employee("2", "Y", 999),
    ]
    assert await service.highest_salary() == 999


async def test_top_earners_of_twelve(fake_registry, service):
    fake_registry.employees = [
        wire_employee(str(i), f"E{i}", i) for i in range(12)
    ]
    top = await service.top_earners(10)
    assert top == ["E11", "E10", "E9", "E8", "E7", "E6", "E5", "E4", "E3", "E2"]


async def test_empty_registry_scenario(service):
    assert await service.highest_salary() == 0
    assert await service.top_earners(5) == []
    assert await service.find_by_id("anything") is None
    assert await service.search_by_name("") == []


async def test_create_then_find_round_trip(fake_registry, service):
    body = EmployeeCreate(name="Zed", salary=500, age=35, title="Lead", email="zed@co")

    created = await service.create_employee(body)
    found = await service.find_by_id(created.id)

    assert found is not None
    assert (found.name, found.salary, found.age, found.title) == ("Zed", 500, 35, "Lead")
    assert "email" not in fake_registry.bodies("POST")[0]


async def test_delete_employee_propagates_registry_result(fake_registry, service):
    fake_registry.employees = [wire_employee("1", "Alice", 100)]
    assert await service.delete_employee("1") is True
    assert await service.delete_employee("1") is False


async def test_registry_failure_is_not_masked_as_empty(fake_registry, service):
    fake_registry.scripted.append(httpx.Response(502))
    with pytest.raises(RegistryAPIError):
        await service.highest_salary()
