"""Employee Routes — public REST surface delegating to EmployeeService.

Invariants:
    - Static paths (/search, /highestSalary, /topTen...) registered before /{employee_id}
    - Lookup miss → 404 via ResourceNotFoundError; registry failures propagate to global handlers
    - Create returns 201 with the registry-assigned record
    - Delete returns 404 when the registry reports nothing removed

Design Decisions:
    - Path names kept camelCase to match the existing public contract
"""

import logging

from fastapi import APIRouter, Depends, status

from employee_api.api.dependencies import get_employee_service
from employee_api.core.employee_query import DEFAULT_TOP_EARNERS
from employee_api.core.errors import ErrorContext, ResourceNotFoundError
from employee_api.schemas.employee import Employee, EmployeeCreate
from employee_api.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/employees", tags=["employees"])


@router.get("", response_model=list[Employee])
async def get_all_employees(
    service: EmployeeService = Depends(get_employee_service),
):
    """List every employee held by the registry."""
    return await service.list_employees()


@router.get("/search/{search_string}", response_model=list[Employee])
async def get_employees_by_name_search(
    search_string: str,
    service: EmployeeService = Depends(get_employee_service),
):
    """Employees whose name contains search_string (case-insensitive)."""
    return await service.search_by_name(search_string)


@router.get("/highestSalary", response_model=int)
async def get_highest_salary_of_employees(
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.highest_salary()


@router.get("/topTenHighestEarningEmployeeNames", response_model=list[str])
async def get_top_ten_highest_earning_employee_names(
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.top_earners(DEFAULT_TOP_EARNERS)


@router.get("/{employee_id}", response_model=Employee)
async def get_employee_by_id(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
):
    employee = await service.find_by_id(employee_id)
    if employee is None:
        raise ResourceNotFoundError("Employee", employee_id)
    return employee


@router.post(
    "", response_model=Employee, status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    body: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
):
    """Create an employee upstream. Email, if given, is not forwarded."""
    return await service.create_employee(body)


@router.delete("/{employee_id}", response_model=str)
async def delete_employee_by_id(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
):
    deleted = await service.delete_employee(employee_id)
    if not deleted:
        raise ResourceNotFoundError(
            "Employee", employee_id, ErrorContext(operation="delete"),
        )
    return f"Deleted {employee_id}"
