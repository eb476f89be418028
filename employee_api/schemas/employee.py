"""Employee Schemas — public record shape and the registry's wire shapes.

Invariants:
    - Employee is immutable (frozen); a fresh instance per registry value and per write
    - salary >= 0, age > 0, name non-empty, enforced on every construction
    - Registry field names (employee_name, employee_salary, ...) live ONLY in RegistryEmployee aliases
    - CreateEmployeeInput never carries id or email
    - DeleteEmployeeInput carries the identifier in a field named "name" (registry convention)

Design Decisions:
    - Aliases over hand-written dict mapping: one declaration, applied in both directions
      (validate by alias on the way in, model_dump(by_alias=True) on the way out)
    - Envelopes tolerate absent data/status (defaults None); whether absence is fatal
      is decided by the registry client, not here
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ─── Public Shapes ───────────────────────────────────────────────

class Employee(BaseModel):
    """Employee as exposed by the facade API."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(min_length=1)
    salary: int = Field(ge=0)
    age: int = Field(gt=0)
    title: str
    email: str | None = None


class EmployeeCreate(BaseModel):
    """Create request body. Email is accepted for display only, never sent upstream."""
    name: str = Field(min_length=1, max_length=200)
    salary: int = Field(ge=0)
    age: int = Field(gt=0)
    title: str = Field(max_length=200)
    email: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


# ─── Registry Wire Shapes ────────────────────────────────────────

class RegistryEmployee(BaseModel):
    """Employee as the registry serializes it (prefixed field names)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = Field(alias="employee_name", min_length=1)
    salary: int = Field(alias="employee_salary", ge=0)
    age: int = Field(alias="employee_age", gt=0)
    title: str = Field(alias="employee_title")
    email: str | None = Field(None, alias="employee_email")

    def to_employee(self) -> Employee:
        return Employee(**self.model_dump())

    @classmethod
    def from_employee(cls, employee: Employee) -> "RegistryEmployee":
        return cls(**employee.model_dump())


class CreateEmployeeInput(BaseModel):
    """POST body for the registry: exactly name, salary, age, title."""
    name: str
    salary: int
    age: int
    title: str

    @classmethod
    def from_request(cls, body: EmployeeCreate) -> "CreateEmployeeInput":
        return cls(
            name=body.name, salary=body.salary, age=body.age, title=body.title,
        )


class DeleteEmployeeInput(BaseModel):
    """DELETE body for the registry.

    The registry addresses delete targets through a field called ``name``, but
    the value it expects is the employee *identifier*, not the display name.
    """
    name: str

    @classmethod
    def for_identifier(cls, employee_id: str) -> "DeleteEmployeeInput":
        return cls(name=employee_id)


class RegistryListResponse(BaseModel):
    """Envelope for GET on the collection endpoint."""
    data: list[RegistryEmployee] | None = None
    status: str | None = None


class RegistryCreateResponse(BaseModel):
    """Envelope for POST: single employee under data."""
    data: RegistryEmployee | None = None
    status: str | None = None
    error: str | None = None


class RegistryDeleteResponse(BaseModel):
    """Envelope for DELETE: data is true when a record was removed."""
    data: bool | None = None
    status: str | None = None
    error: str | None = None
