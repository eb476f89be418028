"""Fake Registry — in-memory stand-in for the upstream registry behind httpx.MockTransport.

Invariants:
    - Speaks the registry wire format (employee_* field names, data/status envelopes)
    - Every request is recorded in .requests, including ones answered from .scripted
    - .scripted responses (httpx.Response or exception) are consumed first, in order
    - DELETE looks records up by the body's "name" field, which holds the id

Design Decisions:
    - Flat class, no inheritance: simple, explicit, easy to debug
    - Default behavior is a working registry so tests only script the failure they exercise
"""

import json
import uuid

import httpx

from employee_api.infrastructure.registry_client import RegistryClient

BASE_URL = "http://registry.test/api/v1/employee"
OK_STATUS = "Successfully processed request."


def wire_employee(
    employee_id: str,
    name: str,
    salary: int,
    age: int = 30,
    title: str = "Engineer",
    email: str | None = None,
) -> dict:
    """Employee dict as the registry serializes it."""
    return {
        "id": employee_id,
        "employee_name": name,
        "employee_salary": salary,
        "employee_age": age,
        "employee_title": title,
        "employee_email": email if email is not None else f"{name.lower()}@company.com",
    }


class FakeRegistry:
    """Stateful registry fake; hand .transport() to a RegistryClient."""

    def __init__(self, employees: list[dict] | None = None):
        self.employees: list[dict] = list(employees or [])
        self.requests: list[httpx.Request] = []
        self.scripted: list[httpx.Response | Exception] = []

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def client(self, **kwargs) -> RegistryClient:
        kwargs.setdefault("base_delay_ms", 0)
        return RegistryClient(BASE_URL, transport=self.transport(), **kwargs)

    def bodies(self, method: str) -> list[dict | None]:
        """Decoded JSON bodies of recorded requests with the given method."""
        return [
            json.loads(r.content) if r.content else None
            for r in self.requests if r.method == method
        ]

    def count(self, method: str) -> int:
        return sum(1 for r in self.requests if r.method == method)

    # -- Request handling -------------------------------------------------------

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.scripted:
            item = self.scripted.pop(0)
            if isinstance(item, Exception):
                raise item
            return item
        if request.method == "GET":
            return httpx.Response(
                200, json={"data": self.employees, "status": OK_STATUS},
            )
        body = json.loads(request.content)
        if request.method == "POST":
            return self._create(body)
        if request.method == "DELETE":
            return self._delete(body)
        return httpx.Response(405)

    def _create(self, body: dict) -> httpx.Response:
        record = wire_employee(
            str(uuid.uuid4()), body["name"], body["salary"],
            body["age"], body["title"],
        )
        self.employees.append(record)
        return httpx.Response(
            200, json={"data": record, "status": OK_STATUS, "error": None},
        )

    def _delete(self, body: dict) -> httpx.Response:
        before = len(self.employees)
        self.employees = [e for e in self.employees if e["id"] != body["name"]]
        return httpx.Response(
            200, json={"data": len(self.employees) < before, "status": OK_STATUS},
        )
