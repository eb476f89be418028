"""Registry Client — the only component that speaks the upstream registry's wire format.

Invariants:
    - list_all: empty/absent body or null data → [] (an empty registry is not an error)
    - Transport failures, non-success reads and unreadable bodies → RegistryAPIError, never []
    - create sends exactly name/salary/age/title; email never leaves this service
    - create without data in the response → RegistryContractError (no defaulting)
    - delete sends {"name": <identifier>}: the registry's delete key holds the id, not the name
    - Rejected writes (error field or non-success status) → RegistryWriteRejectedError
    - Retries only on transport-level failure and 429, bounded by max_retries

Design Decisions:
    - One httpx.AsyncClient per process, opened on startup and closed on shutdown
      (connection pool shared by concurrent requests; no per-request state on the client)
    - Writes retry only when the request was never delivered (connect errors);
      reads also retry on timeouts since GET is safe to repeat
    - ±25% jitter on backoff: prevents synchronized retries from concurrent requests
    - Singleton registry_client initialized in lifespan, mirrored by get_registry_client()
"""

import asyncio
import logging
import random
from typing import Any

import httpx
from pydantic import ValidationError

from employee_api.core.employee_query import find_duplicate_ids
from employee_api.core.errors import (
    ErrorContext,
    RegistryAPIError,
    RegistryContractError,
    RegistryWriteRejectedError,
)
from employee_api.schemas.employee import (
    CreateEmployeeInput,
    DeleteEmployeeInput,
    Employee,
    RegistryCreateResponse,
    RegistryDeleteResponse,
    RegistryListResponse,
)

logger = logging.getLogger(__name__)

_RATE_LIMITED_STATUS = 429


class RegistryClient:
    """Async client for the registry's collection endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        max_retries: int = 1,
        base_delay_ms: int = 200,
        max_delay_ms: int = 5_000,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        self.client = httpx.AsyncClient(
            timeout=timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    # ─── Operations ──────────────────────────────────────────────

    async def list_all(self) -> list[Employee]:
        """Fetch every record the registry holds."""
        response = await self._send("GET", "list")
        if not response.is_success:
            raise RegistryAPIError(
                f"list returned HTTP {response.status_code}",
                "bad_status",
                upstream_status=response.status_code,
                context=ErrorContext(operation="list"),
            )
        body = self._parse_body(response, "list")
        if body is None:
            logger.debug("Registry returned no body for list")
            return []
        envelope = self._validate(RegistryListResponse, body, "list")
        if not envelope.data:
            logger.debug("Registry returned no employees")
            return []

        employees = [e.to_employee() for e in envelope.data]
        duplicates = find_duplicate_ids(employees)
        if duplicates:
            logger.warning(
                f"Registry list contains duplicate ids: {duplicates}",
                extra={"record_count": len(employees)},
            )
        logger.debug(
            "Registry list fetched", extra={"record_count": len(employees)},
        )
        return employees

    async def create(self, name: str, salary: int, age: int, title: str) -> Employee:
        """Create a record upstream and return it with its assigned id."""
        payload = CreateEmployeeInput(name=name, salary=salary, age=age, title=title)
        response = await self._send("POST", "create", payload.model_dump())
        if not response.is_success:
            raise RegistryWriteRejectedError(
                "create", self._rejection_reason(response), response.status_code,
            )
        body = self._parse_body(response, "create")
        if body is None:
            raise RegistryContractError("create", "data")
        envelope = self._validate(RegistryCreateResponse, body, "create")
        if envelope.error:
            raise RegistryWriteRejectedError(
                "create", envelope.error, response.status_code,
            )
        if envelope.data is None:
            raise RegistryContractError("create", "data")

        employee = envelope.data.to_employee()
        logger.info("Employee created", extra={"employee_id": employee.id})
        return employee

    async def delete(self, employee_id: str) -> bool:
        """Delete by identifier. True when the registry reports a removal.

        The identifier is sent in the registry's ``name`` field (see
        DeleteEmployeeInput). Existence is not checked beforehand; an
        unknown id yields whatever the registry answers. A success status
        without a data flag counts as a removal.
        """
        payload = DeleteEmployeeInput.for_identifier(employee_id)
        context = ErrorContext(employee_id=employee_id)
        response = await self._send("DELETE", "delete", payload.model_dump())
        if not response.is_success:
            raise RegistryWriteRejectedError(
                "delete", self._rejection_reason(response),
                response.status_code, context,
            )
        body = self._parse_body(response, "delete")
        if body is None:
            deleted = True
        else:
            envelope = self._validate(RegistryDeleteResponse, body, "delete")
            if envelope.error:
                raise RegistryWriteRejectedError(
                    "delete", envelope.error, response.status_code, context,
                )
            deleted = envelope.data is not False

        logger.info(
            f"Employee delete {'applied' if deleted else 'found nothing'}",
            extra={"employee_id": employee_id},
        )
        return deleted

    async def health_check(self) -> bool:
        """Check registry reachability (for readiness probes)."""
        try:
            response = await self.client.get(self.base_url)
        except httpx.HTTPError as e:
            logger.error(f"Registry health check failed: {e}")
            return False
        return response.is_success

    # ─── Transport ───────────────────────────────────────────────

    async def _send(
        self, method: str, operation: str, payload: dict | None = None,
    ) -> httpx.Response:
        """Issue one logical request, retrying transient failures."""
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.request(
                    method, self.base_url, json=payload,
                )
            except (httpx.ConnectError, httpx.ConnectTimeout) as e:
                await self._handle_transient_error(e, attempt, operation)
                continue
            except httpx.TimeoutException as e:
                if method != "GET":
                    raise RegistryAPIError(
                        f"{operation} timed out", "timeout",
                        context=ErrorContext(operation=operation),
                    ) from e
                await self._handle_transient_error(e, attempt, operation)
                continue
            except httpx.HTTPError as e:
                raise RegistryAPIError(
                    str(e), "connection_error",
                    context=ErrorContext(operation=operation),
                ) from e

            if response.status_code == _RATE_LIMITED_STATUS:
                await self._handle_rate_limit(response, attempt, operation)
                continue

            logger.debug(
                f"Registry {operation} answered",
                extra={
                    "method": method,
                    "status_code": response.status_code,
                    "attempt": attempt + 1,
                },
            )
            return response
        raise AssertionError("unreachable: retry loop exits by return or raise")

    async def _handle_rate_limit(
        self, response: httpx.Response, attempt: int, operation: str,
    ) -> None:
        """Sleep before retrying a 429, or raise once retries are spent."""
        retry_after_ms = self._extract_retry_after(response)
        if attempt >= self.max_retries:
            raise RegistryAPIError(
                "Rate limit exceeded after retries",
                "rate_limit",
                retry_after_ms=retry_after_ms,
                upstream_status=response.status_code,
                context=ErrorContext(operation=operation),
            )
        delay = retry_after_ms if retry_after_ms is not None else self._backoff(attempt)
        delay = min(delay, self.max_delay_ms)
        logger.warning(
            f"Registry rate limit hit, retry after {delay}ms",
            extra={"attempt": attempt + 1, "status_code": response.status_code},
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(
        self, e: Exception, attempt: int, operation: str,
    ) -> None:
        """Sleep before retrying a transport failure, or raise once retries are spent."""
        if attempt >= self.max_retries:
            error_type = (
                "timeout" if isinstance(e, httpx.TimeoutException)
                else "connection_error"
            )
            raise RegistryAPIError(
                f"{operation} failed after {self.max_retries} retries: {e}",
                error_type,
                context=ErrorContext(operation=operation),
            ) from e
        delay = self._backoff(attempt)
        logger.warning(
            f"Registry transient error, retry after {delay}ms: {e}",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    def _extract_retry_after(self, response: httpx.Response) -> int | None:
        """Retry-After header in milliseconds (seconds form only)."""
        val = response.headers.get("retry-after")
        if val and val.strip().isdigit():
            return int(val.strip()) * 1000
        return None

    # ─── Decoding ────────────────────────────────────────────────

    def _parse_body(self, response: httpx.Response, operation: str) -> Any:
        """Decode the JSON body; None for an empty body or a JSON null."""
        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RegistryAPIError(
                f"{operation} body is not valid JSON",
                "malformed_response",
                upstream_status=response.status_code,
                context=ErrorContext(operation=operation),
            ) from e

    def _validate(self, model: type, body: Any, operation: str):
        try:
            return model.model_validate(body)
        except ValidationError as e:
            raise RegistryAPIError(
                f"{operation} body does not match the registry schema "
                f"({e.error_count()} error(s))",
                "malformed_response",
                context=ErrorContext(
                    operation=operation,
                    debug_info={"errors": e.errors(include_url=False)},
                ),
            ) from e

    def _rejection_reason(self, response: httpx.Response) -> str:
        """Upstream error string when present, else the HTTP status line."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"HTTP {response.status_code} {response.reason_phrase}".strip()


# Singleton (initialized on startup)
registry_client: RegistryClient | None = None


def init_registry(base_url: str, **kwargs) -> RegistryClient:
    global registry_client
    registry_client = RegistryClient(base_url, **kwargs)
    return registry_client


async def close_registry() -> None:
    global registry_client
    if registry_client is not None:
        await registry_client.aclose()
        registry_client = None
