"""Employee Facade API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EmployeeApiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Registry client opened on startup and closed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; this module is wiring only
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from employee_api.api.error_handlers import register_error_handlers
from employee_api.api.routes import employees, health
from employee_api.config import get_settings
from employee_api.infrastructure.observability import setup_logging
from employee_api.infrastructure.registry_client import close_registry, init_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_registry(
        settings.registry_base_url,
        timeout_seconds=settings.registry_timeout_seconds,
        max_retries=settings.registry_max_retries,
        base_delay_ms=settings.registry_base_delay_ms,
        max_delay_ms=settings.registry_max_delay_ms,
    )
    logger.info(f"Employee facade API started (registry: {settings.registry_base_url})")
    yield
    await close_registry()
    logger.info("Employee facade API shutting down")


app = FastAPI(
    title="Employee Facade API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(employees.router)

register_error_handlers(app)
