"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from payroll_manager.api.routes import (
    employees_router,
    health_router,
    payroll_router,
    reports_router,
    settings_router,
)
from payroll_manager.config import configure_logging
from payroll_manager.database import create_schema, dispose_db, init_db
from payroll_manager.repository import DuplicateStatementError, RecordNotFoundError
from payroll_manager.services.employee_service import InvalidEmployeeError
from payroll_manager.services.pay_run_service import InvalidPayPeriodError
from payroll_manager.services.settings_service import CompanySettingsService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    configure_logging()
    engine, session_factory = init_db()
    await create_schema(engine)
    app.state.settings_service = CompanySettingsService(session_factory)
    logger.info("Payroll manager started")
    yield
    # Shutdown
    await dispose_db()


def _error(status_code: int, exc: Exception, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "code": code})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Payroll Manager API",
        description="Employees, pay periods, pay statements, company settings and rollups",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(RecordNotFoundError)
    async def not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc, "NOT_FOUND")

    @app.exception_handler(InvalidPayPeriodError)
    async def invalid_period_handler(
        request: Request, exc: InvalidPayPeriodError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, exc, "INVALID_PAY_PERIOD")

    @app.exception_handler(InvalidEmployeeError)
    async def invalid_employee_handler(
        request: Request, exc: InvalidEmployeeError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, exc, "INVALID_EMPLOYEE")

    @app.exception_handler(DuplicateStatementError)
    async def duplicate_handler(request: Request, exc: DuplicateStatementError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, exc, "DUPLICATE_STATEMENT")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(settings_router, prefix="/api/v1")
    app.include_router(employees_router, prefix="/api/v1")
    app.include_router(payroll_router, prefix="/api/v1")
    app.include_router(reports_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
