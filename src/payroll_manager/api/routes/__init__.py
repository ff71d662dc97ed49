"""API routes."""

from payroll_manager.api.routes.employees import router as employees_router
from payroll_manager.api.routes.health import router as health_router
from payroll_manager.api.routes.payroll import router as payroll_router
from payroll_manager.api.routes.reports import router as reports_router
from payroll_manager.api.routes.settings import router as settings_router

__all__ = [
    "employees_router",
    "health_router",
    "payroll_router",
    "reports_router",
    "settings_router",
]
