"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_manager.database import init_db
from payroll_manager.services.settings_service import CompanySettingsService


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency; rolled back if the request fails."""
    _, session_factory = init_db()
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


def get_settings_service(request: Request) -> CompanySettingsService:
    """Application-wide settings service created at startup."""
    return request.app.state.settings_service


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
SettingsService = Annotated[CompanySettingsService, Depends(get_settings_service)]
