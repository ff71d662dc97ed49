"""Company settings endpoints."""

from fastapi import APIRouter

from payroll_manager.api.dependencies import SettingsService
from payroll_manager.api.schemas import SettingsPayload

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsPayload)
async def get_settings(settings_service: SettingsService) -> SettingsPayload:
    """Current company settings (created with defaults on first use)."""
    config = await settings_service.get_settings()
    return SettingsPayload(**config.to_dict())


@router.put("", response_model=SettingsPayload)
async def save_settings(
    settings_service: SettingsService,
    payload: SettingsPayload,
) -> SettingsPayload:
    """Replace company settings; later statements use the new rates."""
    config = await settings_service.save_settings(payload.to_config())
    return SettingsPayload(**config.to_dict())
