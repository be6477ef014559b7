"""
Per-user settings routes.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends

from ..deps import get_settings_service
from ..responses import handle_service_result
from ..services.settings_service import SettingsService

router = APIRouter(prefix="/users", tags=["settings"])


@router.get("/{user_id}/settings")
def get_user_settings(
    user_id: str,
    service: SettingsService = Depends(get_settings_service),
):
    """Get settings for a user (defaults if never written)."""
    return handle_service_result(service.get_user_settings(user_id))


@router.put("/{user_id}/settings")
def replace_user_settings(
    user_id: str,
    document: Any = Body(...),
    service: SettingsService = Depends(get_settings_service),
):
    """Replace a user's settings document."""
    return handle_service_result(service.replace_user_settings(user_id, document))


@router.patch("/{user_id}/settings/notifications")
def set_notification_setting(
    user_id: str,
    body: Any = Body(...),
    service: SettingsService = Depends(get_settings_service),
):
    """Set one notification mode, e.g. ``{"notificationType": "email", ...}``."""
    return handle_service_result(service.update_notification_setting(user_id, body))
