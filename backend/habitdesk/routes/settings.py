"""
Settings Routes - Notification switches
"""
from fastapi import APIRouter, Depends, HTTPException

from habitdesk.core.dependencies import get_settings_provider
from habitdesk.core.exceptions import StorageError
from habitdesk.models.notification import NotificationSettings
from habitdesk.services.notifications import NotificationSettingsProvider

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/notifications", response_model=NotificationSettings)
def get_notification_settings(provider: NotificationSettingsProvider = Depends(get_settings_provider)):
    return provider.get_settings()


@router.put("/notifications", response_model=NotificationSettings)
def update_notification_settings(
    request: NotificationSettings,
    provider: NotificationSettingsProvider = Depends(get_settings_provider)
):
    """Replace the notification settings"""
    try:
        return provider.save_settings(request)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
