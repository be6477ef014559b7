from .settings import NotificationChannel, NotificationSettingUpdate, SettingsDocument
from .user import UserResponse

__all__ = [
    "NotificationChannel", "NotificationSettingUpdate", "SettingsDocument",
    "UserResponse",
]
