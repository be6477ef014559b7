from .settings_store import DEFAULT_SETTINGS, MergePolicy, SettingsStore, default_settings
from .settings_service import SettingsService
from .user_service import UserRepository, UserService

__all__ = [
    "DEFAULT_SETTINGS", "MergePolicy", "SettingsStore", "default_settings",
    "SettingsService",
    "UserRepository", "UserService",
]
