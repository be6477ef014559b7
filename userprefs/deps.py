"""
FastAPI dependencies wiring services to per-request resources.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .database import get_db
from .services.settings_service import SettingsService
from .services.settings_store import SettingsStore
from .services.user_service import UserRepository, UserService


def get_settings_store(request: Request) -> SettingsStore:
    """The store built at startup and kept on app state."""
    return request.app.state.settings_store


def get_settings_service(store: SettingsStore = Depends(get_settings_store)) -> SettingsService:
    return SettingsService(store)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db))
