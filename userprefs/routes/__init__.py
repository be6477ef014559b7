from .users import router as users_router
from .settings import router as settings_router
from .health import router as health_router

__all__ = [
    "users_router",
    "settings_router",
    "health_router",
]
