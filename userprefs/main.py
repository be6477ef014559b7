"""
UserPrefs API - FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .database import engine, Base, SessionLocal
from .limiter import limiter
from .logging_config import api_logger
from .middleware import SecurityHeadersMiddleware, RequestLoggingMiddleware
from .responses import (
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from .routes import users_router, settings_router, health_router
from .seed import seed_users
from .services.settings_store import SettingsStore

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown"""
    Base.metadata.create_all(bind=engine)

    if settings.seed_users:
        db = SessionLocal()
        try:
            seed_users(db)
        finally:
            db.close()

    # One store per application lifetime
    app.state.settings_store = SettingsStore(settings.settings_merge_policy)
    api_logger.info(
        "Application started",
        environment=settings.environment,
        merge_policy=settings.settings_merge_policy,
    )

    yield

    api_logger.info("Application stopped", settings_documents=len(app.state.settings_store))


app = FastAPI(
    title=settings.app_name,
    description="User directory and per-user settings API",
    version="1.0.0",
    docs_url="/docs" if settings.debug else None,
    redoc_url=None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)

# Rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Error envelopes
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "PUT", "PATCH", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=3600,
)

# Routes
app.include_router(health_router)
app.include_router(users_router)
app.include_router(settings_router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": settings.app_name,
        "docs": "/docs" if settings.debug else "Disabled",
    }
