"""
User directory routes.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse

from ..deps import get_user_service
from ..responses import handle_service_result
from ..sanitize import is_safe_display_text
from ..services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
def get_users(
    filter: str = "",
    service: UserService = Depends(get_user_service),
):
    """List users, optionally filtered by name."""
    return handle_service_result(service.find_all(filter=filter or None))


@router.get("/hello", response_class=HTMLResponse)
def get_hello_component(name: Optional[str] = None):
    """Render a greeting for ``name``; markup characters are rejected."""
    user_name = name or "World"
    if not is_safe_display_text(user_name):
        return PlainTextResponse("Bad input detected!", status_code=400)
    return HTMLResponse(f"<h1>Hello, {user_name}!</h1>")


@router.get("/{user_id}")
def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
):
    """Get a single user by ID."""
    return handle_service_result(service.find_by_id(user_id))
