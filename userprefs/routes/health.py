"""
UserPrefs Health Check Routes
"""
import os
from datetime import datetime, timezone
from typing import Any, Dict

import psutil
from fastapi import APIRouter, Request

from ..responses import ServiceResult, handle_service_result

router = APIRouter(prefix="/health-check", tags=["health"])

START_TIME = datetime.now(timezone.utc)


def get_uptime() -> str:
    """Get process uptime as human-readable string"""
    delta = datetime.now(timezone.utc) - START_TIME
    hours, remainder = divmod(delta.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if delta.days > 0:
        return f"{delta.days}d {hours}h {minutes}m"
    elif hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    else:
        return f"{minutes}m {seconds}s"


def check_process() -> Dict[str, Any]:
    """Memory and thread usage of this process"""
    proc = psutil.Process(os.getpid())
    mem = proc.memory_info()
    return {
        "pid": proc.pid,
        "rss_mb": round(mem.rss / (1024 * 1024), 2),
        "threads": proc.num_threads(),
    }


@router.get("")
def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    store = getattr(request.app.state, "settings_store", None)
    return handle_service_result(
        ServiceResult.ok(
            "Service is healthy",
            {
                "uptime": get_uptime(),
                "process": check_process(),
                "settings_documents": len(store) if store is not None else 0,
            },
        )
    )
