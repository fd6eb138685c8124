"""
Health check and activity log endpoints for API v1.
"""

from typing import Any, Dict

from fastapi import APIRouter

from campus_event_hub.app.core.timeutil import utcnow_iso
from campus_event_hub.app.services.activity_service import activity_log

router = APIRouter()


@router.get("/health")
async def health() -> Dict[str, str]:
    return {
        "status": "ok",
        "message": "Campus Event Hub API is running",
        "timestamp": utcnow_iso(),
    }


@router.get("/activity")
async def list_activity() -> Dict[str, Any]:
    """Return the most recent requests, newest first."""
    logs = activity_log.entries()
    return {"total": len(logs), "logs": logs}
