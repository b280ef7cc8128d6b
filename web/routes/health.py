"""Health check routes for the Leadflow API."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse

from leadflow import __version__
from leadflow.models.database import DatabaseState

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "API Running..."


async def check_database(request: Request) -> Dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Component status with the pool state
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        return {"status": "unhealthy", "state": DatabaseState.DISCONNECTED}
    healthy = await db.health_check()
    return {"status": "healthy" if healthy else "unhealthy", "state": db.state}


def check_notifications(request: Request) -> Dict[str, Any]:
    """
    Report email transport readiness.

    A transport that is still verifying reports None. Notifications never
    make the service unhealthy; they only degrade it.
    """
    notifier = getattr(request.app.state, "notification_service", None)
    if notifier is None:
        return {"status": "disabled", "transports": {}}
    stats = notifier.get_stats()
    transports = stats["transports"]
    status = "healthy" if any(ready is not False for ready in transports.values()) else "degraded"
    return {"status": status, **stats}


@router.get("/health")
async def health_check(request: Request, response: Response) -> Dict[str, Any]:
    """
    Health check endpoint for monitoring and container orchestration.

    Returns:
        Overall status plus database and email transport details; 503 when
        the database is unreachable
    """
    database = await check_database(request)
    notifications = check_notifications(request)

    if database["status"] != "healthy":
        overall = "unhealthy"
        response.status_code = 503
    elif notifications["status"] == "degraded":
        overall = "degraded"
    else:
        overall = "healthy"

    return {
        "status": overall,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "components": {"database": database, "notifications": notifications},
    }
