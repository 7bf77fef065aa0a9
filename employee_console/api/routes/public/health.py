"""Health check endpoints for monitoring service status"""
from fastapi import APIRouter, Depends, status
from sqlalchemy import text
from sqlalchemy.orm import Session
from datetime import datetime, timezone

from employee_console.core.dependencies import get_object_storage
from employee_console.db.base import get_db_session
from employee_console.storage.object_storage import ObjectStorage

health_router = APIRouter(tags=["health"])

SERVICE_NAME = "employee-console-api"


def _check(name: str, probe) -> dict:
    try:
        probe()
        return {"status": "healthy", "message": f"{name} reachable"}
    except Exception as e:
        return {"status": "unhealthy", "message": f"{name} check failed: {str(e)}"}


@health_router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Check if the API is responsive"
)
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
    }


@health_router.get(
    "/health/detailed",
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
    description="Check the database and the image bucket"
)
async def detailed_health_check(
    db: Session = Depends(get_db_session),
    storage: ObjectStorage = Depends(get_object_storage),
):
    """Status is unhealthy when any dependency check fails"""
    dependencies = {
        "database": _check("Database", lambda: db.execute(text("SELECT 1"))),
        "storage": _check("Storage bucket", storage.check_access),
    }
    overall = "healthy" if all(d["status"] == "healthy" for d in dependencies.values()) else "unhealthy"

    return {
        "status": overall,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "dependencies": dependencies,
    }
