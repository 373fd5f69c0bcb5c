"""
Health check endpoints.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from sellgpt.core.config import settings
from sellgpt.core.database import get_db_session
from sellgpt.storage.artifacts import ArtifactStore, LocalArtifactStore, get_artifact_store

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {
        "name": settings.app_name,
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.app_version,
    }


@router.get("/live")
async def liveness_check() -> dict:
    """Liveness probe - no dependency checks."""
    return {
        "status": "alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/ready")
async def readiness_check(
    session: AsyncSession = Depends(get_db_session),
    store: ArtifactStore = Depends(get_artifact_store),
) -> dict:
    """
    Readiness probe - checks if the service can handle requests.
    Verifies database connectivity and that the artifact root is usable.
    """
    try:
        await session.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {str(e)}"

    storage_status = "ok"
    if isinstance(store, LocalArtifactStore) and store.root.exists() and not store.root.is_dir():
        storage_status = f"error: {store.root} is not a directory"

    is_ready = db_status == "connected" and storage_status == "ok"

    return {
        "status": "ready" if is_ready else "not_ready",
        "checks": {
            "database": db_status,
            "storage": storage_status,
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
