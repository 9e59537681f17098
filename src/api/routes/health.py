"""Health check endpoints."""

import json

from fastapi import APIRouter, Response

from src.config import settings
from src.database import check_db_connection

router = APIRouter()


@router.get("/health")
async def health():
    """Basic health check."""
    return {"status": "healthy", "env": settings.app_env}


@router.get("/health/ready")
async def readiness():
    """Readiness check: the order store must be reachable."""
    database_ok = await check_db_connection()

    return Response(
        content=json.dumps(
            {
                "status": "ready" if database_ok else "not_ready",
                "checks": {"database": database_ok},
            }
        ),
        status_code=200 if database_ok else 503,
        media_type="application/json",
    )


@router.get("/health/live")
async def liveness():
    """Liveness check for container orchestration."""
    return {"status": "alive"}
