"""Health Probe: liveness endpoint for container orchestration.

Invariants:
    - GET /api/health always returns 200 if the process is up
    - Does not touch the dataset (a missing data file is reported by data routes)
"""

import time
from datetime import datetime

from fastapi import APIRouter, Depends, status

from microcred.api.dependencies import get_reference_time
from microcred.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(now: datetime = Depends(get_reference_time)):
    """Basic liveness probe."""
    settings = get_settings()
    return {
        "status": "healthy",
        "timestamp": now.isoformat(),
        "version": settings.api_version,
        "environment": settings.environment,
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
    }
