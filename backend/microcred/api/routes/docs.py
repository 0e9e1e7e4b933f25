"""API Catalogue: JSON endpoint listing and the /api/* not-found fallback.

Invariants:
    - The catch-all router is registered LAST so real /api routes take precedence
    - Unknown /api/* paths always get a JSON 404, never the static SPA page
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from microcred.api.dependencies import get_reference_time
from microcred.config import get_settings

router = APIRouter(prefix="/api/docs", tags=["docs"])
fallback_router = APIRouter(tags=["docs"])

ENDPOINTS: dict[str, str] = {
    "GET /api/health": "System health check",
    "GET /api/users": "List all available users",
    "GET /api/certificates/{user_id}": "Get user certificates with filtering and pagination",
    "GET /api/certificates/{user_id}/{certificate_id}": "Get detailed certificate information",
    "GET /api/analytics/{user_id}": "Get user learning analytics and insights",
    "GET /api/search": "Global search across users and certificates",
    "GET /api/docs": "This endpoint catalogue",
}

CERTIFICATE_PARAMETERS: dict[str, str] = {
    "platform": "Filter by learning platform",
    "category": "Filter by certificate category",
    "search": "Text search across certificate data",
    "sortBy": "Sort criteria (newest, oldest, platform, name, grade, hours, category, expiry)",
    "limit": "Maximum number of results to return",
    "offset": "Number of results to skip for pagination",
    "includeExpired": "Include expired certificates (default: true)",
}


@router.get("")
async def api_docs(now: datetime = Depends(get_reference_time)):
    return {
        "title": "Micro-Credentials Aggregator API",
        "version": get_settings().api_version,
        "description": "Professional certificate portfolio management API",
        "endpoints": ENDPOINTS,
        "parameters": {"certificates endpoint": CERTIFICATE_PARAMETERS},
        "timestamp": now.isoformat(),
    }


@fallback_router.api_route(
    "/api/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def api_not_found(
    path: str, request: Request, now: datetime = Depends(get_reference_time),
):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "success": False,
            "error": {
                "code": "ENDPOINT_NOT_FOUND",
                "message": f"The endpoint {request.url.path} does not exist",
                "category": "resource_not_found",
                "severity": "warning",
                "details": {"availableEndpoints": list(ENDPOINTS)},
            },
            "timestamp": now.isoformat(),
        },
    )
