"""Analytics Route: learning insights for one user."""

import logging
from datetime import datetime
from typing import Mapping

from fastapi import APIRouter, Depends, Query

from microcred.api.dependencies import envelope, get_dataset, get_reference_time
from microcred.core.analytics import compute_analytics
from microcred.core.certificate_view import derive_views
from microcred.core.portfolio import User
from microcred.infrastructure.dataset import find_user

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/{user_id}")
async def get_analytics(
    user_id: str,
    timeframe: str = Query("1y", description="Echoed in metadata; analytics cover all time"),
    dataset: Mapping[str, User] = Depends(get_dataset),
    now: datetime = Depends(get_reference_time),
):
    user = find_user(dataset, user_id)
    views = derive_views(user.certificates, now)
    analytics = compute_analytics(views, user.join_date, now)
    logger.info(
        f"GET /api/analytics/{user_id} - {len(views)} certificates analysed",
        extra={"user_id": user_id, "total": len(views)},
    )
    return envelope(
        analytics.to_dict(),
        now,
        metadata={
            "userId": user_id,
            "analysisDate": now.isoformat(),
            "timeframe": timeframe,
            "totalCertificates": len(views),
        },
    )
