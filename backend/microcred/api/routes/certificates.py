"""Certificate Routes: filtered/sorted/paginated listing and per-certificate detail.

Invariants:
    - Pipeline order is derive → filter → sort → paginate
    - Statistics are computed over the user's FULL collection, never the page
    - One reference time per request (get_reference_time) for every derived field
    - Unknown user/certificate → 404 via ResourceNotFoundError
"""

import logging
from datetime import datetime
from typing import Mapping

from fastapi import APIRouter, Depends, Query

from microcred.api.dependencies import envelope, get_dataset, get_reference_time
from microcred.config import get_settings
from microcred.core.certificate_stats import compute_statistics
from microcred.core.certificate_view import derive_views
from microcred.core.filter_certificates import filter_certificates
from microcred.core.paginate import paginate
from microcred.core.portfolio import User
from microcred.core.sort_certificates import sort_certificates
from microcred.core.user_profile import build_certificate_detail, build_user_profile
from microcred.infrastructure.dataset import find_certificate, find_user
from microcred.schemas.query import CertificateQuery

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/certificates", tags=["certificates"])


def certificate_query(
    platform: str | None = Query(None, description="Filter by learning platform"),
    category: str | None = Query(None, description="Filter by certificate category"),
    sort_by: str | None = Query(
        None, alias="sortBy",
        description="newest, oldest, platform, name, grade, hours, category, expiry",
    ),
    search: str | None = Query(None, description="Text search across certificate data"),
    limit: int | None = Query(None, description="Maximum number of results to return"),
    offset: int = Query(0, description="Number of results to skip"),
    include_expired: bool = Query(
        True, alias="includeExpired", description="Include expired certificates",
    ),
) -> CertificateQuery:
    return CertificateQuery(
        platform=platform, category=category, sort_by=sort_by, search=search,
        limit=limit, offset=offset, include_expired=include_expired,
    )


@router.get("/{user_id}")
async def list_certificates(
    user_id: str,
    query: CertificateQuery = Depends(certificate_query),
    dataset: Mapping[str, User] = Depends(get_dataset),
    now: datetime = Depends(get_reference_time),
):
    """One user's certificates with statistics, pagination and applied filters."""
    settings = get_settings()
    user = find_user(dataset, user_id)
    sort_by = query.sort_by or settings.default_sort.value

    all_views = derive_views(user.certificates, now)
    matching = filter_certificates(all_views, query.to_filters())
    ordered = sort_certificates(matching, sort_by)
    page = paginate(ordered, query.offset, query.limit)

    stats = compute_statistics(all_views)
    statistics = stats.to_dict()
    statistics["filteredCertificates"] = page.meta.total
    statistics["returnedCertificates"] = page.meta.returned

    logger.info(
        f"GET /api/certificates/{user_id} - "
        f"{page.meta.returned}/{page.meta.total} certificates returned",
        extra={
            "user_id": user_id,
            "returned": page.meta.returned,
            "total": page.meta.total,
        },
    )
    return envelope(
        {
            "user": build_user_profile(user, stats, now),
            "certificates": [v.to_dict() for v in page.items],
            "statistics": statistics,
            "pagination": page.meta.to_dict(),
            "filters": query.echo(sort_by),
            "metadata": {
                "lastUpdated": now.isoformat(),
                "dataVersion": settings.data_version,
                "apiVersion": settings.api_version,
            },
        },
        now,
    )


@router.get("/{user_id}/{certificate_id}")
async def get_certificate(
    user_id: str,
    certificate_id: str,
    dataset: Mapping[str, User] = Depends(get_dataset),
    now: datetime = Depends(get_reference_time),
):
    """Detailed view of one certificate with verification info and related courses."""
    user = find_user(dataset, user_id)
    certificate = find_certificate(user, certificate_id)
    logger.info(
        f"GET /api/certificates/{user_id}/{certificate_id}",
        extra={"user_id": user_id, "certificate_id": certificate_id},
    )
    return envelope(build_certificate_detail(user, certificate, now), now)
