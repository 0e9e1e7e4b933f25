"""Search Route: global search across users and certificates.

Invariants:
    - Blank q reaches the core and surfaces as InvalidQueryError (400)
    - Unknown type values are rejected by validation (400)
"""

import logging
from datetime import datetime
from typing import Mapping

from fastapi import APIRouter, Depends, Query

from microcred.api.dependencies import envelope, get_dataset, get_reference_time
from microcred.config import get_settings
from microcred.core.domain_types import SearchScope
from microcred.core.portfolio import User
from microcred.core.search import search
from microcred.schemas.query import SearchQuery

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/search", tags=["search"])


def search_query(
    q: str | None = Query(None, description="Search term"),
    type: SearchScope = Query(SearchScope.ALL, description="all, users or certificates"),
    limit: int | None = Query(None, ge=1, description="Maximum number of results"),
) -> SearchQuery:
    return SearchQuery(q=q, type=type, limit=limit)


@router.get("")
async def search_portfolios(
    query: SearchQuery = Depends(search_query),
    dataset: Mapping[str, User] = Depends(get_dataset),
    now: datetime = Depends(get_reference_time),
):
    limit = query.limit or get_settings().search_default_limit
    results = search(dataset, query.q, query.type, limit, now=now)
    returned = len(results.matches)
    logger.info(
        f"GET /api/search - {returned}/{results.total_results} matches",
        extra={"query": query.q, "returned": returned, "total": results.total_results},
    )
    return envelope(
        [m.to_dict() for m in results.matches],
        now,
        metadata={
            "query": query.q,
            "type": query.type.value,
            "totalResults": results.total_results,
            "returnedResults": returned,
        },
    )
