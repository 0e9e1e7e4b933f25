"""Query Schemas: validated query-string parameters for the listing and search endpoints.

Invariants:
    - Blank text parameters are normalized to None (no constraint)
    - sort_by is kept as given; unknown keys are a no-op downstream, not a 400
    - offset/limit are plain ints here; clamping is pagination's job
    - SearchQuery.q is NOT required here: a blank query must reach the core and
      surface as InvalidQueryError

Design Decisions:
    - field_validator for side-effect-free transforms (strip): keeps models pure
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from microcred.core.domain_types import SearchScope
from microcred.core.filter_certificates import CertificateFilters


class CertificateQuery(BaseModel):
    """Filters, sort and page window for GET /api/certificates/{user_id}."""

    model_config = ConfigDict(frozen=True)

    platform: str | None = None
    category: str | None = None
    search: str | None = None
    sort_by: str | None = None
    limit: int | None = None
    offset: int = 0
    include_expired: bool = True

    @field_validator("platform", "category", "search", "sort_by")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    def to_filters(self) -> CertificateFilters:
        return CertificateFilters(
            platform=self.platform,
            category=self.category,
            search=self.search,
            include_expired=self.include_expired,
        )

    def echo(self, sort_by: str) -> dict:
        """The filters block of the response, as applied."""
        return {
            "platform": self.platform,
            "category": self.category,
            "search": self.search,
            "sortBy": sort_by,
            "includeExpired": self.include_expired,
        }


class SearchQuery(BaseModel):
    """Parameters for GET /api/search."""

    model_config = ConfigDict(frozen=True)

    q: str | None = None
    type: SearchScope = SearchScope.ALL
    limit: int | None = Field(None, ge=1)
