"""Certificate Filtering: conjunction of optional predicates over derived views.

Invariants:
    - Pure function: output is an order-preserving subsequence of the input
    - Absent (None or blank) criteria impose no constraint; supplied ones are ANDed
    - platform/category: case-insensitive exact match
    - search: case-insensitive substring over course name, institution, platform,
      description, category, or any skill (OR across fields)
    - include_expired=False drops expired views; None/True keeps them
"""

from dataclasses import dataclass
from typing import Iterable

from microcred.core.certificate_view import CertificateView
from microcred.core.portfolio import Certificate


@dataclass(frozen=True)
class CertificateFilters:
    """Optional filter set applied to one user's certificates."""
    platform: str | None = None
    category: str | None = None
    search: str | None = None
    include_expired: bool | None = None


def matches_text(certificate: Certificate, term: str) -> bool:
    """Case-insensitive substring match over all searchable certificate text."""
    term = term.lower()
    return (
        any(term in text.lower() for text in certificate.searchable_fields())
        or skill_matches(certificate, term)
    )


def skill_matches(certificate: Certificate, term: str) -> bool:
    term = term.lower()
    return any(term in skill.lower() for skill in certificate.skills)


def _equals_ignoring_case(value: str, expected: str) -> bool:
    return value.lower() == expected.lower()


def filter_certificates(
    views: Iterable[CertificateView], filters: CertificateFilters,
) -> list[CertificateView]:
    """Keep the views that satisfy every supplied criterion."""
    result = list(views)
    if filters.platform:
        result = [
            v for v in result
            if _equals_ignoring_case(v.certificate.platform, filters.platform)
        ]
    if filters.category:
        result = [
            v for v in result
            if _equals_ignoring_case(v.certificate.category, filters.category)
        ]
    if filters.search:
        result = [v for v in result if matches_text(v.certificate, filters.search)]
    if filters.include_expired is False:
        result = [v for v in result if not v.is_expired]
    return result
