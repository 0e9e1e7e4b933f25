"""Global Search: relevance-ranked matches across users and certificates.

Invariants:
    - Query is stripped; a blank query raises InvalidQueryError
    - Case-insensitive substring matching (not fuzzy/semantic)
    - User matches score 0.9; certificate matches score 0.5, +0.3 for a course
      name hit, +0.2 for a skill hit, capped at 1.0
    - Ranking is score desc and stable: ties keep discovery order
      (dataset order; per user, the profile before its certificates)
    - No match is an empty result, not an error
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from microcred.core.certificate_view import CertificateView, derive_view
from microcred.core.domain_types import RelevanceScore, SearchScope
from microcred.core.errors import InvalidQueryError
from microcred.core.filter_certificates import matches_text, skill_matches
from microcred.core.portfolio import Certificate, User

USER_MATCH_SCORE = RelevanceScore(0.9)
CERTIFICATE_BASE_SCORE: float = 0.5
COURSE_NAME_BONUS: float = 0.3
SKILL_BONUS: float = 0.2
MAX_SCORE: float = 1.0


@dataclass(frozen=True)
class SearchMatch:
    """One ranked hit. certificate is None for user matches."""
    user: User
    score: RelevanceScore
    certificate: CertificateView | None = None

    @property
    def kind(self) -> str:
        return "user" if self.certificate is None else "certificate"

    def to_dict(self) -> dict[str, Any]:
        if self.certificate is None:
            return {
                "type": "user",
                "user": {
                    "id": self.user.id,
                    "name": self.user.name,
                    "email": self.user.email,
                    "totalCertificates": self.user.total_certificates,
                    "profileImage": self.user.profile_image,
                },
                "relevanceScore": self.score,
            }
        return {
            "type": "certificate",
            "certificate": self.certificate.to_dict(),
            "user": {
                "id": self.user.id,
                "name": self.user.name,
                "email": self.user.email,
            },
            "relevanceScore": self.score,
        }


@dataclass(frozen=True)
class SearchResults:
    matches: list[SearchMatch] = field(default_factory=list)
    total_results: int = 0


def user_matches(user: User, term: str) -> bool:
    term = term.lower()
    return (
        term in user.name.lower()
        or term in user.email.lower()
        or bool(user.bio and term in user.bio.lower())
    )


def certificate_score(certificate: Certificate, term: str) -> RelevanceScore:
    score = CERTIFICATE_BASE_SCORE
    if term.lower() in certificate.course_name.lower():
        score += COURSE_NAME_BONUS
    if skill_matches(certificate, term):
        score += SKILL_BONUS
    return RelevanceScore(min(MAX_SCORE, score))


def search(
    dataset: Mapping[str, User],
    query: str | None,
    scope: SearchScope | str = SearchScope.ALL,
    limit: int = 50,
    *,
    now: datetime,
) -> SearchResults:
    """Rank users and certificates matching query.

    Raises InvalidQueryError for a blank query or an unknown scope.
    """
    term = (query or "").strip()
    if not term:
        raise InvalidQueryError()
    try:
        scope = SearchScope(scope)
    except ValueError:
        raise InvalidQueryError(f"Unknown search type: {scope!r}") from None
    include_users = scope in (SearchScope.ALL, SearchScope.USERS)
    include_certificates = scope in (SearchScope.ALL, SearchScope.CERTIFICATES)

    found: list[SearchMatch] = []
    for user in dataset.values():
        if include_users and user_matches(user, term):
            found.append(SearchMatch(user, USER_MATCH_SCORE))
        if include_certificates:
            found.extend(
                SearchMatch(user, certificate_score(cert, term), derive_view(cert, now))
                for cert in user.certificates
                if matches_text(cert, term)
            )

    ranked = sorted(found, key=lambda m: m.score, reverse=True)
    return SearchResults(matches=ranked[:max(0, limit)], total_results=len(found))
