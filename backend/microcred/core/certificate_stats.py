"""Portfolio Statistics: aggregates over a user's full certificate collection.

Invariants:
    - Input is the FULL collection, independent of any filter on the returned page
    - Pure and deterministic for a given collection and reference time
    - Never raises on empty input: counts are 0, average_grade is None
    - expired counts is_expired views regardless of verification status
    - expiring counts views with 0 < days_until_expiry <= 30
    - platforms/categories are distinct in first-seen order
    - learning_trend is keyed by MonthKey (YYYY-MM of completion date)
"""

from dataclasses import dataclass, field
from typing import Iterable

from microcred.core.certificate_view import CertificateView
from microcred.core.domain_types import (
    EXPIRING_SOON_DAYS, MonthKey, VerificationStatus,
)
from microcred.core.numeric import mean_or_none, round_half_up
from microcred.core.portfolio import numeric_grade


@dataclass(frozen=True)
class VerificationCounts:
    verified: int = 0
    pending: int = 0
    expired: int = 0

    def to_dict(self) -> dict:
        return {
            "verified": self.verified,
            "pending": self.pending,
            "expired": self.expired,
        }


@dataclass(frozen=True)
class PortfolioStatistics:
    total_certificates: int = 0
    total_hours: float = 0
    total_credits: float = 0
    platforms: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    verification_status: VerificationCounts = field(default_factory=VerificationCounts)
    average_grade: float | None = None
    recent_certificates: int = 0
    expiring_certificates: int = 0
    skills_count: int = 0
    learning_trend: dict[MonthKey, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "totalCertificates": self.total_certificates,
            "totalHours": self.total_hours,
            "totalCredits": self.total_credits,
            "platforms": list(self.platforms),
            "categories": list(self.categories),
            "verificationStatus": self.verification_status.to_dict(),
            "averageGrade": self.average_grade,
            "recentCertificates": self.recent_certificates,
            "expiringCertificates": self.expiring_certificates,
            "skillsCount": self.skills_count,
            "learningTrend": dict(self.learning_trend),
        }


def is_expiring_soon(view: CertificateView) -> bool:
    days = view.days_until_expiry
    return days is not None and 0 < days <= EXPIRING_SOON_DAYS


def compute_statistics(views: Iterable[CertificateView]) -> PortfolioStatistics:
    """Aggregate one user's certificates in a single pass. Pure, no IO."""
    total = 0
    hours: float = 0
    credits: float = 0
    platforms: dict[str, None] = {}
    categories: dict[str, None] = {}
    skills: set[str] = set()
    verified = pending = expired = recent = expiring = 0
    grades: list[float] = []
    trend: dict[MonthKey, int] = {}

    for view in views:
        cert = view.certificate
        total += 1
        hours += cert.hours or 0
        credits += cert.credits_earned or 0
        platforms.setdefault(cert.platform)
        categories.setdefault(cert.category)
        skills.update(cert.skills)

        if cert.verification_status == VerificationStatus.VERIFIED.value:
            verified += 1
        elif cert.verification_status == VerificationStatus.PENDING.value:
            pending += 1
        expired += view.is_expired
        recent += view.is_recent
        expiring += is_expiring_soon(view)

        grade = numeric_grade(cert.grade)
        if grade is not None:
            grades.append(grade)
        trend[view.month] = trend.get(view.month, 0) + 1

    average = mean_or_none(grades)
    return PortfolioStatistics(
        total_certificates=total,
        total_hours=hours,
        total_credits=credits,
        platforms=list(platforms),
        categories=list(categories),
        verification_status=VerificationCounts(verified, pending, expired),
        average_grade=round_half_up(average, 2) if average is not None else None,
        recent_certificates=recent,
        expiring_certificates=expiring,
        skills_count=len(skills),
        learning_trend=trend,
    )
