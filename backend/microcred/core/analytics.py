"""Learning Analytics: derived insights over a user's full certificate collection.

Invariants:
    - Pure function of (views, join_date, now); input is never reordered
    - Every mean over a possibly-empty collection yields None, never an error
    - months_active = max(1, ceil(days_since_join / 30)), so velocity never divides by 0
    - top_skills: top 10 by count desc, ties in first-seen order
    - emerging_skills: skills of certificates aged <= 90 days, distinct, first 5
    - Badges and milestones are evaluated independently of each other

Design Decisions:
    - Percentages are numbers with one decimal (not preformatted strings)
    - Random/mock figures (streaks, canned recommendations) are not computed
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Sequence

from microcred.core.certificate_view import (
    CertificateView, as_reference_time, days_between, parse_timestamp,
)
from microcred.core.domain_types import (
    DAYS_PER_MONTH, EMERGING_SKILL_WINDOW_DAYS, Badge, MonthKey,
)
from microcred.core.numeric import mean_or_none, percentage, round_half_up

TOP_SKILLS_LIMIT: int = 10
EMERGING_SKILLS_LIMIT: int = 5
LEARNER_THRESHOLD: int = 5
DEDICATED_THRESHOLD: int = 10
CENTURY_HOURS: int = 100
EXPLORER_PLATFORMS: int = 3
CONSISTENCY_POINTS_PER_CERTIFICATE: int = 10
CONSISTENCY_MAX: int = 100


# ─── Result Types ────────────────────────────────────────────────

@dataclass(frozen=True)
class SkillCount:
    skill: str
    count: int
    percentage: float

    def to_dict(self) -> dict:
        return {"skill": self.skill, "count": self.count, "percentage": self.percentage}


@dataclass(frozen=True)
class PlatformShare:
    platform: str
    count: int
    percentage: float
    total_hours: float

    def to_dict(self) -> dict:
        return {
            "platform": self.platform,
            "count": self.count,
            "percentage": self.percentage,
            "totalHours": self.total_hours,
        }


@dataclass(frozen=True)
class MonthlyProgress:
    certificates: int = 0
    hours: float = 0

    def to_dict(self) -> dict:
        return {"certificates": self.certificates, "hours": self.hours}


@dataclass(frozen=True)
class Milestone:
    title: str
    achieved: bool
    date: str | None = None
    progress: float | None = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"title": self.title, "achieved": self.achieved}
        if self.date is not None or self.progress is None:
            data["date"] = self.date
        if self.progress is not None:
            data["progress"] = self.progress
        return data


@dataclass(frozen=True)
class LearningAnalytics:
    certificates_per_month: float
    hours_per_month: float
    top_skills: list[SkillCount] = field(default_factory=list)
    emerging_skills: list[str] = field(default_factory=list)
    skill_categories: dict[str, int] = field(default_factory=dict)
    platform_distribution: list[PlatformShare] = field(default_factory=list)
    favorite_instructors: dict[str, int] = field(default_factory=dict)
    average_rating: float | None = None
    monthly_progress: dict[MonthKey, MonthlyProgress] = field(default_factory=dict)
    average_completion_time: float | None = None
    consistency_score: int = 0
    badges: list[str] = field(default_factory=list)
    milestones: list[Milestone] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "learningVelocity": {
                "certificatesPerMonth": self.certificates_per_month,
                "hoursPerMonth": self.hours_per_month,
            },
            "skillsDevelopment": {
                "topSkills": [s.to_dict() for s in self.top_skills],
                "emergingSkills": list(self.emerging_skills),
                "skillCategories": dict(self.skill_categories),
            },
            "platformPreferences": {
                "distribution": [p.to_dict() for p in self.platform_distribution],
                "favoriteInstructors": dict(self.favorite_instructors),
                "averageRating": self.average_rating,
            },
            "learningPatterns": {
                "monthlyProgress": {
                    k: v.to_dict() for k, v in self.monthly_progress.items()
                },
                "averageCompletionTime": self.average_completion_time,
                "consistencyScore": self.consistency_score,
            },
            "achievements": {
                "badges": list(self.badges),
                "milestones": [m.to_dict() for m in self.milestones],
            },
        }


# ─── Aggregations ────────────────────────────────────────────────

def months_active(join_date: object, now: datetime) -> int:
    """Whole 30-day months since joining, at least 1."""
    joined = parse_timestamp(join_date, "joinDate")
    return max(1, math.ceil(days_between(joined, as_reference_time(now)) / DAYS_PER_MONTH))


def top_skills(views: Sequence[CertificateView]) -> list[SkillCount]:
    counts = Counter(skill for v in views for skill in v.certificate.skills)
    # Counter.most_common keeps first-seen order among equal counts
    return [
        SkillCount(skill, count, percentage(count, len(views)))
        for skill, count in counts.most_common(TOP_SKILLS_LIMIT)
    ]


def emerging_skills(views: Sequence[CertificateView]) -> list[str]:
    seen: dict[str, None] = {}
    for view in views:
        if view.age_in_days <= EMERGING_SKILL_WINDOW_DAYS:
            for skill in view.certificate.skills:
                seen.setdefault(skill)
    return list(seen)[:EMERGING_SKILLS_LIMIT]


def platform_distribution(views: Sequence[CertificateView]) -> list[PlatformShare]:
    counts: dict[str, int] = {}
    hours: dict[str, float] = {}
    for view in views:
        platform = view.certificate.platform
        counts[platform] = counts.get(platform, 0) + 1
        hours[platform] = hours.get(platform, 0) + view.certificate.hours
    return [
        PlatformShare(platform, count, percentage(count, len(views)), hours[platform])
        for platform, count in counts.items()
    ]


def monthly_progress(views: Sequence[CertificateView]) -> dict[MonthKey, MonthlyProgress]:
    progress: dict[MonthKey, MonthlyProgress] = {}
    for view in views:
        current = progress.get(view.month, MonthlyProgress())
        progress[view.month] = MonthlyProgress(
            current.certificates + 1, current.hours + view.certificate.hours,
        )
    return progress


def award_badges(certificate_count: int, total_hours: float, platform_count: int) -> list[str]:
    rules = (
        (Badge.LEARNER, certificate_count >= LEARNER_THRESHOLD),
        (Badge.DEDICATED_STUDENT, certificate_count >= DEDICATED_THRESHOLD),
        (Badge.CENTURY_CLUB, total_hours >= CENTURY_HOURS),
        (Badge.PLATFORM_EXPLORER, platform_count >= EXPLORER_PLATFORMS),
    )
    return [badge.value for badge, earned in rules if earned]


def track_milestones(
    views: Sequence[CertificateView], total_hours: float, platform_count: int,
) -> list[Milestone]:
    first = min(views, key=lambda v: v.completed_at, default=None)
    return [
        Milestone(
            title="First Certificate",
            achieved=first is not None,
            date=first.certificate.completion_date if first else None,
        ),
        Milestone(
            title="100 Learning Hours",
            achieved=total_hours >= CENTURY_HOURS,
            progress=min(CENTURY_HOURS, total_hours),
        ),
        Milestone(
            title="Multi-Platform Learner",
            achieved=platform_count >= EXPLORER_PLATFORMS,
            progress=platform_count,
        ),
    ]


def compute_analytics(
    views: Sequence[CertificateView], join_date: object, now: datetime,
) -> LearningAnalytics:
    """Compute learning analytics for one user. Pure, no IO."""
    views = list(views)
    months = months_active(join_date, now)
    total_hours = sum(v.certificate.hours for v in views)
    platform_count = len({v.certificate.platform for v in views})

    categories = Counter(v.certificate.category for v in views)
    instructors = Counter(
        v.certificate.instructor for v in views if v.certificate.instructor
    )
    rating = mean_or_none(
        v.certificate.rating for v in views if v.certificate.rating
    )
    completion_time = mean_or_none(v.certificate.hours for v in views)

    return LearningAnalytics(
        certificates_per_month=len(views) / months,
        hours_per_month=total_hours / months,
        top_skills=top_skills(views),
        emerging_skills=emerging_skills(views),
        skill_categories=dict(categories),
        platform_distribution=platform_distribution(views),
        favorite_instructors=dict(instructors),
        average_rating=round_half_up(rating, 1) if rating is not None else None,
        monthly_progress=monthly_progress(views),
        average_completion_time=completion_time,
        consistency_score=min(
            CONSISTENCY_MAX, len(views) * CONSISTENCY_POINTS_PER_CERTIFICATE,
        ),
        badges=award_badges(len(views), total_hours, platform_count),
        milestones=track_milestones(views, total_hours, platform_count),
    )
