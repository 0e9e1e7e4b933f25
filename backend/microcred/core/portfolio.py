"""Portfolio Records: immutable Certificate and User entities built from dataset JSON.

Invariants:
    - Records are frozen; every "update" is a new derived object
    - JSON keys are camelCase on the way in and on the way out
    - Unknown keys on a certificate record survive the round trip in `extra`
    - Denormalized user counters are advisory only (never used for aggregates)
    - Numeric fields (hours, creditsEarned, rating) are finite numbers or absent;
      NaN and non-numeric values never reach the aggregators

Design Decisions:
    - Frozen dataclasses, not ORM/Pydantic: the core stays dependency-free
    - completion_date kept as the raw string; parsing happens in derive_view so a
      bad date surfaces as InvalidDateError at request time, not at load time
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

_CERTIFICATE_KEYS: dict[str, str] = {
    "id": "id",
    "userId": "user_id",
    "courseName": "course_name",
    "institution": "institution",
    "platform": "platform",
    "category": "category",
    "completionDate": "completion_date",
    "issueDate": "issue_date",
    "expiryDate": "expiry_date",
    "hours": "hours",
    "creditsEarned": "credits_earned",
    "grade": "grade",
    "rating": "rating",
    "instructor": "instructor",
    "verificationStatus": "verification_status",
    "skills": "skills",
    "description": "description",
}

# Leading numeric prefix, read the way JavaScript parseFloat reads it
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _optional_number(value: object) -> float | None:
    """Finite number from a JSON value or numeric string prefix, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    match = _NUMERIC_PREFIX.match(str(value))
    if match is None:
        return None
    number = float(match.group())
    return number if math.isfinite(number) else None


def numeric_grade(grade: object) -> float | None:
    """Numeric value of a grade, or None when absent/empty/non-numeric.

    "92%" -> 92.0, "A+" -> None, NaN -> None, 0 -> None (a falsy grade counts as absent).
    """
    if not grade:
        return None
    number = _optional_number(grade)
    return float(number) if number is not None else None


def _str(value: object) -> str:
    return "" if value is None else str(value)


def _number(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value if math.isfinite(value) else 0


@dataclass(frozen=True)
class Certificate:
    """One completed course, exactly as stored in the dataset."""

    id: str
    course_name: str
    institution: str
    platform: str
    category: str
    completion_date: str | None
    hours: float = 0
    user_id: str | None = None
    issue_date: str | None = None
    expiry_date: str | None = None
    credits_earned: float | None = None
    grade: float | str | None = None
    rating: float | None = None
    instructor: str | None = None
    verification_status: str | None = None
    skills: tuple[str, ...] = ()
    description: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Certificate":
        """Build from a camelCase JSON record. Missing text fields become ''."""
        return cls(
            id=_str(record.get("id")),
            user_id=record.get("userId"),
            course_name=_str(record.get("courseName")),
            institution=_str(record.get("institution")),
            platform=_str(record.get("platform")),
            category=_str(record.get("category")),
            completion_date=record.get("completionDate"),
            issue_date=record.get("issueDate"),
            expiry_date=record.get("expiryDate") or None,
            hours=_number(record.get("hours")),
            credits_earned=_optional_number(record.get("creditsEarned")),
            grade=record.get("grade"),
            rating=_optional_number(record.get("rating")),
            instructor=record.get("instructor"),
            verification_status=record.get("verificationStatus"),
            skills=tuple(_str(s) for s in record.get("skills") or ()),
            description=_str(record.get("description")),
            extra={
                k: v for k, v in record.items() if k not in _CERTIFICATE_KEYS
            },
        )

    def to_dict(self) -> dict[str, Any]:
        """camelCase JSON rendering (unknown source keys first, then known fields)."""
        data: dict[str, Any] = dict(self.extra)
        for json_key, attr in _CERTIFICATE_KEYS.items():
            value = getattr(self, attr)
            data[json_key] = list(value) if attr == "skills" else value
        return data

    def searchable_fields(self) -> tuple[str, ...]:
        """Free-text fields matched by filter search and global search."""
        return (
            self.course_name, self.institution, self.platform,
            self.description, self.category,
        )


@dataclass(frozen=True)
class User:
    """A portfolio owner and their certificates in stored order."""

    id: str
    name: str
    email: str
    join_date: str | None = None
    bio: str | None = None
    location: str | None = None
    profile_image: str | None = None
    linkedin: str | None = None
    github: str | None = None
    website: str | None = None
    portfolio: str | None = None
    total_certificates: int | None = None   # advisory
    total_hours: float | None = None        # advisory
    certificates: tuple[Certificate, ...] = ()

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "User":
        return cls(
            id=_str(record.get("id")),
            name=_str(record.get("name")),
            email=_str(record.get("email")),
            join_date=record.get("joinDate"),
            bio=record.get("bio"),
            location=record.get("location"),
            profile_image=record.get("profileImage"),
            linkedin=record.get("linkedin"),
            github=record.get("github"),
            website=record.get("website"),
            portfolio=record.get("portfolio"),
            total_certificates=record.get("totalCertificates"),
            total_hours=record.get("totalHours"),
            certificates=tuple(
                Certificate.from_record(c)
                for c in record.get("certificates") or ()
            ),
        )
