"""Derived Certificate View: time-relative fields computed against a reference time.

Invariants:
    - derive_view is PURE: same (certificate, now) always yields the same view
    - now is an explicit parameter; naive datetimes are read as UTC
    - is_expired iff expiry is present and strictly before now
    - days_until_expiry = ceil((expiry - now) / 1 day), None without expiry
    - age_in_days = floor((now - completion) / 1 day); is_recent iff age <= 30
    - Views are recomputed per request, never cached or persisted

Design Decisions:
    - Date-only strings ("2024-03-15") mean midnight UTC
    - A present but unparseable expiry date is an InvalidDateError, like the
      completion date, rather than a silently non-expiring certificate
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

from microcred.core.domain_types import RECENT_WINDOW_DAYS, MonthKey, month_key
from microcred.core.errors import InvalidDateError
from microcred.core.portfolio import Certificate

_SECONDS_PER_DAY = 86_400


def as_reference_time(now: datetime) -> datetime:
    """Normalize a reference time to aware UTC."""
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def parse_timestamp(value: object, field: str) -> datetime:
    """Parse an ISO-8601 date or datetime into aware UTC. Raises InvalidDateError."""
    if isinstance(value, datetime):
        return as_reference_time(value)
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(field, value)
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise InvalidDateError(field, value) from None
    return as_reference_time(parsed)


def days_between(start: datetime, end: datetime) -> float:
    """Fractional days from start to end (negative when end precedes start)."""
    return (end - start).total_seconds() / _SECONDS_PER_DAY


@dataclass(frozen=True)
class CertificateView:
    """A certificate plus its time-relative fields for one reference time."""

    certificate: Certificate
    completed_at: datetime
    expires_at: datetime | None
    is_expired: bool
    days_until_expiry: int | None
    age_in_days: int
    is_recent: bool

    @property
    def month(self) -> MonthKey:
        return month_key(self.completed_at.year, self.completed_at.month)

    def to_dict(self) -> dict[str, Any]:
        data = self.certificate.to_dict()
        data.update({
            "isExpired": self.is_expired,
            "daysUntilExpiry": self.days_until_expiry,
            "ageInDays": self.age_in_days,
            "isRecent": self.is_recent,
        })
        return data


def derive_view(certificate: Certificate, now: datetime) -> CertificateView:
    """Compute the derived view of one certificate at reference time now."""
    now = as_reference_time(now)
    completed_at = parse_timestamp(certificate.completion_date, "completionDate")
    expires_at = None
    if certificate.expiry_date:
        expires_at = parse_timestamp(certificate.expiry_date, "expiryDate")

    age_in_days = math.floor(days_between(completed_at, now))
    return CertificateView(
        certificate=certificate,
        completed_at=completed_at,
        expires_at=expires_at,
        is_expired=expires_at is not None and expires_at < now,
        days_until_expiry=(
            math.ceil(days_between(now, expires_at))
            if expires_at is not None else None
        ),
        age_in_days=age_in_days,
        is_recent=age_in_days <= RECENT_WINDOW_DAYS,
    )


def derive_views(
    certificates: Iterable[Certificate], now: datetime,
) -> list[CertificateView]:
    """Derive views for a whole collection, preserving stored order."""
    return [derive_view(c, now) for c in certificates]
