"""Domain Types: rich types that replace bare strings across the core.

Invariants:
    - UserKey is always the lowercase user identifier
    - MonthKey is always formatted YYYY-MM (zero-padded month)
    - Every enumerated query option is a str Enum (serializes to JSON as-is)

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserKey = NewType("UserKey", str)


# ─── Value Types ─────────────────────────────────────────────────

MonthKey = NewType("MonthKey", str)                 # "YYYY-MM"
RelevanceScore = NewType("RelevanceScore", float)   # 0.0–1.0


# ─── Thresholds ──────────────────────────────────────────────────

RECENT_WINDOW_DAYS: int = 30
EXPIRING_SOON_DAYS: int = 30
EMERGING_SKILL_WINDOW_DAYS: int = 90
DAYS_PER_MONTH: int = 30


# ─── Enums ───────────────────────────────────────────────────────

class SortKey(str, Enum):
    """Selectable certificate orderings."""
    NEWEST = "newest"
    OLDEST = "oldest"
    PLATFORM = "platform"
    NAME = "name"
    GRADE = "grade"
    HOURS = "hours"
    CATEGORY = "category"
    EXPIRY = "expiry"


class SearchScope(str, Enum):
    """Which entity kinds a global search looks at."""
    ALL = "all"
    USERS = "users"
    CERTIFICATES = "certificates"


class VerificationStatus(str, Enum):
    """Known verification states. Any other string is kept as-is on the record."""
    VERIFIED = "Verified"
    PENDING = "Pending"


class Badge(str, Enum):
    """Rule-based achievement badges, in award-check order."""
    LEARNER = "Learner"
    DEDICATED_STUDENT = "Dedicated Student"
    CENTURY_CLUB = "Century Club"
    PLATFORM_EXPLORER = "Platform Explorer"


def month_key(year: int, month: int) -> MonthKey:
    """Histogram key for a calendar month."""
    return MonthKey(f"{year:04d}-{month:02d}")
