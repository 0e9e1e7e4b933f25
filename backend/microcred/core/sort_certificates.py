"""Certificate Sorting: stable ordering by a selectable key.

Invariants:
    - Always stable: equal keys keep their input order
    - Unrecognized sort keys return the input order unchanged (not an error)
    - grade: absent or non-numeric grades compare as 0, views are not mutated
    - expiry: every view with an expiry date precedes every view without one
    - Idempotent: sorting an already-sorted sequence by the same key is a no-op

Design Decisions:
    - Text keys use an accent-stripped, case-folded collation key with the raw
      text as tie-break, approximating locale-aware comparison without ICU
    - Descending sorts use sorted(reverse=True), which Python keeps stable
"""

import unicodedata
from typing import Callable, Iterable

from microcred.core.certificate_view import CertificateView
from microcred.core.domain_types import SortKey
from microcred.core.portfolio import numeric_grade


def collation_key(text: str) -> tuple[str, str]:
    """Locale-style sort key: base letters first, exact text to break ties."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def _grade_value(view: CertificateView) -> float:
    return numeric_grade(view.certificate.grade) or 0.0


def _expiry_key(view: CertificateView) -> tuple[int, float]:
    if view.expires_at is None:
        return 1, 0.0
    return 0, view.expires_at.timestamp()


# sort key -> (key function, descending)
_ORDERINGS: dict[SortKey, tuple[Callable[[CertificateView], object], bool]] = {
    SortKey.NEWEST: (lambda v: v.completed_at, True),
    SortKey.OLDEST: (lambda v: v.completed_at, False),
    SortKey.PLATFORM: (lambda v: collation_key(v.certificate.platform), False),
    SortKey.NAME: (lambda v: collation_key(v.certificate.course_name), False),
    SortKey.CATEGORY: (lambda v: collation_key(v.certificate.category), False),
    SortKey.GRADE: (_grade_value, True),
    SortKey.HOURS: (lambda v: v.certificate.hours, True),
    SortKey.EXPIRY: (_expiry_key, False),
}


def resolve_sort_key(sort_key: SortKey | str | None) -> SortKey | None:
    """Case-insensitive lookup; None for anything unrecognized."""
    if isinstance(sort_key, SortKey):
        return sort_key
    if not sort_key:
        return None
    try:
        return SortKey(sort_key.strip().lower())
    except ValueError:
        return None


def sort_certificates(
    views: Iterable[CertificateView], sort_key: SortKey | str | None,
) -> list[CertificateView]:
    """Return a new list ordered by sort_key."""
    views = list(views)
    key = resolve_sort_key(sort_key)
    if key is None:
        return views
    key_fn, descending = _ORDERINGS[key]
    return sorted(views, key=key_fn, reverse=descending)
