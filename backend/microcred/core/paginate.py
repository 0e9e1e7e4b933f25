"""Pagination: offset/limit slicing with completeness metadata.

Invariants:
    - offset is clamped to >= 0; limit None or <= 0 means "no limit" (= total)
    - Out-of-range offsets yield an empty page, never an error
    - has_more iff offset + limit < total
    - total_pages = ceil(total / limit), with limit 0 counted as 1
"""

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageMeta:
    offset: int
    limit: int
    total: int
    returned: int
    has_more: bool
    total_pages: int

    def to_dict(self) -> dict:
        return {
            "offset": self.offset,
            "limit": self.limit,
            "total": self.total,
            "returned": self.returned,
            "hasMore": self.has_more,
            "totalPages": self.total_pages,
        }


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    meta: PageMeta


def paginate(
    items: Sequence[T], offset: int = 0, limit: int | None = None,
) -> Page[T]:
    """Slice items[offset:offset+limit] and describe the slice."""
    total = len(items)
    offset = max(0, offset or 0)
    if limit is None or limit <= 0:
        limit = total

    page = list(items[offset:offset + limit])
    return Page(
        items=page,
        meta=PageMeta(
            offset=offset,
            limit=limit,
            total=total,
            returned=len(page),
            has_more=offset + limit < total,
            total_pages=math.ceil(total / (limit or 1)),
        ),
    )
