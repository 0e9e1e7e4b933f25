"""Sort Engine tests: every key, stability, nulls-last and idempotence.

Tests cover:
    - newest/oldest by completion date
    - platform/name/category collation (case and accents ignored)
    - grade desc with missing/non-numeric grades as 0
    - hours desc
    - expiry asc with undated certificates last, in stored order
    - unknown key is a no-op; key lookup is case-insensitive
    - idempotence for every key
"""

import pytest

from microcred.core.domain_types import SortKey
from microcred.core.sort_certificates import (
    collation_key, resolve_sort_key, sort_certificates,
)
from tests.builders import days_ahead, make_view


def _ids(views):
    return [v.certificate.id for v in views]


def _dated():
    return [
        make_view(id="mid", completionDate="2024-02-01"),
        make_view(id="old", completionDate="2023-05-01"),
        make_view(id="new", completionDate="2024-05-01"),
    ]


def test_newest_first():
    assert _ids(sort_certificates(_dated(), "newest")) == ["new", "mid", "old"]


def test_oldest_first():
    assert _ids(sort_certificates(_dated(), "oldest")) == ["old", "mid", "new"]


def test_sort_key_is_case_insensitive():
    assert _ids(sort_certificates(_dated(), "NEWEST")) == ["new", "mid", "old"]
    assert resolve_sort_key(" Oldest ") is SortKey.OLDEST


def test_unknown_sort_key_keeps_order():
    views = _dated()
    assert _ids(sort_certificates(views, "popularity")) == ["mid", "old", "new"]
    assert _ids(sort_certificates(views, None)) == ["mid", "old", "new"]


def test_platform_sort_ignores_case():
    views = [
        make_view(id="u", platform="Udemy"),
        make_view(id="e", platform="edX"),
        make_view(id="c", platform="Coursera"),
    ]
    assert _ids(sort_certificates(views, SortKey.PLATFORM)) == ["c", "e", "u"]


def test_name_sort_places_accented_letters_with_base_letter():
    views = [
        make_view(id="z", courseName="Zoology"),
        make_view(id="e", courseName="Économie"),
        make_view(id="f", courseName="Finance"),
    ]
    assert _ids(sort_certificates(views, "name")) == ["e", "f", "z"]


def test_collation_key_breaks_ties_on_exact_text():
    assert collation_key("abc") < collation_key("abd")
    assert collation_key("ABC")[0] == collation_key("abc")[0]


def test_category_sort_ascending():
    views = [
        make_view(id="p", category="Programming"),
        make_view(id="b", category="Business"),
        make_view(id="d", category="data science"),
    ]
    assert _ids(sort_certificates(views, "category")) == ["b", "d", "p"]


def test_grade_sort_descending_with_invalid_grades_as_zero():
    views = [
        make_view(id="none", grade=None),
        make_view(id="85", grade="85"),
        make_view(id="text", grade="Pass"),
        make_view(id="92pct", grade="92%"),
        make_view(id="num", grade=78.5),
    ]
    assert _ids(sort_certificates(views, "grade")) == ["92pct", "85", "num", "none", "text"]


def test_grade_sort_does_not_mutate_grade():
    view = make_view(grade="Pass")
    sort_certificates([view], "grade")
    assert view.certificate.grade == "Pass"


def test_hours_sort_descending_ties_keep_order():
    views = [
        make_view(id="a", hours=5),
        make_view(id="b", hours=40),
        make_view(id="c", hours=5),
    ]
    assert _ids(sort_certificates(views, "hours")) == ["b", "a", "c"]


def test_expiry_sort_places_undated_last_in_stored_order():
    views = [
        make_view(id="none1"),
        make_view(id="later", expiryDate=days_ahead(100)),
        make_view(id="none2"),
        make_view(id="soon", expiryDate=days_ahead(5)),
    ]
    result = sort_certificates(views, "expiry")
    assert _ids(result) == ["soon", "later", "none1", "none2"]


def test_every_dated_view_precedes_every_undated_view():
    views = [
        make_view(id=str(i), expiryDate=days_ahead(i) if i % 3 else None)
        for i in range(12)
    ]
    result = sort_certificates(views, "expiry")
    flags = [v.expires_at is None for v in result]
    assert flags == sorted(flags)


def test_equal_dates_keep_input_order_when_descending():
    views = [
        make_view(id="first", completionDate="2024-01-01"),
        make_view(id="second", completionDate="2024-01-01"),
    ]
    assert _ids(sort_certificates(views, "newest")) == ["first", "second"]


@pytest.mark.parametrize("key", [k.value for k in SortKey])
def test_sorting_is_idempotent(key):
    views = [
        make_view(
            id=str(i),
            completionDate=f"2024-0{i % 5 + 1}-01",
            platform=["Udemy", "edX", "Coursera"][i % 3],
            courseName=f"Course {9 - i}",
            grade=[None, "80", "90"][i % 3],
            hours=i % 4,
            expiryDate=days_ahead(i) if i % 2 else None,
        )
        for i in range(9)
    ]
    once = sort_certificates(views, key)
    assert sort_certificates(once, key) == once


def test_returns_new_list():
    views = _dated()
    result = sort_certificates(views, "oldest")
    assert result is not views
    assert _ids(views) == ["mid", "old", "new"]
