"""Global Search tests: query validation, scopes, scoring and ranking.

Design Decisions:
    - Dataset built inline with parse_dataset (same path the file loader uses)
"""

import pytest

from microcred.core.errors import InvalidQueryError
from microcred.core.search import search
from microcred.infrastructure.dataset import parse_dataset
from tests.builders import NOW, certificate_record, user_record


def _dataset():
    return parse_dataset({
        "user1": user_record(
            [
                certificate_record(id="py", courseName="Python Basics", skills=["Python"]),
                certificate_record(
                    id="ds", courseName="Data Science", skills=["Python", "Pandas"],
                    description="Uses python heavily",
                ),
                certificate_record(
                    id="web", courseName="Web Design", skills=["CSS"],
                    description="Layouts", institution="Design Academy",
                    category="Design", platform="Udemy",
                ),
            ],
        ),
        "user2": user_record(
            [certificate_record(id="ml", courseName="Machine Learning", skills=["ML"],
                                description="Models", institution="Stanford",
                                category="AI", platform="edX")],
            id="user2", name="Bob Python", email="bob@example.com",
        ),
    })


def _summary(results):
    return [
        (m.kind, m.certificate.certificate.id if m.certificate else m.user.id, m.score)
        for m in results.matches
    ]


def test_blank_query_raises_invalid_query():
    with pytest.raises(InvalidQueryError):
        search(_dataset(), "", now=NOW)
    with pytest.raises(InvalidQueryError):
        search(_dataset(), "   ", now=NOW)
    with pytest.raises(InvalidQueryError):
        search(_dataset(), None, now=NOW)


def test_no_match_returns_empty_results():
    results = search(_dataset(), "nonexistent-term", now=NOW)
    assert results.matches == []
    assert results.total_results == 0


def test_scores_rank_course_name_and_skill_hits_first():
    results = search(_dataset(), "python", now=NOW)
    assert _summary(results) == [
        ("certificate", "py", 1.0),
        ("user", "user2", 0.9),
        ("certificate", "ds", 0.7),
    ]


def test_ties_keep_discovery_order():
    results = search(_dataset(), "design", now=NOW)
    # course name hit (0.8) first; no other certificate mentions design
    assert _summary(results) == [("certificate", "web", 0.8)]
    results = search(_dataset(), "example.com", now=NOW)
    assert [m.user.id for m in results.matches] == ["user1", "user2"]


def test_base_score_for_non_name_non_skill_match():
    results = search(_dataset(), "stanford", now=NOW)
    assert _summary(results) == [("certificate", "ml", 0.5)]


def test_users_scope_excludes_certificates():
    results = search(_dataset(), "python", "users", now=NOW)
    assert _summary(results) == [("user", "user2", 0.9)]


def test_certificates_scope_excludes_users():
    results = search(_dataset(), "python", "certificates", now=NOW)
    assert [kind for kind, _, _ in _summary(results)] == ["certificate", "certificate"]


def test_user_bio_is_searchable():
    dataset = parse_dataset({"u": user_record(bio="Cloud architect", id="u")})
    assert [m.user.id for m in search(dataset, "cloud", now=NOW).matches] == ["u"]


def test_limit_truncates_after_ranking():
    results = search(_dataset(), "python", limit=1, now=NOW)
    assert _summary(results) == [("certificate", "py", 1.0)]
    assert results.total_results == 3


def test_query_is_trimmed_and_case_insensitive():
    results = search(_dataset(), "  PYTHON  ", "certificates", now=NOW)
    assert len(results.matches) == 2


def test_match_to_dict_shapes():
    results = search(_dataset(), "python", now=NOW)
    cert_hit, user_hit = results.matches[0].to_dict(), results.matches[1].to_dict()
    assert cert_hit["type"] == "certificate"
    assert cert_hit["certificate"]["id"] == "py"
    assert "isExpired" in cert_hit["certificate"]
    assert cert_hit["user"] == {"id": "user1", "name": "Alice Johnson", "email": "alice@example.com"}
    assert user_hit == {
        "type": "user",
        "user": {
            "id": "user2", "name": "Bob Python", "email": "bob@example.com",
            "totalCertificates": 99, "profileImage": None,
        },
        "relevanceScore": 0.9,
    }


def test_unknown_scope_raises_invalid_query():
    with pytest.raises(InvalidQueryError) as exc_info:
        search(_dataset(), "python", "courses", now=NOW)
    assert exc_info.value.http_status == 400
