"""Error Hierarchy tests: codes, statuses and the REST envelope."""

from microcred.core.errors import (
    DatasetUnavailableError, ErrorCategory, InvalidDateError,
    InvalidQueryError, MicrocredError, ResourceNotFoundError,
)
from microcred.core.numeric import mean_or_none, percentage, round_half_up


def test_all_errors_share_base():
    for exc in (
        InvalidDateError("completionDate", None),
        InvalidQueryError(),
        ResourceNotFoundError("User", "nobody"),
        DatasetUnavailableError("missing", "data.json"),
    ):
        assert isinstance(exc, MicrocredError)


def test_http_statuses():
    assert InvalidQueryError().http_status == 400
    assert ResourceNotFoundError("User", "nobody").http_status == 404
    assert InvalidDateError("completionDate", "x").http_status == 500
    assert DatasetUnavailableError("missing", "data.json").http_status == 503


def test_invalid_date_is_a_data_integrity_error():
    assert InvalidDateError("joinDate", "x").category is ErrorCategory.DATA_INTEGRITY


def test_to_response_envelope():
    response = ResourceNotFoundError(
        "User", "nobody", {"availableUsers": ["user1"]},
    ).to_response()
    assert response["success"] is False
    assert response["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert response["error"]["message"] == "User with ID 'nobody' not found"
    assert response["error"]["details"] == {"availableUsers": ["user1"]}
    assert "timestamp" in response


def test_to_response_omits_empty_details():
    assert "details" not in InvalidQueryError().to_response()["error"]


# ─── numeric helpers ─────────────────────────────────────────────

def test_round_half_up():
    assert round_half_up(2.675, 2) == 2.68
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(66.66666, 1) == 66.7


def test_mean_or_none():
    assert mean_or_none([]) is None
    assert mean_or_none(iter([1, 2, 3])) == 2


def test_percentage_guards_zero_whole():
    assert percentage(1, 0) == 0.0
    assert percentage(1, 3) == 33.3
