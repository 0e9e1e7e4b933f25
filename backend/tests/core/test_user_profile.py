"""User Profile & Certificate Detail tests."""

import base64

from microcred.core.certificate_stats import compute_statistics
from microcred.core.certificate_view import derive_views
from microcred.core.user_profile import (
    build_certificate_detail, build_user_profile, profile_image, summarize_user,
)
from tests.builders import NOW, certificate_record, days_ago, make_user


def test_placeholder_image_uses_first_letter():
    user = make_user(name="Zed")
    assert profile_image(user).endswith("?text=Z")


def test_stored_image_wins_over_placeholder():
    user = make_user(profileImage="https://img.example/me.png")
    assert profile_image(user) == "https://img.example/me.png"


def test_summary_reports_advisory_counters():
    summary = summarize_user(make_user())
    assert summary["totalCertificates"] == 99
    assert summary["totalHours"] == 999
    assert summary["joinDate"] == "2023-06-15"


def test_profile_recomputes_totals_and_fills_defaults():
    user = make_user(
        [certificate_record(id="a", hours=12), certificate_record(id="b", hours=8)],
        joinDate=days_ago(100),
    )
    stats = compute_statistics(derive_views(user.certificates, NOW))
    profile = build_user_profile(user, stats, NOW)
    assert profile["totalCertificates"] == 2
    assert profile["totalHours"] == 20
    assert profile["bio"] == "Professional with 2 verified certificates and 20 hours of learning"
    assert profile["location"] == "Global"
    assert profile["memberSince"] == 100


def test_profile_keeps_stored_bio_and_location():
    user = make_user(bio="Data nerd", location="Lisbon", github="https://github.com/a")
    stats = compute_statistics([])
    profile = build_user_profile(user, stats, NOW)
    assert profile["bio"] == "Data nerd"
    assert profile["location"] == "Lisbon"
    assert profile["github"] == "https://github.com/a"


def test_certificate_detail_adds_verification_and_related():
    user = make_user([
        certificate_record(id="a", platform="Coursera", category="AI"),
        certificate_record(id="b", platform="Coursera", category="Business"),
        certificate_record(id="c", platform="Udemy", category="AI"),
        certificate_record(id="d", platform="edX", category="Design"),
    ])
    target = user.certificates[0]
    detail = build_certificate_detail(user, target, NOW)

    assert detail["id"] == "a"
    assert "isExpired" in detail
    verification = detail["verificationDetails"]
    assert verification["verifiedBy"] == "Coursera"
    assert verification["publicKey"] == "a_public_key"
    assert base64.b64decode(verification["certificateHash"]).decode() == "a_2024-01-10_user1"
    assert verification["lastVerified"] == NOW.isoformat()
    assert [r["id"] for r in detail["relatedCertificates"]] == ["b", "c"]
    assert detail["relatedCertificates"][0]["name"] == "Python for Everybody"
