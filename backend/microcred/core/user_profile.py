"""User Profile & Certificate Detail: presentation-ready records for the API.

Invariants:
    - Pure functions: no IO, reference time passed explicitly
    - Authoritative totals come from the certificate collection, never the
      advisory counters stored on the user record
    - related certificates share platform OR category and exclude the certificate itself
"""

import base64
import math
from datetime import datetime
from typing import Any

from microcred.core.certificate_stats import PortfolioStatistics
from microcred.core.certificate_view import (
    as_reference_time, days_between, derive_view, parse_timestamp,
)
from microcred.core.portfolio import Certificate, User

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/150x150/2563eb/white?text={initial}"
DEFAULT_LOCATION = "Global"
VERIFICATION_METHOD = "Digital signature"


def profile_image(user: User) -> str:
    """Stored image, or a placeholder avatar with the user's initial."""
    if user.profile_image:
        return user.profile_image
    return PLACEHOLDER_IMAGE_URL.format(initial=user.name[:1])


def summarize_user(user: User) -> dict[str, Any]:
    """Directory entry for the user listing."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "totalCertificates": user.total_certificates,
        "totalHours": user.total_hours,
        "joinDate": user.join_date,
        "profileImage": profile_image(user),
    }


def build_user_profile(
    user: User, statistics: PortfolioStatistics, now: datetime,
) -> dict[str, Any]:
    """Profile block of the certificates response, with display defaults."""
    member_since = math.floor(
        days_between(parse_timestamp(user.join_date, "joinDate"), as_reference_time(now))
    )
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "joinDate": user.join_date,
        "profileImage": profile_image(user),
        "bio": user.bio or (
            f"Professional with {statistics.total_certificates} verified "
            f"certificates and {statistics.total_hours} hours of learning"
        ),
        "location": user.location or DEFAULT_LOCATION,
        "linkedin": user.linkedin,
        "github": user.github,
        "website": user.website,
        "portfolio": user.portfolio,
        "totalCertificates": statistics.total_certificates,
        "totalHours": statistics.total_hours,
        "memberSince": member_since,
    }


def certificate_hash(user: User, certificate: Certificate) -> str:
    raw = f"{certificate.id}_{certificate.completion_date}_{user.id}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def related_certificates(user: User, certificate: Certificate) -> list[dict[str, Any]]:
    return [
        {
            "id": other.id,
            "name": other.course_name,
            "platform": other.platform,
            "category": other.category,
        }
        for other in user.certificates
        if other.id != certificate.id and (
            other.platform == certificate.platform
            or other.category == certificate.category
        )
    ]


def build_certificate_detail(
    user: User, certificate: Certificate, now: datetime,
) -> dict[str, Any]:
    """Derived view plus verification details and related certificates."""
    detail = derive_view(certificate, now).to_dict()
    detail["verificationDetails"] = {
        "verifiedBy": certificate.platform,
        "verificationMethod": VERIFICATION_METHOD,
        "lastVerified": as_reference_time(now).isoformat(),
        "publicKey": f"{certificate.id}_public_key",
        "certificateHash": certificate_hash(user, certificate),
    }
    detail["relatedCertificates"] = related_certificates(user, certificate)
    return detail
