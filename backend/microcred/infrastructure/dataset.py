"""JSON Dataset Provider: loads the portfolio file and resolves user/certificate lookups.

Invariants:
    - The file is re-read on every load() (no long-lived cache, no write path)
    - Keys of the returned mapping are lowercase user identifiers
    - Missing file, unreadable file, or invalid JSON -> DatasetUnavailableError
    - Unknown user/certificate -> ResourceNotFoundError (the core never raises it)

Design Decisions:
    - Blocking file read runs in a worker thread (asyncio.to_thread) so one
      request's IO does not stall other requests on the event loop
    - The returned mapping is a MappingProxyType over freshly built frozen records:
      each request gets its own immutable snapshot
"""

import asyncio
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from microcred.core.domain_types import UserKey
from microcred.core.errors import DatasetUnavailableError, ResourceNotFoundError
from microcred.core.portfolio import Certificate, User

logger = logging.getLogger(__name__)


def parse_dataset(raw: Any, source: str = "<memory>") -> Mapping[str, User]:
    """Build the user mapping from decoded JSON ({userKey: userRecord})."""
    if not isinstance(raw, dict):
        raise DatasetUnavailableError("top-level JSON value must be an object", source)
    users: dict[UserKey, User] = {}
    for key, record in raw.items():
        if not isinstance(record, dict):
            raise DatasetUnavailableError(f"user record '{key}' is not an object", source)
        users[UserKey(str(key).lower())] = User.from_record(record)
    return MappingProxyType(users)


class JsonFileDataset:
    """DatasetProvider backed by a JSON file on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> Any:
        try:
            with self.path.open(encoding="utf-8") as fh:
                return json.load(fh)
        except FileNotFoundError:
            logger.error(f"Dataset file not found: {self.path}")
            raise DatasetUnavailableError(
                "Please ensure the data file exists", str(self.path),
            ) from None
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Dataset file unreadable: {self.path}: {e}")
            raise DatasetUnavailableError(
                "Data file could not be read", str(self.path),
            ) from e

    async def load(self) -> Mapping[str, User]:
        raw = await asyncio.to_thread(self._read)
        return parse_dataset(raw, str(self.path))


class InMemoryDataset:
    """DatasetProvider over already-decoded records (fixtures, embedding)."""

    def __init__(self, raw: dict[str, Any]):
        self._users = parse_dataset(raw)

    async def load(self) -> Mapping[str, User]:
        return self._users


# ─── Lookups ────────────────────────────────────────────────────

def find_user(dataset: Mapping[str, User], user_id: str) -> User:
    """Case-insensitive user lookup. Raises ResourceNotFoundError."""
    user = dataset.get(user_id.lower())
    if user is None:
        raise ResourceNotFoundError(
            "User", user_id, {"availableUsers": list(dataset.keys())},
        )
    return user


def find_certificate(user: User, certificate_id: str) -> Certificate:
    """Exact-id certificate lookup within one user. Raises ResourceNotFoundError."""
    for certificate in user.certificates:
        if certificate.id == certificate_id:
            return certificate
    raise ResourceNotFoundError(
        "Certificate", certificate_id,
        {
            "availableCertificates": [
                {"id": c.id, "name": c.course_name} for c in user.certificates
            ],
        },
    )
