"""Request Dependencies: dataset provider and per-request reference time.

Invariants:
    - Exactly one reference time per request; every derived figure in a response
      is computed against it
    - The dataset is loaded once per request through the DatasetProvider protocol
    - Tests swap both via app.dependency_overrides
"""

from datetime import datetime, timezone
from typing import Mapping

from fastapi import Depends

from microcred.config import get_settings
from microcred.core.portfolio import User
from microcred.core.repository_protocols import DatasetProvider
from microcred.infrastructure.dataset import JsonFileDataset


def get_dataset_provider() -> DatasetProvider:
    return JsonFileDataset(get_settings().data_file)


def get_reference_time() -> datetime:
    return datetime.now(timezone.utc)


async def get_dataset(
    provider: DatasetProvider = Depends(get_dataset_provider),
) -> Mapping[str, User]:
    """Fresh immutable snapshot of the dataset for this request."""
    return await provider.load()


def envelope(data: object, now: datetime, **extra: object) -> dict:
    """Success envelope shared by every endpoint."""
    return {"success": True, "data": data, **extra, "timestamp": now.isoformat()}
