"""User Directory: lists every user in the dataset."""

import logging
from datetime import datetime
from typing import Mapping

from fastapi import APIRouter, Depends

from microcred.api.dependencies import envelope, get_dataset, get_reference_time
from microcred.core.portfolio import User
from microcred.core.user_profile import summarize_user

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("")
async def list_users(
    dataset: Mapping[str, User] = Depends(get_dataset),
    now: datetime = Depends(get_reference_time),
):
    """All users with their advisory totals, in dataset order."""
    users = [summarize_user(user) for user in dataset.values()]
    logger.info(f"GET /api/users - {len(users)} users", extra={"returned": len(users)})
    return envelope(users, now, count=len(users))
