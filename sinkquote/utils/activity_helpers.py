# sinkquote/utils/activity_helpers.py
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from sinkquote.models.activity_models import UserActivity


async def log_user_activity(
    db: AsyncSession,
    user_id: Optional[int] = None,
    username: Optional[str] = None,
    message: str = "",
    commit: bool = False,
):
    """
    Adds a user activity log to the session. The caller is responsible for the commit,
    so the audit row lands in the same transaction as the change it describes.
    """
    activity = UserActivity(
        user_id=user_id,
        username=username or "system",
        message=message,
    )
    db.add(activity)
    if commit:
        await db.commit()
