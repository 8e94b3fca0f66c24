# sinkquote/middleware/activity_logger.py
import logging

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from sinkquote.core.db import AsyncSessionLocal
from sinkquote.utils.activity_helpers import log_user_activity

logger = logging.getLogger(__name__)


class ActivityLoggerMiddleware(BaseHTTPMiddleware):
    """Records one activity row per mutating request made by a signed-in user."""

    def __init__(self, app, session_factory=AsyncSessionLocal):
        super().__init__(app)
        self.session_factory = session_factory

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        # request.state.user is set by get_current_user during the endpoint call
        user = getattr(request.state, "user", None)
        if user is None or request.method not in ("POST", "PUT", "PATCH", "DELETE"):
            return response

        message = f"Performed {request.method} on {request.url.path} ({response.status_code})"
        try:
            async with self.session_factory() as db:
                await log_user_activity(db, user_id=user.id, username=user.username, message=message, commit=True)
        except SQLAlchemyError:
            logger.exception("Failed to log activity for %s %s", request.method, request.url.path)

        return response
