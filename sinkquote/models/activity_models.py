# sinkquote/models/activity_models.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from sinkquote.core.clock import utcnow
from sinkquote.core.db import Base


class UserActivity(Base):
    __tablename__ = "user_activity"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    username = Column(String, nullable=False)
    message = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
