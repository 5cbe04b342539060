from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from hireflow.core.clock import utcnow
from hireflow.database import Base


class UserSettings(Base):
    """Notification, security and display preferences; one row per user, created on first read."""

    __tablename__ = "user_settings"

    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    job_alerts_email = Column(Boolean, default=True, nullable=False)
    job_alerts_push = Column(Boolean, default=True, nullable=False)
    activity_emails = Column(Boolean, default=True, nullable=False)
    marketing_emails = Column(Boolean, default=False, nullable=False)
    login_alerts = Column(Boolean, default=True, nullable=False)
    two_factor = Column(Boolean, default=False, nullable=False)
    theme = Column(String(16), default="system", nullable=False)  # system | light | dark
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="settings")
