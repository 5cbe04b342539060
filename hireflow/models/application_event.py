from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from hireflow.core.clock import utcnow
from hireflow.database import Base


class ApplicationEvent(Base):
    """Append-only timeline entry. Rows are inserted by the status engine and never updated."""

    __tablename__ = "application_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        String,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(String(32), nullable=False)  # status_changed | interview_scheduled | note
    from_status = Column(String(32))
    to_status = Column(String(32))
    message = Column(Text)
    actor_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    application = relationship("Application", back_populates="events")
    actor = relationship("User")
