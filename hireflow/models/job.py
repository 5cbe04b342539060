from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from hireflow.core.clock import utcnow
from hireflow.core.statuses import JobStatus
from hireflow.database import Base


class Job(Base):
    """A posting owned by exactly one employer for its whole lifetime."""

    __tablename__ = "jobs"

    id = Column(String, primary_key=True, index=True)
    employer_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    location = Column(String(255))
    description = Column(Text)
    employment_type = Column(String(64))
    remote = Column(Boolean, default=False, nullable=False)
    status = Column(String(16), default=JobStatus.OPEN.value, nullable=False)  # draft | open | closed
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    employer = relationship("User", back_populates="jobs")
    applications = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    saved_by = relationship("SavedJob", back_populates="job", cascade="all, delete-orphan", passive_deletes=True)
