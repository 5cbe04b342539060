from sqlalchemy import Column, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from hireflow.core.clock import utcnow
from hireflow.core.statuses import ApplicationStatus
from hireflow.database import Base


class Application(Base):
    """
    One candidate's application to one job.

    The (job_id, candidate_id) pair is unique: a withdrawn application is
    reactivated in place, so at most one row, and therefore at most one
    active row, exists per pair.
    """

    __tablename__ = "applications"

    id = Column(String, primary_key=True, index=True)
    job_id = Column(String, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    candidate_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(32), default=ApplicationStatus.APPLIED.value, nullable=False, index=True)
    step = Column(String(255))
    resume_url = Column(String(2048))
    cover_letter = Column(Text)
    next_interview_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    job = relationship("Job", back_populates="applications")
    candidate = relationship("User", back_populates="applications")
    events = relationship(
        "ApplicationEvent",
        back_populates="application",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ApplicationEvent.id",
    )

    __table_args__ = (
        UniqueConstraint("job_id", "candidate_id", name="uq_applications_job_candidate"),
    )
