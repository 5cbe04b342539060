from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from hireflow.core.clock import utcnow
from hireflow.database import Base


class SavedJob(Base):
    __tablename__ = "saved_jobs"

    id = Column(String, primary_key=True, index=True)
    candidate_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(String, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    candidate = relationship("User", back_populates="saved_jobs")
    job = relationship("Job", back_populates="saved_by")

    __table_args__ = (
        UniqueConstraint("candidate_id", "job_id", name="uq_saved_jobs_candidate_job"),
    )
