from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from hireflow.core.clock import utcnow
from hireflow.database import Base


class CandidateProfile(Base):
    """Candidate-facing profile fields surfaced to employers."""

    __tablename__ = "candidate_profiles"

    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    headline = Column(String(255))
    location = Column(String(255))
    experience_years = Column(Integer)
    bio = Column(Text)
    resume_url = Column(String(2048))
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="profile")


class CandidateSkill(Base):
    __tablename__ = "candidate_skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    skill = Column(String(100), nullable=False)

    user = relationship("User", back_populates="skills")

    __table_args__ = (
        UniqueConstraint("user_id", "skill", name="uq_candidate_skills_user_skill"),
    )
