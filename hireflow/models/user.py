from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship, validates

from hireflow.core.clock import utcnow
from hireflow.core.statuses import UserRole
from hireflow.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String(32), nullable=False)  # candidate | employer
    company_name = Column(String(255), nullable=True)  # employers only
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    jobs = relationship("Job", back_populates="employer", cascade="all, delete-orphan", passive_deletes=True)
    applications = relationship(
        "Application",
        back_populates="candidate",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    saved_jobs = relationship("SavedJob", back_populates="candidate", cascade="all, delete-orphan", passive_deletes=True)
    profile = relationship(
        "CandidateProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    skills = relationship(
        "CandidateSkill",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CandidateSkill.skill",
    )
    settings = relationship(
        "UserSettings",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @validates("role")
    def _validate_role(self, key, value):
        value = UserRole(value).value
        if self.role is not None and self.role != value:
            raise ValueError("User role cannot change after creation")
        return value

    @property
    def is_employer(self) -> bool:
        return self.role == UserRole.EMPLOYER.value

    @property
    def is_candidate(self) -> bool:
        return self.role == UserRole.CANDIDATE.value
