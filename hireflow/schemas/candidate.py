from datetime import datetime

from pydantic import BaseModel

from hireflow.core.statuses import PipelineBucket
from hireflow.schemas.application import ApplicationResponse
from hireflow.schemas.profile import ProfileResponse


class CandidateSummary(BaseModel):
    id: str
    name: str
    email: str | None = None
    headline: str | None = None
    location: str | None = None
    experience_years: int | None = None
    skills: list[str] = []
    last_active_at: datetime | None = None
    applied_jobs_count: int = 0
    status: PipelineBucket

    class Config:
        from_attributes = True


class CandidateList(BaseModel):
    candidates: list[CandidateSummary]
    total: int


class CandidateUser(BaseModel):
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True


class CandidateDetail(BaseModel):
    user: CandidateUser
    profile: ProfileResponse | None = None
    skills: list[str] = []
    summary: CandidateSummary
    applications: list[ApplicationResponse] = []
