from datetime import datetime

from pydantic import BaseModel


class CandidateDashboardStats(BaseModel):
    active_applications: int = 0
    upcoming_interviews: int = 0
    saved_jobs: int = 0


class RecentApplication(BaseModel):
    id: str
    title: str
    company: str | None = None
    status: str
    step: str | None = None
    updated_at: datetime | None = None


class RecommendedJob(BaseModel):
    id: str
    title: str
    company: str | None = None
    employment_type: str | None = None


class CandidateDashboard(BaseModel):
    stats: CandidateDashboardStats
    recent_applications: list[RecentApplication]
    recommended_jobs: list[RecommendedJob]


class EmployerDashboardStats(BaseModel):
    open_roles: int = 0
    active_candidates: int = 0
    interviews_this_week: int = 0


class RecentJob(BaseModel):
    id: str
    title: str
    location: str | None = None
    status: str
    applicants: int = 0
    updated_at: datetime | None = None


class EmployerDashboard(BaseModel):
    stats: EmployerDashboardStats
    recent_jobs: list[RecentJob]
    pipeline: dict[str, int]
