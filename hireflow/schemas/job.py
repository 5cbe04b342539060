from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from hireflow.core.clock import as_utc
from hireflow.core.statuses import JobStatus


class JobCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    location: str | None = None
    description: str | None = None
    employment_type: str | None = None  # full-time | part-time | internship | contract
    remote: bool = False
    status: JobStatus = JobStatus.OPEN

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v


class JobUpdate(BaseModel):
    """Partial update; fields left out keep their current value."""

    title: str | None = Field(None, min_length=1, max_length=255)
    location: str | None = None
    description: str | None = None
    employment_type: str | None = None
    remote: bool | None = None
    status: JobStatus | None = None


class JobStatusUpdate(BaseModel):
    status: JobStatus


class JobResponse(BaseModel):
    id: str
    employer_id: str
    title: str
    location: str | None = None
    description: str | None = None
    employment_type: str | None = None
    remote: bool = False
    status: JobStatus
    company: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class JobListItem(JobResponse):
    is_saved: bool = False


class JobDetail(JobResponse):
    is_applied: bool = False
    is_saved: bool = False


class EmployerJobItem(JobResponse):
    applications_count: int = 0


class JobPage(BaseModel):
    items: list[JobListItem]
    total: int
    page: int
    page_size: int


def job_fields(job) -> dict:
    return {
        "id": job.id,
        "employer_id": job.employer_id,
        "title": job.title,
        "location": job.location,
        "description": job.description,
        "employment_type": job.employment_type,
        "remote": bool(job.remote),
        "status": job.status,
        "company": job.employer.company_name if job.employer else None,
        "created_at": as_utc(job.created_at),
        "updated_at": as_utc(job.updated_at),
    }
