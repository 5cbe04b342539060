from datetime import datetime

from pydantic import BaseModel

from hireflow.core.clock import as_utc
from hireflow.core.statuses import EventType, normalize_status


class ApplicationJobInfo(BaseModel):
    id: str
    title: str
    location: str | None = None
    company: str | None = None


class ApplicationCandidateInfo(BaseModel):
    id: str
    name: str | None = None
    email: str


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    candidate_id: str
    status: str  # canonical value; legacy rows are mapped on read
    step: str | None = None
    resume_url: str | None = None
    cover_letter: str | None = None
    next_interview_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    job: ApplicationJobInfo | None = None
    candidate: ApplicationCandidateInfo | None = None


class ApplicationSubmitted(BaseModel):
    message: str
    application: ApplicationResponse


class CandidateApplicationStats(BaseModel):
    total: int = 0
    active: int = 0
    rejected: int = 0
    offers: int = 0


class CandidateApplicationPage(BaseModel):
    stats: CandidateApplicationStats
    items: list[ApplicationResponse]
    total: int
    page: int
    page_size: int


class EmployerApplicationStats(BaseModel):
    total: int = 0
    today: int = 0
    this_week: int = 0


class EmployerApplicationPage(BaseModel):
    stats: EmployerApplicationStats
    items: list[ApplicationResponse]
    total: int
    page: int
    page_size: int


class StatusTransitionRequest(BaseModel):
    """
    Body for an employer status change.

    ``next_interview_at`` distinguishes "not sent" (left unchanged) from an
    explicit null (cleared); see ``model_fields_set``.
    """

    status: str  # validated by status_transitions.transition (400 on unknown values)
    step: str | None = None
    next_interview_at: datetime | None = None
    message: str | None = None


class NoteRequest(BaseModel):
    message: str


class TimelineEventResponse(BaseModel):
    id: int
    application_id: str
    type: EventType
    from_status: str | None = None
    to_status: str | None = None
    message: str | None = None
    actor_id: str | None = None
    actor_name: str | None = None
    created_at: datetime | None = None


class TransitionResponse(BaseModel):
    ok: bool = True
    application: ApplicationResponse
    event: TimelineEventResponse


class PipelineResponse(BaseModel):
    stage: str | None = None
    items: list[ApplicationResponse]


def application_to_response(application) -> ApplicationResponse:
    status = normalize_status(application.status)
    job = application.job
    candidate = application.candidate
    return ApplicationResponse(
        id=application.id,
        job_id=application.job_id,
        candidate_id=application.candidate_id,
        status=status.value if status else application.status,
        step=application.step,
        resume_url=application.resume_url,
        cover_letter=application.cover_letter,
        next_interview_at=as_utc(application.next_interview_at),
        created_at=as_utc(application.created_at),
        updated_at=as_utc(application.updated_at),
        job=ApplicationJobInfo(
            id=job.id,
            title=job.title,
            location=job.location,
            company=job.employer.company_name if job.employer else None,
        )
        if job is not None
        else None,
        candidate=ApplicationCandidateInfo(id=candidate.id, name=candidate.name, email=candidate.email)
        if candidate is not None
        else None,
    )


def event_to_response(event) -> TimelineEventResponse:
    return TimelineEventResponse(
        id=event.id,
        application_id=event.application_id,
        type=event.type,
        from_status=event.from_status,
        to_status=event.to_status,
        message=event.message,
        actor_id=event.actor_id,
        actor_name=event.actor.name if event.actor else None,
        created_at=as_utc(event.created_at),
    )
