"""Status vocabularies shared by models, services and schemas.

Applications use one canonical vocabulary. Rows written by the older schema
(``screening``, ``interview``, ``offer``) are mapped onto it by
``normalize_status`` whenever they are read.
"""
from enum import Enum


class UserRole(str, Enum):
    CANDIDATE = "candidate"
    EMPLOYER = "employer"


class JobStatus(str, Enum):
    DRAFT = "draft"
    OPEN = "open"
    CLOSED = "closed"


class ApplicationStatus(str, Enum):
    APPLIED = "applied"
    SHORTLISTED = "shortlisted"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    OFFERED = "offered"
    HIRED = "hired"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class EventType(str, Enum):
    STATUS_CHANGED = "status_changed"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    NOTE = "note"


class PipelineBucket(str, Enum):
    NEW = "new"
    REVIEWING = "reviewing"
    INTERVIEW = "interview"
    HIRED = "hired"
    REJECTED = "rejected"


LEGACY_STATUS_ALIASES = {
    "screening": ApplicationStatus.SHORTLISTED,
    "interview": ApplicationStatus.INTERVIEW_SCHEDULED,
    "offer": ApplicationStatus.OFFERED,
}

# Statuses that still count as "in progress" for a candidate
ACTIVE_STATUSES = (
    ApplicationStatus.APPLIED,
    ApplicationStatus.SHORTLISTED,
    ApplicationStatus.INTERVIEW_SCHEDULED,
    ApplicationStatus.OFFERED,
)

BUCKET_BY_STATUS = {
    ApplicationStatus.APPLIED: PipelineBucket.NEW,
    ApplicationStatus.SHORTLISTED: PipelineBucket.REVIEWING,
    ApplicationStatus.INTERVIEW_SCHEDULED: PipelineBucket.INTERVIEW,
    ApplicationStatus.OFFERED: PipelineBucket.INTERVIEW,
    ApplicationStatus.HIRED: PipelineBucket.HIRED,
    ApplicationStatus.REJECTED: PipelineBucket.REJECTED,
}

# Lower rank = further along the pipeline
BUCKET_RANK = {
    PipelineBucket.HIRED: 0,
    PipelineBucket.INTERVIEW: 1,
    PipelineBucket.REVIEWING: 2,
    PipelineBucket.NEW: 3,
    PipelineBucket.REJECTED: 4,
}


def parse_status(value) -> ApplicationStatus | None:
    """Strict parse of a canonical status; None when the value is not canonical."""
    if isinstance(value, ApplicationStatus):
        return value
    try:
        return ApplicationStatus(str(value))
    except ValueError:
        return None


def normalize_status(value) -> ApplicationStatus | None:
    """Canonical status for a stored value, accepting legacy aliases."""
    status = parse_status(value)
    if status is not None:
        return status
    return LEGACY_STATUS_ALIASES.get(str(value or "").strip().lower())


def bucket_for_status(value) -> PipelineBucket:
    """Pipeline bucket for a raw status. Withdrawn and unknown values count as new."""
    status = normalize_status(value)
    return BUCKET_BY_STATUS.get(status, PipelineBucket.NEW)
