import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from hireflow.core.clock import utcnow
from hireflow.core.security import generate_id
from hireflow.core.statuses import JobStatus
from hireflow.models.application import Application
from hireflow.models.job import Job

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("title", "location", "description", "employment_type", "remote", "status")
# Only these columns accept an explicit None; for the rest None means "leave as is"
_CLEARABLE_FIELDS = ("location", "description", "employment_type")


def get_by_id(db: Session, job_id: str) -> Job | None:
    return db.query(Job).options(joinedload(Job.employer)).filter(Job.id == job_id).first()


def get_owned(db: Session, job_id: str, employer_id: str) -> Job | None:
    """Job by id, only if it belongs to employer_id."""
    return db.query(Job).filter(Job.id == job_id, Job.employer_id == employer_id).first()


def create(
    db: Session,
    employer_id: str,
    *,
    title: str,
    location: str | None = None,
    description: str | None = None,
    employment_type: str | None = None,
    remote: bool = False,
    status: str = JobStatus.OPEN.value,
) -> Job:
    job = Job(
        id=generate_id(),
        employer_id=employer_id,
        title=title,
        location=location,
        description=description,
        employment_type=employment_type,
        remote=remote,
        status=status,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Job created: job=%s employer=%s status=%s", job.id, employer_id, status)
    return job


def update(db: Session, job_id: str, employer_id: str, **fields) -> Job | None:
    job = get_owned(db, job_id, employer_id)
    if not job:
        return None
    for key in _UPDATABLE_FIELDS:
        if key not in fields:
            continue
        value = fields[key]
        if value is None and key not in _CLEARABLE_FIELDS:
            continue
        setattr(job, key, value)
    job.updated_at = utcnow()
    db.commit()
    db.refresh(job)
    return job


def delete(db: Session, job_id: str, employer_id: str) -> bool:
    """Delete an owned job; applications, their events and bookmarks go with it."""
    job = get_owned(db, job_id, employer_id)
    if not job:
        return False
    db.delete(job)
    db.commit()
    logger.info("Job deleted: job=%s employer=%s", job_id, employer_id)
    return True


def list_for_employer(db: Session, employer_id: str) -> list[tuple[Job, int]]:
    """Employer's jobs, newest first, each with its application count."""
    rows = (
        db.query(Job, func.count(Application.id))
        .outerjoin(Application, Application.job_id == Job.id)
        .filter(Job.employer_id == employer_id)
        .group_by(Job.id)
        .order_by(Job.created_at.desc())
        .all()
    )
    return [(job, int(count or 0)) for job, count in rows]


def list_open_paginated(
    db: Session,
    *,
    search: str | None = None,
    location: str | None = None,
    remote: bool | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Job], int]:
    """Open jobs with simple predicate filters. Returns (items, total)."""
    q = db.query(Job).options(joinedload(Job.employer)).filter(Job.status == JobStatus.OPEN.value)
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(or_(Job.title.ilike(term), Job.description.ilike(term)))
    if location and location.strip():
        q = q.filter(Job.location.ilike(f"%{location.strip()}%"))
    if remote is not None:
        q = q.filter(Job.remote == remote)
    total = q.count()
    items = q.order_by(Job.created_at.desc()).offset(offset).limit(limit).all()
    return items, total


def count_open_for_employer(db: Session, employer_id: str) -> int:
    return (
        db.query(Job)
        .filter(Job.employer_id == employer_id, Job.status == JobStatus.OPEN.value)
        .count()
    )


def list_recent_for_employer(db: Session, employer_id: str, limit: int = 5) -> list[tuple[Job, int]]:
    rows = (
        db.query(Job, func.count(Application.id))
        .outerjoin(Application, Application.job_id == Job.id)
        .filter(Job.employer_id == employer_id)
        .group_by(Job.id)
        .order_by(Job.updated_at.desc())
        .limit(limit)
        .all()
    )
    return [(job, int(count or 0)) for job, count in rows]


def list_latest_open(db: Session, limit: int = 5) -> list[Job]:
    return (
        db.query(Job)
        .options(joinedload(Job.employer))
        .filter(Job.status == JobStatus.OPEN.value)
        .order_by(Job.created_at.desc())
        .limit(limit)
        .all()
    )
