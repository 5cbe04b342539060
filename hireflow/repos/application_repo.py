"""
Application reads and the uncommitted writes used by the pipeline services.

Writes here only flush; the calling service owns the transaction so an
application change and its timeline event commit together.
"""
from datetime import datetime, timedelta

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from hireflow.core.clock import utcnow
from hireflow.core.security import generate_id
from hireflow.core.statuses import (
    ACTIVE_STATUSES,
    LEGACY_STATUS_ALIASES,
    ApplicationStatus,
)
from hireflow.models.application import Application
from hireflow.models.candidate_profile import CandidateProfile, CandidateSkill
from hireflow.models.job import Job
from hireflow.models.user import User

PIPELINE_LIMIT = 200


def stored_values(*statuses: ApplicationStatus) -> list[str]:
    """Every raw value that normalizes to one of the given statuses, legacy aliases included."""
    values = [s.value for s in statuses]
    values.extend(alias for alias, target in LEGACY_STATUS_ALIASES.items() if target in statuses)
    return values


def _with_relations(q):
    return q.options(
        joinedload(Application.job).joinedload(Job.employer),
        joinedload(Application.candidate),
    )


def get_by_id(db: Session, application_id: str) -> Application | None:
    return _with_relations(db.query(Application)).filter(Application.id == application_id).first()


def get_for_pair(db: Session, job_id: str, candidate_id: str) -> Application | None:
    return (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.candidate_id == candidate_id)
        .first()
    )


def get_active_for_pair(db: Session, job_id: str, candidate_id: str) -> Application | None:
    return (
        db.query(Application)
        .filter(
            Application.job_id == job_id,
            Application.candidate_id == candidate_id,
            Application.status != ApplicationStatus.WITHDRAWN.value,
        )
        .first()
    )


def insert(
    db: Session,
    *,
    job_id: str,
    candidate_id: str,
    resume_url: str,
    cover_letter: str | None,
    step: str,
) -> Application:
    """Stage a new application row. Raises IntegrityError on flush if the pair already exists."""
    now = utcnow()
    application = Application(
        id=generate_id(),
        job_id=job_id,
        candidate_id=candidate_id,
        status=ApplicationStatus.APPLIED.value,
        step=step,
        resume_url=resume_url,
        cover_letter=cover_letter,
        created_at=now,
        updated_at=now,
    )
    db.add(application)
    db.flush()
    return application


def _count(q) -> int:
    return int(q.scalar() or 0)


def _candidate_query(db: Session, candidate_id: str):
    return db.query(func.count(Application.id)).filter(Application.candidate_id == candidate_id)


def candidate_stats(db: Session, candidate_id: str) -> dict:
    return {
        "total": _count(_candidate_query(db, candidate_id)),
        "active": _count(
            _candidate_query(db, candidate_id).filter(Application.status.in_(stored_values(*ACTIVE_STATUSES)))
        ),
        "rejected": _count(
            _candidate_query(db, candidate_id).filter(
                Application.status.in_(stored_values(ApplicationStatus.REJECTED))
            )
        ),
        "offers": _count(
            _candidate_query(db, candidate_id).filter(
                Application.status.in_(stored_values(ApplicationStatus.OFFERED, ApplicationStatus.HIRED))
            )
        ),
    }


def list_for_candidate(
    db: Session,
    candidate_id: str,
    *,
    status: ApplicationStatus | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Application], int]:
    q = _with_relations(db.query(Application)).filter(Application.candidate_id == candidate_id)
    if status is not None:
        q = q.filter(Application.status.in_(stored_values(status)))
    total = q.count()
    items = q.order_by(Application.created_at.desc()).offset(offset).limit(limit).all()
    return items, total


def _employer_query(db: Session, employer_id: str, *columns):
    return (
        db.query(*columns)
        .join(Job, Application.job_id == Job.id)
        .filter(Job.employer_id == employer_id)
    )


def employer_stats(db: Session, employer_id: str, now: datetime | None = None) -> dict:
    """Totals for applications on the employer's jobs: all time, since midnight UTC, last 7 days."""
    now = now or utcnow()
    start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_ago = now - timedelta(days=7)
    counted = func.count(Application.id)
    return {
        "total": _count(_employer_query(db, employer_id, counted)),
        "today": _count(_employer_query(db, employer_id, counted).filter(Application.created_at >= start_of_today)),
        "this_week": _count(_employer_query(db, employer_id, counted).filter(Application.created_at >= week_ago)),
    }


def list_for_employer(
    db: Session,
    employer_id: str,
    *,
    status: ApplicationStatus | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Application], int]:
    q = _with_relations(_employer_query(db, employer_id, Application))
    if status is not None:
        q = q.filter(Application.status.in_(stored_values(status)))
    total = q.count()
    items = q.order_by(Application.created_at.desc()).offset(offset).limit(limit).all()
    return items, total


def list_for_job(db: Session, job_id: str) -> list[Application]:
    return (
        _with_relations(db.query(Application))
        .filter(Application.job_id == job_id)
        .order_by(Application.created_at.desc())
        .all()
    )


def list_pipeline(db: Session, employer_id: str, stage: str | None = None) -> list[Application]:
    """
    Applications on the employer's jobs, most recently updated first.

    ``stage`` matches the raw status ("In Review" -> "in_review") or any
    substring of the step label, case-insensitively.
    """
    q = _with_relations(_employer_query(db, employer_id, Application))
    stage = (stage or "").strip()
    if stage:
        lowered = stage.lower()
        underscored = "_".join(lowered.split())
        q = q.filter(
            or_(
                func.lower(Application.status) == lowered,
                func.lower(Application.status) == underscored,
                Application.step.ilike(f"%{stage}%"),
            )
        )
    return q.order_by(Application.updated_at.desc()).limit(PIPELINE_LIMIT).all()


def count_active_for_candidate(db: Session, candidate_id: str) -> int:
    return _count(
        _candidate_query(db, candidate_id).filter(Application.status.in_(stored_values(*ACTIVE_STATUSES)))
    )


def count_upcoming_interviews_for_candidate(db: Session, candidate_id: str, now: datetime | None = None) -> int:
    now = now or utcnow()
    return _count(_candidate_query(db, candidate_id).filter(Application.next_interview_at > now))


def list_recent_for_candidate(db: Session, candidate_id: str, limit: int = 5) -> list[Application]:
    return (
        _with_relations(db.query(Application))
        .filter(Application.candidate_id == candidate_id)
        .order_by(Application.updated_at.desc())
        .limit(limit)
        .all()
    )


def count_distinct_candidates_for_employer(db: Session, employer_id: str) -> int:
    return _count(_employer_query(db, employer_id, func.count(func.distinct(Application.candidate_id))))


def count_interviews_within(db: Session, employer_id: str, days: int = 7, now: datetime | None = None) -> int:
    now = now or utcnow()
    return _count(
        _employer_query(db, employer_id, func.count(Application.id)).filter(
            Application.next_interview_at > now,
            Application.next_interview_at < now + timedelta(days=days),
        )
    )


def status_counts_for_employer(db: Session, employer_id: str) -> list[tuple[str, int]]:
    rows = (
        _employer_query(db, employer_id, Application.status, func.count(Application.id))
        .group_by(Application.status)
        .all()
    )
    return [(status, int(count)) for status, count in rows]


def applied_job_ids(db: Session, candidate_id: str, job_ids: list[str]) -> set[str]:
    if not job_ids:
        return set()
    rows = (
        db.query(Application.job_id)
        .filter(
            Application.candidate_id == candidate_id,
            Application.job_id.in_(job_ids),
            Application.status != ApplicationStatus.WITHDRAWN.value,
        )
        .all()
    )
    return {job_id for (job_id,) in rows}


def rows_for_candidate_aggregation(db: Session, employer_id: str, candidate_id: str | None = None):
    """
    Flat (application, job, candidate, profile, skill) rows for the employer's jobs.

    Profile and skill are outer-joined, so a candidate without either still
    yields one row per application with those columns set to None.
    """
    q = (
        db.query(Application, Job, User, CandidateProfile, CandidateSkill.skill)
        .join(Job, Application.job_id == Job.id)
        .join(User, Application.candidate_id == User.id)
        .outerjoin(CandidateProfile, CandidateProfile.user_id == User.id)
        .outerjoin(CandidateSkill, CandidateSkill.user_id == User.id)
        .filter(Job.employer_id == employer_id)
    )
    if candidate_id is not None:
        q = q.filter(Application.candidate_id == candidate_id)
    return q.order_by(Application.created_at.asc(), Application.id.asc()).all()
