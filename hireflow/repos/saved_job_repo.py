import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from hireflow.core.security import generate_id
from hireflow.core.statuses import ApplicationStatus
from hireflow.models.application import Application
from hireflow.models.job import Job
from hireflow.models.saved_job import SavedJob

logger = logging.getLogger(__name__)


def get_for_pair(db: Session, candidate_id: str, job_id: str) -> SavedJob | None:
    return db.query(SavedJob).filter(SavedJob.candidate_id == candidate_id, SavedJob.job_id == job_id).first()


def save(db: Session, candidate_id: str, job_id: str) -> SavedJob:
    """
    Bookmark a job. Saving an already-saved job returns the existing row;
    a concurrent insert that loses the unique-constraint race does the same.
    """
    existing = get_for_pair(db, candidate_id, job_id)
    if existing:
        return existing
    saved = SavedJob(id=generate_id(), candidate_id=candidate_id, job_id=job_id)
    db.add(saved)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Saved job already exists: candidate=%s job=%s", candidate_id, job_id)
        return get_for_pair(db, candidate_id, job_id)
    db.refresh(saved)
    return saved


def unsave(db: Session, candidate_id: str, job_id: str) -> int:
    """Remove the bookmark if present. Returns the number of rows deleted (0 or 1)."""
    deleted = (
        db.query(SavedJob)
        .filter(SavedJob.candidate_id == candidate_id, SavedJob.job_id == job_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted


def unsave_by_id(db: Session, candidate_id: str, saved_id: str) -> bool:
    deleted = (
        db.query(SavedJob)
        .filter(SavedJob.id == saved_id, SavedJob.candidate_id == candidate_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0


def list_for_candidate(db: Session, candidate_id: str) -> list[tuple[SavedJob, bool]]:
    """Candidate's bookmarks, newest first, each flagged with whether an active application exists."""
    rows = (
        db.query(SavedJob, Application.id)
        .options(joinedload(SavedJob.job).joinedload(Job.employer))
        .outerjoin(
            Application,
            (Application.job_id == SavedJob.job_id)
            & (Application.candidate_id == candidate_id)
            & (Application.status != ApplicationStatus.WITHDRAWN.value),
        )
        .filter(SavedJob.candidate_id == candidate_id)
        .order_by(SavedJob.created_at.desc())
        .all()
    )
    return [(saved, application_id is not None) for saved, application_id in rows]


def saved_job_ids(db: Session, candidate_id: str, job_ids: list[str]) -> set[str]:
    if not job_ids:
        return set()
    rows = (
        db.query(SavedJob.job_id)
        .filter(SavedJob.candidate_id == candidate_id, SavedJob.job_id.in_(job_ids))
        .all()
    )
    return {job_id for (job_id,) in rows}


def count_for_candidate(db: Session, candidate_id: str) -> int:
    return db.query(SavedJob).filter(SavedJob.candidate_id == candidate_id).count()
