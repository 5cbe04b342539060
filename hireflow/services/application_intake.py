"""
Candidate-side apply and withdraw.

At most one application row exists per (job, candidate). Applying again after
withdrawing reactivates that row; applying while it is still active is a
conflict. The unique constraint backs this up when two applies race.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hireflow.core.clock import utcnow
from hireflow.core.errors import ConflictError, NotFoundError, ValidationError
from hireflow.core.statuses import ApplicationStatus, JobStatus
from hireflow.models.application import Application
from hireflow.repos import application_repo, job_repo
from hireflow.services import resume_ingestion
from hireflow.services.blob_store import BlobStore
from hireflow.services.resume_ingestion import ResumeUpload

logger = logging.getLogger(__name__)

ALREADY_APPLIED = "You have already applied for this job."
STEP_RECEIVED = "Application received"
STEP_RESUBMITTED = "Application re-submitted"
STEP_WITHDRAWN = "Application withdrawn"


def apply(
    db: Session,
    store: BlobStore,
    candidate_id: str,
    job_id: str,
    resume: ResumeUpload,
    cover_letter: str | None = None,
) -> tuple[Application, bool]:
    """
    Submit or re-submit an application.

    Returns (application, reactivated). The resume is validated before any
    lookup and stored after the duplicate check, but before the commit. When a
    concurrent apply wins the unique constraint the stored blob is left behind;
    the blob store is append-only and nothing removes it.
    """
    resume_ingestion.validate(resume.content_type, resume.size_bytes)

    job = job_repo.get_by_id(db, job_id)
    if job is None or job.status == JobStatus.DRAFT.value:
        raise NotFoundError("Job not found")
    if job.status == JobStatus.CLOSED.value:
        raise ValidationError("This job is no longer accepting applications.")

    existing = application_repo.get_for_pair(db, job_id, candidate_id)
    if existing is not None and existing.status != ApplicationStatus.WITHDRAWN.value:
        raise ConflictError(ALREADY_APPLIED)

    resume_url = resume_ingestion.ingest(
        store, resume.data, resume.content_type, resume.size_bytes, resume.filename
    )
    cover_letter = (cover_letter or "").strip() or None

    try:
        if existing is not None:
            existing.status = ApplicationStatus.APPLIED.value
            existing.step = STEP_RESUBMITTED
            existing.resume_url = resume_url
            existing.cover_letter = cover_letter
            existing.next_interview_at = None
            existing.updated_at = utcnow()
            application = existing
        else:
            application = application_repo.insert(
                db,
                job_id=job_id,
                candidate_id=candidate_id,
                resume_url=resume_url,
                cover_letter=cover_letter,
                step=STEP_RECEIVED,
            )
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Concurrent apply rejected: candidate=%s job=%s", candidate_id, job_id)
        raise ConflictError(ALREADY_APPLIED) from e
    except Exception:
        db.rollback()
        logger.exception("Apply failed: candidate=%s job=%s", candidate_id, job_id)
        raise

    db.refresh(application)
    reactivated = existing is not None
    logger.info(
        "Application %s: candidate=%s job=%s application=%s",
        "re-submitted" if reactivated else "received",
        candidate_id,
        job_id,
        application.id,
    )
    return application, reactivated


def withdraw(db: Session, candidate_id: str, job_id: str) -> Application:
    application = application_repo.get_active_for_pair(db, job_id, candidate_id)
    if application is None:
        raise NotFoundError("No active application found for this job.")
    try:
        application.status = ApplicationStatus.WITHDRAWN.value
        application.step = STEP_WITHDRAWN
        application.updated_at = utcnow()
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Withdraw failed: candidate=%s job=%s", candidate_id, job_id)
        raise
    db.refresh(application)
    logger.info("Application withdrawn: candidate=%s job=%s application=%s", candidate_id, job_id, application.id)
    return application
