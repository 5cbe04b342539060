"""
Ownership checks shared by every employer- and candidate-scoped operation.

A target outside the caller's scope is reported exactly like a missing one,
so callers cannot probe for ids belonging to someone else.
"""
import logging

from sqlalchemy.orm import Session

from hireflow.core.errors import NotFoundError
from hireflow.core.statuses import UserRole
from hireflow.models.application import Application
from hireflow.models.job import Job
from hireflow.repos import application_repo, job_repo

logger = logging.getLogger(__name__)

APPLICATION_NOT_FOUND = "Application not found"
JOB_NOT_FOUND = "Job not found"


def authorize(subject_id: str, role: str, target) -> bool:
    if isinstance(target, Application):
        if role == UserRole.CANDIDATE.value:
            return target.candidate_id == subject_id
        if role == UserRole.EMPLOYER.value:
            return target.job is not None and target.job.employer_id == subject_id
        return False
    if isinstance(target, Job):
        return role == UserRole.EMPLOYER.value and target.employer_id == subject_id
    return False


def load_owned_application(db: Session, actor, application_id: str) -> Application:
    application = application_repo.get_by_id(db, application_id)
    if application is None or not authorize(actor.id, actor.role, application):
        if application is not None:
            logger.info("Ownership denied: user=%s application=%s", actor.id, application_id)
        raise NotFoundError(APPLICATION_NOT_FOUND)
    return application


def load_owned_job(db: Session, actor, job_id: str) -> Job:
    job = job_repo.get_by_id(db, job_id)
    if job is None or not authorize(actor.id, actor.role, job):
        if job is not None:
            logger.info("Ownership denied: user=%s job=%s", actor.id, job_id)
        raise NotFoundError(JOB_NOT_FOUND)
    return job
