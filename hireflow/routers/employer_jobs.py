import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hireflow.core.errors import NotFoundError
from hireflow.database import get_db
from hireflow.dependencies import require_employer
from hireflow.models.user import User
from hireflow.repos import application_repo, job_repo
from hireflow.schemas.application import ApplicationResponse, application_to_response
from hireflow.schemas.job import (
    EmployerJobItem,
    JobCreate,
    JobResponse,
    JobStatusUpdate,
    JobUpdate,
    job_fields,
)
from hireflow.services.ownership import JOB_NOT_FOUND, load_owned_job

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/employer/jobs", tags=["employer-jobs"])


@router.get("", response_model=list[EmployerJobItem])
def list_my_jobs(
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    rows = job_repo.list_for_employer(db, user.id)
    return [EmployerJobItem(**job_fields(job), applications_count=count) for job, count in rows]


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    data: JobCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    job = job_repo.create(
        db,
        user.id,
        title=data.title,
        location=data.location,
        description=data.description,
        employment_type=data.employment_type,
        remote=data.remote,
        status=data.status.value,
    )
    return JobResponse(**job_fields(job))


@router.get("/{job_id}", response_model=EmployerJobItem)
def get_my_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    job = load_owned_job(db, user, job_id)
    count = len(application_repo.list_for_job(db, job.id))
    return EmployerJobItem(**job_fields(job), applications_count=count)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    data: JobUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    fields = data.model_dump(exclude_unset=True)
    if "status" in fields and fields["status"] is not None:
        fields["status"] = fields["status"].value
    job = job_repo.update(db, job_id, user.id, **fields)
    if not job:
        raise NotFoundError(JOB_NOT_FOUND)
    logger.info("Job updated: job=%s employer=%s fields=%s", job_id, user.id, sorted(fields))
    return JobResponse(**job_fields(job))


@router.patch("/{job_id}/status", response_model=JobResponse)
def set_job_status(
    job_id: str,
    data: JobStatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    job = job_repo.update(db, job_id, user.id, status=data.status.value)
    if not job:
        raise NotFoundError(JOB_NOT_FOUND)
    logger.info("Job status set: job=%s status=%s", job_id, data.status.value)
    return JobResponse(**job_fields(job))


@router.delete("/{job_id}")
def delete_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    if not job_repo.delete(db, job_id, user.id):
        raise NotFoundError(JOB_NOT_FOUND)
    return {"ok": True}


@router.get("/{job_id}/applications", response_model=list[ApplicationResponse])
def list_job_applications(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    job = load_owned_job(db, user, job_id)
    return [application_to_response(a) for a in application_repo.list_for_job(db, job.id)]
