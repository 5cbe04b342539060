import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hireflow.core.errors import NotFoundError
from hireflow.core.statuses import JobStatus
from hireflow.database import get_db
from hireflow.dependencies import Pagination, get_current_user, get_pagination
from hireflow.models.user import User
from hireflow.repos.application_repo import applied_job_ids
from hireflow.repos.job_repo import get_by_id, list_open_paginated
from hireflow.repos.saved_job_repo import saved_job_ids
from hireflow.schemas.job import JobDetail, JobListItem, JobPage, job_fields

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=JobPage)
def list_jobs(
    q: str | None = Query(None, max_length=200),
    location: str | None = Query(None, max_length=200),
    remote: bool | None = None,
    paging: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Open jobs, newest first. ``is_saved`` is only ever true for candidates."""
    jobs, total = list_open_paginated(
        db,
        search=q,
        location=location,
        remote=remote,
        limit=paging.page_size,
        offset=paging.offset,
    )
    saved = saved_job_ids(db, user.id, [j.id for j in jobs]) if user.is_candidate else set()
    logger.debug("GET /jobs user=%s q=%s total=%d", user.id, q, total)
    return JobPage(
        items=[JobListItem(**job_fields(j), is_saved=j.id in saved) for j in jobs],
        total=total,
        page=paging.page,
        page_size=paging.page_size,
    )


@router.get("/{job_id}", response_model=JobDetail)
def get_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    job = get_by_id(db, job_id)
    # Drafts are only visible to their owner
    if not job or (job.status == JobStatus.DRAFT.value and job.employer_id != user.id):
        raise NotFoundError("Job not found")
    is_applied = is_saved = False
    if user.is_candidate:
        is_applied = bool(applied_job_ids(db, user.id, [job.id]))
        is_saved = bool(saved_job_ids(db, user.id, [job.id]))
    return JobDetail(**job_fields(job), is_applied=is_applied, is_saved=is_saved)
