import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hireflow.core.errors import NotFoundError
from hireflow.core.statuses import JobStatus
from hireflow.database import get_db
from hireflow.dependencies import require_candidate
from hireflow.models.user import User
from hireflow.repos.job_repo import get_by_id as get_job
from hireflow.repos.saved_job_repo import list_for_candidate, save, unsave, unsave_by_id
from hireflow.schemas.saved_job import SaveJobRequest, SavedJobItem, SavedJobList, SavedJobStats

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/saved-jobs", tags=["saved-jobs"])


@router.get("", response_model=SavedJobList)
def list_saved_jobs(
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    items = []
    for saved, applied in list_for_candidate(db, user.id):
        job = saved.job
        items.append(
            SavedJobItem(
                id=saved.id,
                job_id=job.id,
                job_title=job.title,
                company=job.employer.company_name if job.employer else None,
                location=job.location,
                remote=bool(job.remote),
                job_status=job.status,
                applied=applied,
                saved_at=saved.created_at,
            )
        )
    stats = SavedJobStats(
        total=len(items),
        open=sum(1 for i in items if i.job_status == JobStatus.OPEN.value),
        applied=sum(1 for i in items if i.applied),
    )
    return SavedJobList(stats=stats, jobs=items)


@router.post("")
def save_job(
    data: SaveJobRequest,
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    """Idempotent: saving an already-saved job succeeds without creating a second bookmark."""
    job = get_job(db, data.job_id)
    if not job or job.status == JobStatus.DRAFT.value:
        raise NotFoundError("Job not found")
    saved = save(db, user.id, job.id)
    return {"message": "Job saved successfully", "id": saved.id if saved else None}


@router.delete("/by-job/{job_id}")
def unsave_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    removed = unsave(db, user.id, job_id)
    return {"message": "Job removed from saved jobs", "removed": bool(removed)}


@router.delete("/{saved_id}")
def delete_saved_job(
    saved_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    if not unsave_by_id(db, user.id, saved_id):
        raise NotFoundError("Saved job not found")
    return {"message": "Job removed from saved jobs"}
