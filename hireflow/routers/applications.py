import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from hireflow.core.errors import ValidationError
from hireflow.core.statuses import parse_status
from hireflow.database import get_db
from hireflow.dependencies import Pagination, get_pagination, require_candidate
from hireflow.models.user import User
from hireflow.repos import application_repo, event_repo
from hireflow.schemas.application import (
    ApplicationResponse,
    ApplicationSubmitted,
    CandidateApplicationPage,
    CandidateApplicationStats,
    TimelineEventResponse,
    application_to_response,
    event_to_response,
)
from hireflow.services import application_intake
from hireflow.services.blob_store import BlobStore, get_blob_store
from hireflow.services.ownership import load_owned_application
from hireflow.services.resume_ingestion import ResumeUpload, read_upload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("", response_model=ApplicationSubmitted, status_code=status.HTTP_201_CREATED)
def submit_application(
    job_id: str = Form(...),
    resume: UploadFile = File(..., description="Resume (PDF, DOC or DOCX, max 5MB)"),
    cover_letter: str | None = Form(None),
    db: Session = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
    user: User = Depends(require_candidate),
):
    data = read_upload(resume.file, resume.content_type, resume.size)
    upload = ResumeUpload(data=data, content_type=resume.content_type, filename=resume.filename)
    application, reactivated = application_intake.apply(db, store, user.id, job_id, upload, cover_letter)
    return ApplicationSubmitted(
        message="Application re-submitted." if reactivated else "Application submitted.",
        application=application_to_response(application),
    )


@router.delete("/by-job/{job_id}", response_model=ApplicationResponse)
def withdraw_application(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    application = application_intake.withdraw(db, user.id, job_id)
    return application_to_response(application)


@router.get("/candidate", response_model=CandidateApplicationPage)
def list_my_applications(
    status_filter: str | None = Query(None, alias="status"),
    paging: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    wanted = None
    if status_filter:
        wanted = parse_status(status_filter)
        if wanted is None:
            raise ValidationError("Invalid status filter.")
    items, total = application_repo.list_for_candidate(
        db, user.id, status=wanted, limit=paging.page_size, offset=paging.offset
    )
    return CandidateApplicationPage(
        stats=CandidateApplicationStats(**application_repo.candidate_stats(db, user.id)),
        items=[application_to_response(a) for a in items],
        total=total,
        page=paging.page,
        page_size=paging.page_size,
    )


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_my_application(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    return application_to_response(load_owned_application(db, user, application_id))


@router.get("/{application_id}/events", response_model=list[TimelineEventResponse])
def get_my_application_events(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    """Timeline for the candidate's own application, newest first."""
    application = load_owned_application(db, user, application_id)
    events = event_repo.list_for_application(db, application.id, newest_first=True)
    return [event_to_response(e) for e in events]
