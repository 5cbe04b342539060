import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from hireflow.database import get_db
from hireflow.dependencies import require_candidate
from hireflow.models.user import User
from hireflow.repos.profile_repo import get_profile, get_skills, replace_skills, upsert, upsert_resume_url
from hireflow.schemas.profile import ProfileResponse, ProfileUpdate, ResumeResponse, SkillsResponse, SkillsUpdate
from hireflow.services.blob_store import BlobStore, get_blob_store
from hireflow.services.resume_ingestion import ingest, read_upload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
def read_profile(
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    return get_profile(db, user.id) or ProfileResponse()


@router.put("", response_model=ProfileResponse)
def update_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    return upsert(db, user.id, **data.model_dump(exclude_unset=True))


@router.get("/resume", response_model=ResumeResponse)
def read_resume(
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    profile = get_profile(db, user.id)
    return ResumeResponse(resume_url=profile.resume_url if profile else None)


@router.post("/resume", response_model=ResumeResponse)
def upload_resume(
    file: UploadFile = File(..., description="Resume (PDF, DOC or DOCX, max 5MB)"),
    db: Session = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
    user: User = Depends(require_candidate),
):
    data = read_upload(file.file, file.content_type, file.size)
    url = ingest(store, data, file.content_type, len(data), file.filename)
    profile = upsert_resume_url(db, user.id, url)
    logger.info("Profile resume updated for user=%s", user.id)
    return ResumeResponse(resume_url=profile.resume_url)


@router.get("/skills", response_model=SkillsResponse)
def read_skills(
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    return SkillsResponse(skills=get_skills(db, user.id))


@router.put("/skills", response_model=SkillsResponse)
def update_skills(
    data: SkillsUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    """Replace the candidate's skill tags wholesale."""
    return SkillsResponse(skills=replace_skills(db, user.id, data.skills))
