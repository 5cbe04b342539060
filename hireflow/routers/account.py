import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hireflow.database import get_db
from hireflow.dependencies import get_current_user
from hireflow.models.user import User
from hireflow.repos.user_repo import delete_user
from hireflow.schemas.auth import MessageResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/account", tags=["account"])


@router.delete("", response_model=MessageResponse)
def delete_account(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Permanently delete the caller's account.

    Rows owned by the user are removed by cascade: jobs, applications and
    their timelines, bookmarks, profile, skills and settings. Uploaded resume
    files stay in blob storage.
    """
    email = user.email
    delete_user(db, user.id)
    logger.info("Account deleted: %s", email)
    return MessageResponse(message="Account deleted")
