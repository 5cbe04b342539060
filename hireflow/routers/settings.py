import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hireflow.database import get_db
from hireflow.dependencies import get_current_user
from hireflow.models.user import User
from hireflow.repos.settings_repo import get_or_create, update
from hireflow.schemas.settings import SettingsResponse, SettingsUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse)
def read_settings(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return get_or_create(db, user.id)


@router.patch("", response_model=SettingsResponse)
def update_settings(
    data: SettingsUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    fields = data.model_dump(exclude_unset=True)
    if fields.get("theme") is not None:
        fields["theme"] = fields["theme"].value
    settings = update(db, user.id, **fields)
    logger.info("Settings updated for user=%s fields=%s", user.id, sorted(fields))
    return settings
