import logging

from sqlalchemy.orm import Session

from hireflow.core.clock import utcnow
from hireflow.models.user_settings import UserSettings

logger = logging.getLogger(__name__)

SETTING_FIELDS = (
    "job_alerts_email",
    "job_alerts_push",
    "activity_emails",
    "marketing_emails",
    "login_alerts",
    "two_factor",
    "theme",
)


def _get(db: Session, user_id: str) -> UserSettings | None:
    return db.query(UserSettings).filter(UserSettings.user_id == user_id).first()


def get_or_create(db: Session, user_id: str) -> UserSettings:
    """Settings for user_id; the defaults row is persisted the first time it is asked for."""
    settings = _get(db, user_id)
    if settings is None:
        settings = UserSettings(user_id=user_id)
        db.add(settings)
        db.commit()
        db.refresh(settings)
        logger.info("Default settings created for user=%s", user_id)
    return settings


def update(db: Session, user_id: str, **fields) -> UserSettings:
    """Partial update; keys left out or passed as None keep their current value."""
    settings = _get(db, user_id)
    if settings is None:
        settings = UserSettings(user_id=user_id)
        db.add(settings)
    for key in SETTING_FIELDS:
        value = fields.get(key)
        if value is not None:
            setattr(settings, key, value)
    settings.updated_at = utcnow()
    db.commit()
    db.refresh(settings)
    return settings
