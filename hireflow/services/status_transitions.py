"""
Employer-driven status changes on an application.

Every change writes the application row and appends one timeline event in a
single transaction: either both are committed or neither is.
"""
import logging

from sqlalchemy.orm import Session

from hireflow.core.clock import as_utc, utcnow
from hireflow.core.errors import ForbiddenError, ValidationError
from hireflow.core.statuses import ApplicationStatus, EventType, parse_status
from hireflow.models.application import Application
from hireflow.models.application_event import ApplicationEvent
from hireflow.repos import event_repo
from hireflow.services.ownership import load_owned_application

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


# Marks an optional field the caller did not send; None means "clear it"
UNSET = _Unset()


def _require_employer(actor) -> None:
    if not actor.is_employer:
        raise ForbiddenError("Employer access required")


def _clean(text: str | None) -> str | None:
    if text is None:
        return None
    text = text.strip()
    return text or None


def transition(
    db: Session,
    application_id: str,
    actor,
    new_status,
    *,
    step=UNSET,
    next_interview_at=UNSET,
    message: str | None = None,
) -> tuple[Application, ApplicationEvent]:
    _require_employer(actor)
    application = load_owned_application(db, actor, application_id)

    status = parse_status(new_status)
    if status is None:
        raise ValidationError("Invalid status. Must be a valid application status.")

    if next_interview_at is UNSET:
        resulting_interview_at = application.next_interview_at
    else:
        next_interview_at = as_utc(next_interview_at)
        resulting_interview_at = next_interview_at
    if status == ApplicationStatus.INTERVIEW_SCHEDULED and resulting_interview_at is None:
        raise ValidationError("An interview time is required to schedule an interview.")

    from_status = application.status
    if next_interview_at is not None and next_interview_at is not UNSET:
        event_type = EventType.INTERVIEW_SCHEDULED
    elif status == ApplicationStatus.INTERVIEW_SCHEDULED:
        event_type = EventType.INTERVIEW_SCHEDULED
    else:
        event_type = EventType.STATUS_CHANGED

    try:
        application.status = status.value
        step_text = _clean(step) if isinstance(step, str) else None
        if step_text:
            application.step = step_text
        if next_interview_at is not UNSET:
            application.next_interview_at = next_interview_at
        application.updated_at = utcnow()
        event = event_repo.append(
            db,
            application_id=application.id,
            event_type=event_type.value,
            from_status=from_status,
            to_status=status.value,
            message=_clean(message),
            actor_id=actor.id,
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Status transition failed: application=%s to=%s", application_id, status.value)
        raise

    db.refresh(application)
    logger.info(
        "Application %s moved %s -> %s by %s (%s)",
        application.id,
        from_status,
        status.value,
        actor.id,
        event_type.value,
    )
    return application, event


def add_note(db: Session, application_id: str, actor, message: str | None) -> ApplicationEvent:
    """Append a free-text note to an owned application's timeline without changing its status."""
    _require_employer(actor)
    application = load_owned_application(db, actor, application_id)
    text = _clean(message)
    if not text:
        raise ValidationError("Note message is required.")
    current = application.status
    try:
        event = event_repo.append(
            db,
            application_id=application.id,
            event_type=EventType.NOTE.value,
            from_status=current,
            to_status=current,
            message=text,
            actor_id=actor.id,
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Adding note failed: application=%s", application_id)
        raise
    logger.info("Note added to application %s by %s", application.id, actor.id)
    return event

