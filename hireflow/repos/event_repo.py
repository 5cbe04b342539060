from sqlalchemy.orm import Session, joinedload

from hireflow.core.clock import utcnow
from hireflow.models.application_event import ApplicationEvent

TIMELINE_LIMIT = 100


def append(
    db: Session,
    *,
    application_id: str,
    event_type: str,
    from_status: str | None,
    to_status: str | None,
    message: str | None = None,
    actor_id: str | None = None,
) -> ApplicationEvent:
    """Stage one timeline entry. Not committed: the caller commits it with the status change."""
    event = ApplicationEvent(
        application_id=application_id,
        type=event_type,
        from_status=from_status,
        to_status=to_status,
        message=message,
        actor_id=actor_id,
        created_at=utcnow(),
    )
    db.add(event)
    db.flush()
    return event


def list_for_application(
    db: Session,
    application_id: str,
    *,
    newest_first: bool = False,
    limit: int = TIMELINE_LIMIT,
) -> list[ApplicationEvent]:
    # id is monotonic, so it breaks ties between events sharing a timestamp
    order = (
        (ApplicationEvent.created_at.desc(), ApplicationEvent.id.desc())
        if newest_first
        else (ApplicationEvent.created_at.asc(), ApplicationEvent.id.asc())
    )
    return (
        db.query(ApplicationEvent)
        .options(joinedload(ApplicationEvent.actor))
        .filter(ApplicationEvent.application_id == application_id)
        .order_by(*order)
        .limit(limit)
        .all()
    )
