import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hireflow.core.errors import ValidationError
from hireflow.core.statuses import parse_status
from hireflow.database import get_db
from hireflow.dependencies import Pagination, get_pagination, require_employer
from hireflow.models.user import User
from hireflow.repos import application_repo, event_repo
from hireflow.schemas.application import (
    ApplicationResponse,
    EmployerApplicationPage,
    EmployerApplicationStats,
    NoteRequest,
    StatusTransitionRequest,
    TimelineEventResponse,
    TransitionResponse,
    application_to_response,
    event_to_response,
)
from hireflow.services import status_transitions
from hireflow.services.ownership import load_owned_application

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/employer/applications", tags=["employer-applications"])


@router.get("", response_model=EmployerApplicationPage)
def list_applications(
    status_filter: str | None = Query(None, alias="status"),
    paging: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    """Applications across all of the employer's jobs, newest first, with intake stats."""
    wanted = None
    if status_filter:
        wanted = parse_status(status_filter)
        if wanted is None:
            raise ValidationError("Invalid status filter.")
    items, total = application_repo.list_for_employer(
        db, user.id, status=wanted, limit=paging.page_size, offset=paging.offset
    )
    return EmployerApplicationPage(
        stats=EmployerApplicationStats(**application_repo.employer_stats(db, user.id)),
        items=[application_to_response(a) for a in items],
        total=total,
        page=paging.page,
        page_size=paging.page_size,
    )


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_application(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    return application_to_response(load_owned_application(db, user, application_id))


@router.patch("/{application_id}/status", response_model=TransitionResponse)
def change_status(
    application_id: str,
    data: StatusTransitionRequest,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    sent = data.model_fields_set
    application, event = status_transitions.transition(
        db,
        application_id,
        user,
        data.status,
        step=data.step if "step" in sent else status_transitions.UNSET,
        next_interview_at=data.next_interview_at if "next_interview_at" in sent else status_transitions.UNSET,
        message=data.message,
    )
    return TransitionResponse(
        application=application_to_response(application),
        event=event_to_response(event),
    )


@router.post(
    "/{application_id}/notes",
    response_model=TimelineEventResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_note(
    application_id: str,
    data: NoteRequest,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    return event_to_response(status_transitions.add_note(db, application_id, user, data.message))


@router.get("/{application_id}/events", response_model=list[TimelineEventResponse])
def get_events(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    """Timeline oldest first, as a reviewer reads it."""
    application = load_owned_application(db, user, application_id)
    return [event_to_response(e) for e in event_repo.list_for_application(db, application.id)]
