import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hireflow.core.statuses import PipelineBucket
from hireflow.database import get_db
from hireflow.dependencies import require_employer
from hireflow.models.user import User
from hireflow.repos.application_repo import list_pipeline
from hireflow.schemas.application import PipelineResponse, application_to_response
from hireflow.schemas.candidate import CandidateDetail, CandidateList, CandidateSummary, CandidateUser
from hireflow.schemas.profile import ProfileResponse
from hireflow.services.candidate_aggregator import get_candidate_detail, list_candidates_for_employer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/employer", tags=["employer-candidates"])


@router.get("/pipeline", response_model=PipelineResponse)
def pipeline(
    stage: str | None = Query(None, max_length=100),
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    """Applications whose status or step matches ``stage``; all applications when omitted."""
    items = list_pipeline(db, user.id, stage)
    return PipelineResponse(
        stage=(stage or "").strip() or None,
        items=[application_to_response(a) for a in items],
    )


@router.get("/candidates", response_model=CandidateList)
def list_candidates(
    status: PipelineBucket | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    candidates = list_candidates_for_employer(db, user.id, status=status)
    return CandidateList(
        candidates=[CandidateSummary.model_validate(c) for c in candidates],
        total=len(candidates),
    )


@router.get("/candidates/{candidate_id}", response_model=CandidateDetail)
def candidate_detail(
    candidate_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    """Only candidates who applied to one of this employer's jobs are visible."""
    detail = get_candidate_detail(db, user.id, candidate_id)
    profile = detail["profile"]
    return CandidateDetail(
        user=CandidateUser.model_validate(detail["user"]),
        profile=ProfileResponse.model_validate(profile) if profile else None,
        skills=detail["skills"],
        summary=CandidateSummary.model_validate(detail["aggregate"]),
        applications=[application_to_response(a) for a, _ in detail["applications"]],
    )
