from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hireflow.core.statuses import normalize_status
from hireflow.database import get_db
from hireflow.dependencies import require_candidate, require_employer
from hireflow.models.user import User
from hireflow.schemas.dashboard import (
    CandidateDashboard,
    CandidateDashboardStats,
    EmployerDashboard,
    EmployerDashboardStats,
    RecentApplication,
    RecentJob,
    RecommendedJob,
)
from hireflow.services.dashboard_service import candidate_dashboard, employer_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _company(job) -> str | None:
    return job.employer.company_name if job.employer else None


@router.get("/candidate", response_model=CandidateDashboard)
def get_candidate_dashboard(
    db: Session = Depends(get_db),
    user: User = Depends(require_candidate),
):
    data = candidate_dashboard(db, user.id)
    recent = []
    for a in data["recent_applications"]:
        status = normalize_status(a.status)
        recent.append(
            RecentApplication(
                id=a.id,
                title=a.job.title,
                company=_company(a.job),
                status=status.value if status else a.status,
                step=a.step,
                updated_at=a.updated_at,
            )
        )
    return CandidateDashboard(
        stats=CandidateDashboardStats(**data["stats"]),
        recent_applications=recent,
        recommended_jobs=[
            RecommendedJob(id=j.id, title=j.title, company=_company(j), employment_type=j.employment_type)
            for j in data["recommended_jobs"]
        ],
    )


@router.get("/employer", response_model=EmployerDashboard)
def get_employer_dashboard(
    db: Session = Depends(get_db),
    user: User = Depends(require_employer),
):
    data = employer_dashboard(db, user.id)
    return EmployerDashboard(
        stats=EmployerDashboardStats(**data["stats"]),
        recent_jobs=[
            RecentJob(
                id=j.id,
                title=j.title,
                location=j.location,
                status=j.status,
                applicants=count,
                updated_at=j.updated_at,
            )
            for j, count in data["recent_jobs"]
        ],
        pipeline=data["pipeline"],
    )
