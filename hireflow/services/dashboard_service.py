from sqlalchemy.orm import Session

from hireflow.core.statuses import normalize_status
from hireflow.repos import application_repo, job_repo, saved_job_repo

RECENT_LIMIT = 5


def candidate_dashboard(db: Session, candidate_id: str) -> dict:
    return {
        "stats": {
            "active_applications": application_repo.count_active_for_candidate(db, candidate_id),
            "upcoming_interviews": application_repo.count_upcoming_interviews_for_candidate(db, candidate_id),
            "saved_jobs": saved_job_repo.count_for_candidate(db, candidate_id),
        },
        "recent_applications": application_repo.list_recent_for_candidate(db, candidate_id, limit=RECENT_LIMIT),
        "recommended_jobs": job_repo.list_latest_open(db, limit=RECENT_LIMIT),
    }


def _pipeline_counts(raw_counts: list[tuple[str, int]]) -> dict[str, int]:
    """Fold raw status counts onto canonical statuses; unknown values keep their raw label."""
    counts: dict[str, int] = {}
    for raw, count in raw_counts:
        status = normalize_status(raw)
        key = status.value if status else raw
        counts[key] = counts.get(key, 0) + count
    return counts


def employer_dashboard(db: Session, employer_id: str) -> dict:
    return {
        "stats": {
            "open_roles": job_repo.count_open_for_employer(db, employer_id),
            "active_candidates": application_repo.count_distinct_candidates_for_employer(db, employer_id),
            "interviews_this_week": application_repo.count_interviews_within(db, employer_id, days=7),
        },
        "recent_jobs": job_repo.list_recent_for_employer(db, employer_id, limit=RECENT_LIMIT),
        "pipeline": _pipeline_counts(application_repo.status_counts_for_employer(db, employer_id)),
    }
