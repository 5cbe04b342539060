"""
Collapse an employer's applications into one entry per candidate.

A candidate who applied to several of the employer's jobs gets a single
pipeline bucket: the furthest-along one across all their applications.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from hireflow.core.clock import as_utc
from hireflow.core.errors import NotFoundError
from hireflow.core.statuses import BUCKET_RANK, PipelineBucket, bucket_for_status
from hireflow.repos import application_repo, profile_repo, user_repo

logger = logging.getLogger(__name__)

CANDIDATE_NOT_FOUND = "Candidate not found"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class CandidateAggregate:
    id: str
    name: str
    email: str | None = None
    headline: str | None = None
    location: str | None = None
    experience_years: int | None = None
    status: PipelineBucket = PipelineBucket.NEW
    skills: list[str] = field(default_factory=list)
    applied_jobs_count: int = 0
    last_active_at: datetime | None = None


@dataclass
class _Accumulator:
    aggregate: CandidateAggregate
    rank: int
    skills: set = field(default_factory=set)
    job_ids: set = field(default_factory=set)


def _group(rows) -> dict[str, list]:
    groups: dict[str, list] = {}
    for row in rows:
        candidate = row[2]
        groups.setdefault(candidate.id, []).append(row)
    return groups


def _fold(candidate_rows) -> CandidateAggregate:
    acc = None
    for application, job, candidate, profile, skill in candidate_rows:
        bucket = bucket_for_status(application.status)
        rank = BUCKET_RANK[bucket]
        if acc is None:
            acc = _Accumulator(
                aggregate=CandidateAggregate(id=candidate.id, name=candidate.name, email=candidate.email, status=bucket),
                rank=rank,
            )
        agg = acc.aggregate

        if profile is not None:
            if agg.headline is None:
                agg.headline = profile.headline
            if agg.location is None:
                agg.location = profile.location
            if agg.experience_years is None:
                agg.experience_years = profile.experience_years

        if rank < acc.rank:
            acc.rank = rank
            agg.status = bucket

        acc.job_ids.add(job.id)
        if skill:
            acc.skills.add(skill)

        activity = as_utc(application.next_interview_at or application.created_at)
        if activity is not None and (agg.last_active_at is None or activity > agg.last_active_at):
            agg.last_active_at = activity

    agg = acc.aggregate
    agg.skills = sorted(acc.skills)
    agg.applied_jobs_count = len(acc.job_ids)
    return agg


def aggregate(rows) -> list[CandidateAggregate]:
    """
    Pure fold over (application, job, candidate, profile, skill) rows.

    Optional profile fields keep the first non-null value seen in row order.
    Result is ordered by last activity, most recent first, then by name.
    """
    candidates = [_fold(candidate_rows) for candidate_rows in _group(rows).values()]
    candidates.sort(key=lambda c: (c.name or "").lower())
    candidates.sort(key=lambda c: c.last_active_at or _EPOCH, reverse=True)
    return candidates


def list_candidates_for_employer(
    db: Session,
    employer_id: str,
    status: PipelineBucket | None = None,
) -> list[CandidateAggregate]:
    rows = application_repo.rows_for_candidate_aggregation(db, employer_id)
    candidates = aggregate(rows)
    if status is not None:
        candidates = [c for c in candidates if c.status == status]
    logger.debug("Aggregated %d candidates for employer=%s from %d rows", len(candidates), employer_id, len(rows))
    return candidates


def get_candidate_detail(db: Session, employer_id: str, candidate_id: str) -> dict:
    """Profile, skills and the employer-scoped aggregate for a candidate related to this employer."""
    rows = application_repo.rows_for_candidate_aggregation(db, employer_id, candidate_id=candidate_id)
    if not rows:
        raise NotFoundError(CANDIDATE_NOT_FOUND)
    user = user_repo.get_by_id(db, candidate_id)
    if user is None:
        raise NotFoundError(CANDIDATE_NOT_FOUND)

    applications = {}
    for application, job, _, _, _ in rows:
        applications.setdefault(application.id, (application, job))

    return {
        "user": user,
        "profile": profile_repo.get_profile(db, candidate_id),
        "skills": profile_repo.get_skills(db, candidate_id),
        "aggregate": _fold(rows),
        "applications": list(applications.values()),
    }
