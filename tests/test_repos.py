from datetime import timedelta

from hireflow.repos import application_repo, job_repo, profile_repo, user_repo


def test_user_create_normalizes_and_scopes_company(db_session):
    candidate = user_repo.create(
        db_session, " Ann@Example.com ", "password123", name=" Ann ", role="candidate", company_name="Nope"
    )
    employer = user_repo.create(
        db_session, "boss@example.com", "password123", name="Boss", role="employer", company_name=" Acme "
    )
    assert candidate.email == "ann@example.com"
    assert candidate.name == "Ann"
    assert candidate.company_name is None
    assert employer.company_name == "Acme"
    assert user_repo.get_by_email(db_session, "ANN@example.com").id == candidate.id


def test_user_role_is_fixed_after_creation(db_session, factory):
    import pytest

    user = factory.candidate()
    with pytest.raises(ValueError):
        user.role = "employer"


def test_list_open_jobs_filters(db_session, factory):
    employer = factory.employer()
    factory.job(employer, title="Python Developer", location="Berlin", remote=True)
    factory.job(employer, title="Java Developer", location="Paris", description="python welcome")
    factory.job(employer, title="Secret", status="draft")
    factory.job(employer, title="Old", status="closed")

    items, total = job_repo.list_open_paginated(db_session)
    assert total == 2

    items, total = job_repo.list_open_paginated(db_session, search="python")
    assert total == 2
    items, total = job_repo.list_open_paginated(db_session, search="python", remote=True)
    assert [j.title for j in items] == ["Python Developer"]
    items, total = job_repo.list_open_paginated(db_session, location="par")
    assert [j.title for j in items] == ["Java Developer"]

    items, total = job_repo.list_open_paginated(db_session, limit=1, offset=1)
    assert total == 2 and len(items) == 1


def test_employer_job_listing_counts_applications(db_session, factory):
    employer = factory.employer()
    busy = factory.job(employer, title="Busy")
    factory.job(employer, title="Quiet")
    factory.application(busy, factory.candidate())
    factory.application(busy, factory.candidate())

    counts = {job.title: count for job, count in job_repo.list_for_employer(db_session, employer.id)}
    assert counts == {"Busy": 2, "Quiet": 0}


def test_job_update_is_scoped_to_owner(db_session, factory):
    owner = factory.employer()
    job = factory.job(owner, location="Berlin", description="Build things")
    assert job_repo.update(db_session, job.id, factory.employer().id, title="Hijack") is None
    updated = job_repo.update(db_session, job.id, owner.id, title="Renamed", remote=None)
    assert updated.title == "Renamed"
    assert updated.remote is False

    cleared = job_repo.update(db_session, job.id, owner.id, location=None, description=None)
    assert cleared.location is None
    assert cleared.description is None
    assert cleared.title == "Renamed"


def test_candidate_stats_include_legacy_statuses(db_session, factory):
    employer = factory.employer()
    candidate = factory.candidate()
    for status in ("applied", "screening", "offer", "hired", "rejected", "withdrawn"):
        factory.application(factory.job(employer), candidate, status=status)

    stats = application_repo.candidate_stats(db_session, candidate.id)
    assert stats == {"total": 6, "active": 3, "rejected": 1, "offers": 2}


def test_candidate_list_status_filter_matches_legacy_alias(db_session, factory):
    employer = factory.employer()
    candidate = factory.candidate()
    factory.application(factory.job(employer), candidate, status="interview")
    factory.application(factory.job(employer), candidate, status="interview_scheduled")
    factory.application(factory.job(employer), candidate, status="applied")

    from hireflow.core.statuses import ApplicationStatus

    items, total = application_repo.list_for_candidate(
        db_session, candidate.id, status=ApplicationStatus.INTERVIEW_SCHEDULED
    )
    assert total == 2


def test_employer_stats_windows(db_session, factory):
    employer = factory.employer()
    other = factory.employer()
    job = factory.job(employer)
    factory.application(job, factory.candidate())
    factory.application(job, factory.candidate(), created_ago=timedelta(days=3))
    factory.application(job, factory.candidate(), created_ago=timedelta(days=30))
    factory.application(factory.job(other), factory.candidate())

    stats = application_repo.employer_stats(db_session, employer.id)
    assert stats["total"] == 3
    assert stats["this_week"] == 2
    assert stats["today"] >= 1


def test_pipeline_stage_matches_status_or_step(db_session, factory):
    employer = factory.employer()
    job = factory.job(employer)
    shortlisted = factory.application(job, factory.candidate(), status="shortlisted", step="Phone screen")
    scheduled = factory.application(job, factory.candidate(), status="interview_scheduled", step="Onsite")
    factory.application(job, factory.candidate(), status="applied")

    by_status = application_repo.list_pipeline(db_session, employer.id, "Interview Scheduled")
    assert [a.id for a in by_status] == [scheduled.id]
    by_step = application_repo.list_pipeline(db_session, employer.id, "phone")
    assert [a.id for a in by_step] == [shortlisted.id]
    assert len(application_repo.list_pipeline(db_session, employer.id)) == 3


def test_replace_skills_dedupes_and_sorts(db_session, factory):
    candidate = factory.candidate()
    skills = profile_repo.replace_skills(db_session, candidate.id, ["SQL", " python ", "sql", "", "Go"])
    assert skills == ["Go", "SQL", "python"]
    assert profile_repo.replace_skills(db_session, candidate.id, []) == []


def test_profile_upsert_and_resume_url(db_session, factory):
    candidate = factory.candidate()
    assert profile_repo.get_profile(db_session, candidate.id) is None
    profile = profile_repo.upsert_resume_url(db_session, candidate.id, "memory://1.pdf")
    assert profile.resume_url == "memory://1.pdf"
    profile = profile_repo.upsert(db_session, candidate.id, headline="Engineer", bio=None)
    assert profile.headline == "Engineer"
    assert profile.resume_url == "memory://1.pdf"
