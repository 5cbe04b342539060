import pytest

from hireflow.core.statuses import (
    BUCKET_RANK,
    ApplicationStatus,
    PipelineBucket,
    bucket_for_status,
    normalize_status,
    parse_status,
)


def test_parse_status_is_strict():
    assert parse_status("interview_scheduled") is ApplicationStatus.INTERVIEW_SCHEDULED
    assert parse_status(ApplicationStatus.HIRED) is ApplicationStatus.HIRED
    assert parse_status("interview") is None
    assert parse_status("bogus") is None
    assert parse_status(None) is None


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("screening", ApplicationStatus.SHORTLISTED),
        ("interview", ApplicationStatus.INTERVIEW_SCHEDULED),
        ("offer", ApplicationStatus.OFFERED),
        ("hired", ApplicationStatus.HIRED),
    ],
)
def test_normalize_status_maps_legacy_values(raw, expected):
    assert normalize_status(raw) is expected


@pytest.mark.parametrize(
    "raw,bucket",
    [
        ("applied", PipelineBucket.NEW),
        ("shortlisted", PipelineBucket.REVIEWING),
        ("screening", PipelineBucket.REVIEWING),
        ("interview_scheduled", PipelineBucket.INTERVIEW),
        ("offered", PipelineBucket.INTERVIEW),
        ("offer", PipelineBucket.INTERVIEW),
        ("hired", PipelineBucket.HIRED),
        ("rejected", PipelineBucket.REJECTED),
        ("withdrawn", PipelineBucket.NEW),
        ("something-else", PipelineBucket.NEW),
        (None, PipelineBucket.NEW),
    ],
)
def test_bucket_for_status(raw, bucket):
    assert bucket_for_status(raw) is bucket


def test_bucket_ranks_order_pipeline_progress():
    ordered = sorted(BUCKET_RANK, key=BUCKET_RANK.get)
    assert ordered == [
        PipelineBucket.HIRED,
        PipelineBucket.INTERVIEW,
        PipelineBucket.REVIEWING,
        PipelineBucket.NEW,
        PipelineBucket.REJECTED,
    ]
