"""
Tests for in-memory application filtering.
"""
from datetime import datetime, timedelta, timezone

import pytest

from app.schemas.application import ApplicationFilter, ApplicationResponse
from app.services.application_filter import filter_applications, one_month_before

NOW = datetime(2026, 3, 31, 15, 30, tzinfo=timezone.utc)


def make_app(app_id, score, verdict="Low", job_id=1, job_title="Backend Engineer",
             name="Candidate", matched=(), missing=(), created_at=NOW):
    return ApplicationResponse(
        id=app_id,
        job_id=job_id,
        job_title=job_title,
        full_name=name,
        resume_file_url=f"http://testserver/storage/resumes/{app_id}.pdf",
        resume_file_name=f"{app_id}.pdf",
        score=score,
        verdict=verdict,
        matched_skills=list(matched),
        missing_skills=list(missing),
        status="analyzed",
        created_at=created_at,
    )


@pytest.fixture
def applications():
    return [
        make_app(1, 95, "High", name="Ada Lovelace", matched=["Python", "SQL"]),
        make_app(2, 80, "High", job_id=2, job_title="Data Analyst", name="Grace Hopper", missing=["Tableau"]),
        make_app(3, 79, "Medium", name="Alan Turing", created_at=NOW - timedelta(days=3)),
        make_app(4, 50, "Medium", job_id=2, job_title="Data Analyst", created_at=NOW - timedelta(days=10)),
        make_app(5, 49, "Low", name="Linus", missing=["Kubernetes"], created_at=NOW - timedelta(days=40)),
        make_app(6, 0, "Low", created_at=NOW.replace(hour=0, minute=0) - timedelta(minutes=1)),
    ]


def ids(result):
    return [app.id for app in result]


def test_no_filters_returns_everything(applications):
    assert ids(filter_applications(applications, ApplicationFilter(), now=NOW)) == [1, 2, 3, 4, 5, 6]


def test_high_bucket_is_80_and_above(applications):
    result = filter_applications(applications, ApplicationFilter(score="high"), now=NOW)
    assert ids(result) == [1, 2]
    assert all(app.score >= 80 for app in result)


def test_medium_bucket(applications):
    result = filter_applications(applications, ApplicationFilter(score="medium"), now=NOW)
    assert ids(result) == [3, 4]


def test_low_bucket_is_below_50(applications):
    result = filter_applications(applications, ApplicationFilter(score="low"), now=NOW)
    assert ids(result) == [5, 6]
    assert all(app.score < 50 for app in result)


def test_verdict_filter(applications):
    assert ids(filter_applications(applications, ApplicationFilter(verdict="Medium"), now=NOW)) == [3, 4]


def test_job_filter(applications):
    assert ids(filter_applications(applications, ApplicationFilter(job_id="2"), now=NOW)) == [2, 4]


@pytest.mark.parametrize("term, expected", [
    ("ada", [1]),                 # name
    ("DATA ANALYST", [2, 4]),     # job title
    ("sql", [1]),                 # matched skill
    ("kube", [5]),                # missing skill
    ("nobody", []),
])
def test_search_is_case_insensitive_substring(applications, term, expected):
    assert ids(filter_applications(applications, ApplicationFilter(search=term), now=NOW)) == expected


def test_blank_search_is_ignored(applications):
    assert len(filter_applications(applications, ApplicationFilter(search="   "), now=NOW)) == 6


def test_today_window_starts_at_midnight(applications):
    assert ids(filter_applications(applications, ApplicationFilter(date="today"), now=NOW)) == [1, 2]


def test_week_window(applications):
    assert ids(filter_applications(applications, ApplicationFilter(date="week"), now=NOW)) == [1, 2, 3, 6]


def test_month_window(applications):
    assert ids(filter_applications(applications, ApplicationFilter(date="month"), now=NOW)) == [1, 2, 3, 4, 6]


def test_filters_combine(applications):
    filters = ApplicationFilter(search="data", verdict="High", score="high", date="week")
    assert ids(filter_applications(applications, filters, now=NOW)) == [2]


def test_naive_timestamps_are_treated_as_utc():
    naive = make_app(1, 90, "High", created_at=datetime(2026, 3, 31, 0, 5))
    result = filter_applications([naive], ApplicationFilter(date="today"), now=NOW)
    assert ids(result) == [1]


def test_one_month_before_clamps_day():
    assert one_month_before(NOW) == datetime(2026, 2, 28, 15, 30, tzinfo=timezone.utc)
    assert one_month_before(datetime(2026, 1, 15, tzinfo=timezone.utc)) == datetime(2025, 12, 15, tzinfo=timezone.utc)
