"""
Tests for dashboard aggregates.
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from app.services.dashboard_service import build_dashboard
from test_application_filter import make_app

NOW = datetime(2026, 3, 31, 15, 30, tzinfo=timezone.utc)  # a Tuesday


def test_empty_dashboard():
    stats = build_dashboard([], [], now=NOW)
    assert stats.total_applications == 0
    assert stats.average_score == 0
    assert [day.applications for day in stats.daily_applications] == [0] * 7
    assert sum(bucket.count for bucket in stats.score_distribution) == 0


def test_dashboard_aggregates():
    jobs = [SimpleNamespace(id=1, title="Backend Engineer"), SimpleNamespace(id=2, title="Data Analyst")]
    applications = [
        make_app(1, 95, "High", job_id=1, created_at=NOW),
        make_app(2, 85, "High", job_id=1, created_at=NOW - timedelta(days=1)),
        make_app(3, 72, "Medium", job_id=2, created_at=NOW - timedelta(days=6)),
        make_app(4, 55, "Medium", job_id=2, created_at=NOW - timedelta(days=8)),
        make_app(5, 10, "Low", job_id=2, created_at=NOW - timedelta(days=30)),
    ]

    stats = build_dashboard(applications, jobs, now=NOW)

    assert stats.total_applications == 5
    assert (stats.high_verdict, stats.medium_verdict, stats.low_verdict) == (2, 2, 1)
    assert stats.last_7_days == 3
    assert stats.average_score == 63  # 317 / 5 = 63.4

    assert [(slice_.verdict, slice_.count) for slice_ in stats.verdict_chart] == [
        ("High", 2), ("Medium", 2), ("Low", 1)
    ]
    assert [(row.name, row.applications) for row in stats.job_applications] == [
        ("Backend Engineer", 2), ("Data Analyst", 3)
    ]

    days = stats.daily_applications
    assert len(days) == 7
    assert days[-1].date == "2026-03-31"
    assert days[-1].name == "Tue"
    assert days[0].date == "2026-03-25"
    assert [day.applications for day in days] == [1, 0, 0, 0, 0, 1, 1]

    distribution = {bucket.range: bucket.count for bucket in stats.score_distribution}
    assert distribution == {
        "90-100": 1,
        "80-89": 1,
        "70-79": 1,
        "60-69": 0,
        "50-59": 1,
        "0-49": 1,
    }


def test_score_of_100_lands_in_top_bucket():
    stats = build_dashboard([make_app(1, 100, "High", created_at=NOW)], [], now=NOW)
    assert stats.score_distribution[0].range == "90-100"
    assert stats.score_distribution[0].count == 1
