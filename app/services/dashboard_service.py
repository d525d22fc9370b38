"""
Dashboard aggregates for the admin view.

Every figure is a straight scan over the in-memory application list.
"""
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Sequence

from app.schemas.dashboard import (
    DailyCount,
    DashboardStats,
    JobApplicationCount,
    ScoreBucketCount,
    VerdictSlice,
)
from app.services.application_filter import ApplicationLike, as_utc

VERDICT_COLORS = {
    "High": "#10b981",
    "Medium": "#f59e0b",
    "Low": "#ef4444",
}

SCORE_RANGES = (
    ("90-100", 90, 101),
    ("80-89", 80, 90),
    ("70-79", 70, 80),
    ("60-69", 60, 70),
    ("50-59", 50, 60),
    ("0-49", 0, 50),
)


def build_dashboard(
    applications: Sequence[ApplicationLike],
    jobs: Iterable,
    now: Optional[datetime] = None,
) -> DashboardStats:
    now = as_utc(now or datetime.now(timezone.utc))
    total = len(applications)

    verdict_counts = {
        verdict: len([app for app in applications if app.verdict == verdict])
        for verdict in VERDICT_COLORS
    }

    seven_days_ago = now - timedelta(days=7)
    last_7_days = len([app for app in applications if as_utc(app.created_at) >= seven_days_ago])

    average_score = int(sum(app.score for app in applications) / total + 0.5) if total else 0

    job_applications = [
        JobApplicationCount(
            job_id=job.id,
            name=job.title,
            applications=len([app for app in applications if app.job_id == job.id]),
        )
        for job in jobs
    ]

    daily: List[DailyCount] = []
    for offset in range(6, -1, -1):
        day = (now - timedelta(days=offset)).date()
        daily.append(DailyCount(
            date=day.isoformat(),
            name=day.strftime("%a"),
            applications=len([app for app in applications if as_utc(app.created_at).date() == day]),
        ))

    distribution = [
        ScoreBucketCount(
            range=label,
            count=len([app for app in applications if low <= app.score < high]),
        )
        for label, low, high in SCORE_RANGES
    ]

    return DashboardStats(
        total_applications=total,
        high_verdict=verdict_counts["High"],
        medium_verdict=verdict_counts["Medium"],
        low_verdict=verdict_counts["Low"],
        last_7_days=last_7_days,
        average_score=average_score,
        verdict_chart=[
            VerdictSlice(verdict=verdict, count=verdict_counts[verdict], color=color)
            for verdict, color in VERDICT_COLORS.items()
        ],
        job_applications=job_applications,
        daily_applications=daily,
        score_distribution=distribution,
    )
