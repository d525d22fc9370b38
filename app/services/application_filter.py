"""
In-memory filtering of the admin application list.

The admin view loads every application once and re-filters the full list on
each change of a filter input; no query-side filtering is involved.
"""
import calendar
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Protocol, Sequence

from app.schemas.application import ApplicationFilter


class ApplicationLike(Protocol):
    full_name: str
    job_id: int
    job_title: str
    score: int
    verdict: str
    matched_skills: Sequence[str]
    missing_skills: Sequence[str]
    created_at: datetime


def as_utc(value: datetime) -> datetime:
    """Naive timestamps (e.g. from SQLite) are treated as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def one_month_before(moment: datetime) -> datetime:
    """Same day-of-month in the previous month, clamped to that month's length."""
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def score_in_bucket(score: int, bucket: str) -> bool:
    if bucket == "high":
        return score >= 80
    if bucket == "medium":
        return 50 <= score < 80
    if bucket == "low":
        return score < 50
    return True


def date_window_start(window: str, now: datetime) -> Optional[datetime]:
    if window == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if window == "week":
        return now - timedelta(days=7)
    if window == "month":
        return one_month_before(now)
    return None


def matches_search(application: ApplicationLike, term: str) -> bool:
    term = term.lower()
    return (
        term in (application.full_name or "").lower()
        or term in (application.job_title or "").lower()
        or any(term in skill.lower() for skill in application.matched_skills or [])
        or any(term in skill.lower() for skill in application.missing_skills or [])
    )


def filter_applications(
    applications: Iterable[ApplicationLike],
    filters: ApplicationFilter,
    now: Optional[datetime] = None,
) -> List[ApplicationLike]:
    """Apply search, verdict, job, score bucket and date filters in turn."""
    filtered = list(applications)

    if filters.search and filters.search.strip():
        term = filters.search.strip()
        filtered = [app for app in filtered if matches_search(app, term)]

    if filters.verdict != "all":
        filtered = [app for app in filtered if app.verdict == filters.verdict]

    if filters.job_id != "all":
        filtered = [app for app in filtered if str(app.job_id) == filters.job_id]

    if filters.score != "all":
        filtered = [app for app in filtered if score_in_bucket(app.score, filters.score)]

    if filters.date != "all":
        now = as_utc(now or datetime.now(timezone.utc))
        start = date_window_start(filters.date, now)
        filtered = [app for app in filtered if as_utc(app.created_at) >= start]

    return filtered
