"""
Pydantic schemas for the admin dashboard aggregates.
"""
from typing import List
from pydantic import BaseModel, Field


class VerdictSlice(BaseModel):
    verdict: str
    count: int
    color: str


class JobApplicationCount(BaseModel):
    job_id: int
    name: str
    applications: int


class DailyCount(BaseModel):
    date: str = Field(..., description="ISO date")
    name: str = Field(..., description="Short weekday name")
    applications: int


class ScoreBucketCount(BaseModel):
    range: str
    count: int


class DashboardStats(BaseModel):
    total_applications: int
    high_verdict: int
    medium_verdict: int
    low_verdict: int
    last_7_days: int
    average_score: int
    verdict_chart: List[VerdictSlice]
    job_applications: List[JobApplicationCount]
    daily_applications: List[DailyCount]
    score_distribution: List[ScoreBucketCount]
