"""
Pydantic schemas for job endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class JobResponse(BaseModel):
    """Schema for job response."""
    id: int = Field(..., description="Job ID")
    title: str = Field(..., description="Job title")
    description: Optional[str] = Field(None, description="Short description shown on the listing")
    jd_file_url: str = Field(..., description="Public URL of the job description document")
    jd_file_name: str = Field(..., description="Original file name of the job description")
    created_at: datetime = Field(..., description="Job creation timestamp")
    
    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "title": "Senior Software Engineer",
                "description": "Backend role on the platform team",
                "jd_file_url": "http://localhost:8000/storage/job-descriptions/1767000000000.pdf",
                "jd_file_name": "senior-swe.pdf",
                "created_at": "2026-01-15T09:00:00Z"
            }
        }


class JobListResponse(BaseModel):
    """Schema for list of jobs response."""
    jobs: list[JobResponse] = Field(..., description="List of jobs")
    total: int = Field(..., description="Total number of jobs")
