"""
Pydantic schemas for application endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

VERDICT_PATTERN = "^(High|Medium|Low)$"


class ApplicationResponse(BaseModel):
    """Schema for an application as listed on the admin dashboard."""
    id: int = Field(..., description="Application ID")
    job_id: int = Field(..., description="Job the candidate applied to")
    job_title: str = Field("", description="Title of the job")
    full_name: str = Field(..., description="Applicant name")
    resume_file_url: str = Field(..., description="Public URL of the resume")
    resume_file_name: str = Field(..., description="Original resume file name")
    score: int = Field(0, ge=0, le=100, description="Match score 0-100")
    verdict: str = Field("Low", pattern=VERDICT_PATTERN, description="High, Medium or Low")
    matched_skills: List[str] = Field(default_factory=list, description="Job skills found in the resume")
    missing_skills: List[str] = Field(default_factory=list, description="Job skills missing from the resume")
    status: str = Field("pending", description="pending until the analysis is stored")
    created_at: datetime = Field(..., description="Submission timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")
    
    class Config:
        from_attributes = True


class ApplicationListResponse(BaseModel):
    """Filtered applications plus the unfiltered total ("showing X of Y")."""
    applications: List[ApplicationResponse] = Field(..., description="Applications matching the filters")
    total: int = Field(..., description="Number of applications before filtering")
    filtered: int = Field(..., description="Number of applications after filtering")


class ApplyResponse(BaseModel):
    """Result returned to the candidate after submitting an application."""
    application_id: int = Field(..., description="ID of the stored application")
    score: int = Field(..., ge=0, le=100)
    verdict: str = Field(..., pattern=VERDICT_PATTERN)
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)


class ApplicationFilter(BaseModel):
    """Schema for filtering applications; "all" disables a filter."""
    search: Optional[str] = Field(None, description="Search in name, job title and skills")
    verdict: str = Field("all", pattern="^(all|High|Medium|Low)$")
    job_id: str = Field("all", description="Job ID or 'all'")
    score: str = Field("all", pattern="^(all|high|medium|low)$", description="Score bucket")
    date: str = Field("all", pattern="^(all|today|week|month)$", description="Submission window")
