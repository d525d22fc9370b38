"""
Pydantic schemas for resume analysis.
"""
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class AnalysisResult(BaseModel):
    """Validated, sanitized analyzer output."""
    score: int = Field(..., ge=0, le=100, description="Match score 0-100")
    verdict: str = Field(..., pattern="^(High|Medium|Low)$", description="Coarse match bucket")
    matched_skills: List[str] = Field(default_factory=list, max_length=15)
    missing_skills: List[str] = Field(default_factory=list, max_length=15)


class AnalyzeResumeRequest(BaseModel):
    """Request body of POST /api/analyze-resume (camelCase on the wire)."""
    model_config = ConfigDict(populate_by_name=True)

    application_id: Optional[int] = Field(None, alias="applicationId")
    resume_text: Optional[str] = Field(None, alias="resumeText")
    jd_url: Optional[str] = Field(None, alias="jdUrl")
