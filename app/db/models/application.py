"""
Application model: one candidate's resume submitted against one job.
"""
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Verdict(str, enum.Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"      # placeholder score, analysis not stored yet
    ANALYZED = "analyzed"


class Application(Base):
    """
    Application created at submission time with placeholder scoring values.

    The analysis step fills in the extracted texts and the scoring fields
    exactly once, moving ``status`` from pending to analyzed.
    """
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    full_name = Column(String, nullable=False, index=True)

    # Resume document
    resume_file_url = Column(String, nullable=False)
    resume_file_name = Column(String, nullable=False)
    resume_storage_key = Column(String, nullable=True)

    # Extracted texts
    resume_text = Column(Text, nullable=True)
    jd_text = Column(Text, nullable=True)

    # Scoring (0-100)
    score = Column(Integer, nullable=False, default=0, index=True)
    verdict = Column(String, nullable=False, default=Verdict.LOW.value, index=True)
    matched_skills = Column(JSON, nullable=False, default=list)
    missing_skills = Column(JSON, nullable=False, default=list)
    status = Column(String, nullable=False, default=ApplicationStatus.PENDING.value, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    job = relationship("Job", back_populates="applications")

    __table_args__ = (
        Index('idx_job_created', 'job_id', 'created_at'),
    )

    @property
    def job_title(self) -> str:
        return self.job.title if self.job is not None else ""

    def __repr__(self):
        return f"<Application(id={self.id}, job_id={self.job_id}, score={self.score}, verdict='{self.verdict}')>"
