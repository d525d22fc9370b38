"""
Job model for published job postings and their job description files.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class Job(Base):
    """
    A job posting created by an admin.

    The job description document lives in the ``job-descriptions`` bucket;
    ``jd_storage_key`` is its key inside that bucket.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)

    # JD document
    jd_file_url = Column(String, nullable=False)
    jd_file_name = Column(String, nullable=False)
    jd_storage_key = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    # Deleting a job deletes its applications
    applications = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}')>"
