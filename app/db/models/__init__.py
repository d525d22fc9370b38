"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.
"""
from app.db.models.job import Job
from app.db.models.application import Application, Verdict, ApplicationStatus

__all__ = [
    "Job",
    "Application",
    "Verdict",
    "ApplicationStatus",
]
