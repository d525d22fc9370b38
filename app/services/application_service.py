"""
Application submission and analysis pipeline.

upload resume -> extract text -> create pending application -> load JD text
-> analyze -> store result. Each step runs once; a failure aborts the chain
and earlier steps are not undone.
"""
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.errors import AnalysisInputError
from app.db.models.application import Application, ApplicationStatus, Verdict
from app.db.models.job import Job
from app.llm.provider import LLMProvider
from app.schemas.analysis import AnalysisResult
from app.services.match_analyzer import analyze_resume
from app.services.storage_service import (
    JOB_DESCRIPTIONS_BUCKET,
    RESUMES_BUCKET,
    StorageClient,
)
from app.services.text_extraction import extract_text, extract_text_from_url

logger = logging.getLogger(__name__)


def get_job_or_404(db: Session, job_id: int) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return job


def load_job_description_text(storage: StorageClient, job: Job) -> str:
    """Extract the text of a job's stored JD document."""
    content = storage.read(JOB_DESCRIPTIONS_BUCKET, job.jd_storage_key)
    return extract_text(job.jd_file_name, content)


def create_pending_application(
    db: Session,
    job: Job,
    full_name: str,
    resume_file_url: str,
    resume_file_name: str,
    resume_storage_key: Optional[str],
    resume_text: str,
) -> Application:
    """Insert the application with placeholder scoring values."""
    application = Application(
        job_id=job.id,
        full_name=full_name,
        resume_file_url=resume_file_url,
        resume_file_name=resume_file_name,
        resume_storage_key=resume_storage_key,
        resume_text=resume_text,
        score=0,
        verdict=Verdict.LOW.value,
        matched_skills=[],
        missing_skills=[],
        status=ApplicationStatus.PENDING.value,
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    logger.info(f"Application created: application_id={application.id}, job_id={job.id}")
    return application


def record_analysis(
    db: Session,
    application: Application,
    resume_text: str,
    jd_text: str,
    result: AnalysisResult,
) -> Application:
    """Store the analysis on the application (pending -> analyzed)."""
    application.resume_text = resume_text
    application.jd_text = jd_text
    application.score = result.score
    application.verdict = result.verdict
    application.matched_skills = list(result.matched_skills)
    application.missing_skills = list(result.missing_skills)
    application.status = ApplicationStatus.ANALYZED.value
    db.commit()
    db.refresh(application)
    logger.info(
        f"Application analyzed: application_id={application.id}, score={result.score}, verdict={result.verdict}"
    )
    return application


def submit_application(
    db: Session,
    storage: StorageClient,
    job: Job,
    full_name: str,
    filename: str,
    content: bytes,
    provider: Optional[LLMProvider] = None,
) -> Application:
    """Run the full public apply chain for one resume."""
    full_name = (full_name or "").strip()
    if not full_name:
        raise AnalysisInputError("Full name is required")

    # validates size and format before anything is stored
    resume_text = extract_text(filename, content)

    stored = storage.upload(RESUMES_BUCKET, filename, content)

    application = create_pending_application(
        db,
        job,
        full_name=full_name,
        resume_file_url=stored.url,
        resume_file_name=filename,
        resume_storage_key=stored.key,
        resume_text=resume_text,
    )

    jd_text = load_job_description_text(storage, job)
    result = analyze_resume(resume_text, jd_text, provider=provider)
    return record_analysis(db, application, resume_text, jd_text, result)


def analyze_existing_application(
    db: Session,
    application_id: int,
    resume_text: str,
    jd_url: str,
    provider: Optional[LLMProvider] = None,
) -> AnalysisResult:
    """Analyze an already-created application against a JD fetched by URL."""
    application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

    if not resume_text or not resume_text.strip():
        raise AnalysisInputError("Resume text is required and cannot be empty")

    jd_text = extract_text_from_url(jd_url).text
    result = analyze_resume(resume_text, jd_text, provider=provider)
    record_analysis(db, application, resume_text, jd_text, result)
    return result


def reanalyze_application(
    db: Session,
    storage: StorageClient,
    application: Application,
    provider: Optional[LLMProvider] = None,
) -> Application:
    """Re-run analysis for a pending application from its stored texts/files."""
    resume_text = application.resume_text
    if not resume_text and application.resume_storage_key:
        content = storage.read(RESUMES_BUCKET, application.resume_storage_key)
        resume_text = extract_text(application.resume_file_name, content)

    jd_text = load_job_description_text(storage, application.job)
    result = analyze_resume(resume_text or "", jd_text, provider=provider)
    return record_analysis(db, application, resume_text, jd_text, result)
