"""
Admin endpoints: job management, application review and dashboard.

All routes require the admin bearer token from POST /admin/login.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session, joinedload

from app.core.auth_dependency import get_current_admin
from app.core.errors import HireScreenError, to_http_exception
from app.db.models.application import Application
from app.db.models.job import Job
from app.db.session import get_db
from app.schemas.application import ApplicationFilter, ApplicationListResponse, ApplicationResponse
from app.schemas.dashboard import DashboardStats
from app.schemas.job import JobResponse
from app.services.application_filter import filter_applications
from app.services.application_service import get_job_or_404
from app.services.dashboard_service import build_dashboard
from app.services.storage_service import (
    JOB_DESCRIPTIONS_BUCKET,
    RESUMES_BUCKET,
    StorageClient,
    get_storage,
)
from app.services.text_extraction import extract_text
from app.api.routes.jobs import read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(get_current_admin)])


def load_applications(db: Session) -> List[ApplicationResponse]:
    """Load every application (with its job title), newest first."""
    rows = (
        db.query(Application)
        .options(joinedload(Application.job))
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )
    return [ApplicationResponse.model_validate(row) for row in rows]


# ============================================
# Jobs
# ============================================

@router.post("/jobs", status_code=status.HTTP_201_CREATED, response_model=JobResponse)
def create_job(
    title: str = Form(...),
    description: Optional[str] = Form(None),
    jd_file: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
):
    """
    Create a job posting and store its job description document.

    The document must be a readable PDF/DOCX/PPTX/XLSX/TXT file since every
    application is scored against its text.
    """
    title = title.strip()
    if not title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Job title is required")

    filename = jd_file.filename or "job-description"
    content = read_upload(jd_file)

    try:
        extract_text(filename, content)
    except HireScreenError as e:
        logger.warning(f"Rejected job description upload {filename}: {e.message}")
        raise to_http_exception(e)

    try:
        stored = storage.upload(JOB_DESCRIPTIONS_BUCKET, filename, content)
        job = Job(
            title=title,
            description=(description or "").strip() or None,
            jd_file_url=stored.url,
            jd_file_name=filename,
            jd_storage_key=stored.key,
        )
        db.add(job)
        db.commit()
        db.refresh(job)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create job"
        )

    logger.info(f"Job created: job_id={job.id}, title={job.title}")
    return JobResponse.model_validate(job)


@router.delete("/jobs/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
):
    """
    Delete a job, its applications, and their stored files.
    """
    job = get_job_or_404(db, job_id)

    stored_files = [(JOB_DESCRIPTIONS_BUCKET, job.jd_storage_key)]
    stored_files += [
        (RESUMES_BUCKET, application.resume_storage_key)
        for application in job.applications
        if application.resume_storage_key
    ]
    application_count = len(job.applications)

    try:
        db.delete(job)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete job: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete job"
        )

    for bucket, key in stored_files:
        try:
            storage.delete(bucket, key)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not delete stored file {bucket}/{key}: {e}")

    logger.info(f"Job deleted: job_id={job_id}, applications_removed={application_count}")
    return None


# ============================================
# Applications
# ============================================

@router.get("/applications", response_model=ApplicationListResponse)
def list_applications(
    search: Optional[str] = Query(None, description="Search name, job title and skills"),
    verdict: str = Query("all", pattern="^(all|High|Medium|Low)$"),
    job_id: str = Query("all", description="Job ID or 'all'"),
    score: str = Query("all", pattern="^(all|high|medium|low)$"),
    date: str = Query("all", pattern="^(all|today|week|month)$"),
    db: Session = Depends(get_db),
):
    """
    List applications with search and filters applied in memory.
    """
    applications = load_applications(db)
    filters = ApplicationFilter(search=search, verdict=verdict, job_id=job_id, score=score, date=date)
    filtered = filter_applications(applications, filters)

    logger.debug(f"Applications listed: total={len(applications)}, filtered={len(filtered)}")

    return ApplicationListResponse(
        applications=filtered,
        total=len(applications),
        filtered=len(filtered),
    )


@router.get("/dashboard", response_model=DashboardStats)
def dashboard(db: Session = Depends(get_db)):
    """Verdict counts, per-job counts, 7-day trend and score histogram."""
    applications = load_applications(db)
    jobs = db.query(Job).order_by(Job.created_at.desc(), Job.id.desc()).all()
    return build_dashboard(applications, jobs)
