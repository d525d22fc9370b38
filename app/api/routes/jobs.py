"""
Public job listing and apply endpoints.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.core import config
from app.core.errors import HireScreenError, to_http_exception
from app.core.rate_limit import public_rate_limit
from app.db.models.job import Job
from app.db.session import get_db
from app.llm.provider import LLMProvider
from app.schemas.application import ApplyResponse
from app.schemas.job import JobListResponse, JobResponse
from app.services.application_service import get_job_or_404, submit_application
from app.services.match_analyzer import get_llm_provider
from app.services.storage_service import StorageClient, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def read_upload(upload: UploadFile) -> bytes:
    """Read at most one byte past the limit so oversized files are detected cheaply."""
    return upload.file.read(config.MAX_UPLOAD_BYTES + 1)


@router.get("", response_model=JobListResponse)
def list_jobs(db: Session = Depends(get_db)):
    """List open jobs, newest first."""
    jobs = db.query(Job).order_by(Job.created_at.desc(), Job.id.desc()).all()
    return JobListResponse(
        jobs=[JobResponse.model_validate(job) for job in jobs],
        total=len(jobs),
    )


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    return JobResponse.model_validate(get_job_or_404(db, job_id))


@router.post(
    "/{job_id}/apply",
    status_code=status.HTTP_201_CREATED,
    response_model=ApplyResponse,
    dependencies=[Depends(public_rate_limit)],
)
def apply_to_job(
    job_id: int,
    full_name: str = Form(...),
    resume: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
    provider: Optional[LLMProvider] = Depends(get_llm_provider),
):
    """
    Submit a resume for a job and return the match analysis.

    The application row is created before the analysis runs; if the analysis
    fails the row stays with its placeholder score and the error is returned.
    """
    job = get_job_or_404(db, job_id)
    filename = resume.filename or "resume"

    try:
        content = read_upload(resume)
        application = submit_application(
            db,
            storage,
            job,
            full_name=full_name,
            filename=filename,
            content=content,
            provider=provider,
        )
    except HireScreenError as e:
        logger.warning(f"Application for job_id={job_id} failed: {type(e).__name__}: {e.message}")
        raise to_http_exception(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to process application: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process application"
        )

    return ApplyResponse(
        application_id=application.id,
        score=application.score,
        verdict=application.verdict,
        matched_skills=application.matched_skills or [],
        missing_skills=application.missing_skills or [],
    )
