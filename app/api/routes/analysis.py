"""
Resume analysis endpoint.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.errors import HireScreenError, to_http_exception
from app.core.rate_limit import public_rate_limit
from app.db.session import get_db
from app.llm.provider import LLMProvider
from app.schemas.analysis import AnalysisResult, AnalyzeResumeRequest
from app.services.application_service import analyze_existing_application
from app.services.match_analyzer import get_llm_provider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Analysis"])


@router.post(
    "/analyze-resume",
    response_model=AnalysisResult,
    dependencies=[Depends(public_rate_limit)],
)
def analyze_resume_endpoint(
    payload: AnalyzeResumeRequest,
    db: Session = Depends(get_db),
    provider: Optional[LLMProvider] = Depends(get_llm_provider),
):
    """
    Score an application's resume against the JD at ``jdUrl`` and store the result.
    """
    if not payload.application_id or not payload.resume_text or not payload.jd_url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")

    try:
        return analyze_existing_application(
            db,
            application_id=payload.application_id,
            resume_text=payload.resume_text,
            jd_url=payload.jd_url,
            provider=provider,
        )
    except HireScreenError as e:
        logger.warning(f"Resume analysis failed: application_id={payload.application_id}, {type(e).__name__}: {e.message}")
        raise to_http_exception(e)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Resume analysis error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Analysis failed"
        )
