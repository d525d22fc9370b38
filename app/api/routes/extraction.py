"""
Text extraction endpoints used by the apply page.
"""
import logging

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from app.core.errors import HireScreenError, to_http_exception
from app.schemas.extraction import ExtractFromUrlRequest, ExtractFromUrlResponse, ExtractTextResponse
from app.services.text_extraction import extract_text, extract_text_from_url
from app.api.routes.jobs import read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Extraction"])


@router.post("/extract-text", response_model=ExtractTextResponse)
def extract_text_from_upload(file: UploadFile = File(...)):
    """Extract plain text from an uploaded PDF/DOCX/PPTX/XLSX/TXT file."""
    filename = file.filename or "document"
    try:
        content = read_upload(file)
        text = extract_text(filename, content)
    except HireScreenError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Text extraction error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Text extraction failed"
        )

    return ExtractTextResponse(text=text, filename=filename, size=len(content))


@router.post("/extract-text-from-url", response_model=ExtractFromUrlResponse)
def extract_text_from_remote(payload: ExtractFromUrlRequest):
    """Download a document by URL and extract its text."""
    if not payload.url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="URL is required")

    try:
        document = extract_text_from_url(payload.url)
    except HireScreenError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"URL text extraction error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="URL text extraction failed"
        )

    return ExtractFromUrlResponse(text=document.text, url=document.url, filename=document.filename)
