"""
Exception hierarchy for the extraction and analysis pipeline.

Every error carries the HTTP status the API layer should answer with.
"""
from fastapi import HTTPException, status


class HireScreenError(Exception):
    """Base class for pipeline errors."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ============================================
# Text extraction
# ============================================

class ExtractionError(HireScreenError):
    """Raised when no usable text can be pulled out of a document."""
    status_code = status.HTTP_400_BAD_REQUEST


class UnsupportedFormatError(ExtractionError):
    """Raised for file extensions the extractor does not handle."""


class FileTooLargeError(ExtractionError):
    """Raised when an upload or remote document exceeds the size limit."""


class InvalidUrlError(ExtractionError):
    """Raised when a document URL is malformed or not http(s)."""


# ============================================
# Resume / JD analysis
# ============================================

class AnalysisError(HireScreenError):
    """Raised when the LLM analysis fails for any other reason."""


class AnalysisInputError(AnalysisError):
    """Raised when resume or job description text is missing."""
    status_code = status.HTTP_400_BAD_REQUEST


class LLMConfigurationError(AnalysisError):
    """Raised when no LLM credential is configured."""
    status_code = status.HTTP_401_UNAUTHORIZED


class LLMAuthenticationError(AnalysisError):
    """Raised when the provider rejects the credential."""
    status_code = status.HTTP_401_UNAUTHORIZED


class LLMRateLimitError(AnalysisError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS


class LLMTimeoutError(AnalysisError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT


class AnalysisParseError(AnalysisError):
    """Raised when the model reply is not the expected JSON shape."""
    status_code = status.HTTP_502_BAD_GATEWAY


def to_http_exception(error: HireScreenError):
    """Translate a pipeline error into the HTTPException the API answers with."""
    return HTTPException(status_code=error.status_code, detail=error.message)
