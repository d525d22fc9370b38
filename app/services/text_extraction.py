"""
Text extraction for uploaded and remote documents.

Supports PDF (PyMuPDF), DOCX (python-docx), PPTX (python-pptx),
XLSX (openpyxl) and plain text.
"""
import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import PurePosixPath
from typing import Callable, Dict, Optional
from urllib.parse import unquote, urlparse

import fitz  # pymupdf
import httpx
from docx import Document
from openpyxl import load_workbook
from pptx import Presentation

from app.core import config
from app.core.errors import (
    ExtractionError,
    FileTooLargeError,
    InvalidUrlError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("pdf", "docx", "pptx", "xlsx", "txt")
TOO_LARGE_MESSAGE = "File is too large. Maximum size is 10MB."
NO_TEXT_MESSAGE = "No readable text found in the file."


@dataclass
class ExtractedDocument:
    text: str
    url: str
    filename: str


def file_extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def validate_document(filename: str, size: int) -> str:
    """
    Check size and extension before any parsing happens.

    Returns:
        The normalized extension
    """
    if size > config.MAX_UPLOAD_BYTES:
        raise FileTooLargeError(TOO_LARGE_MESSAGE)

    ext = file_extension(filename)
    if ext == "doc":
        raise UnsupportedFormatError("DOC files are not supported. Please convert to DOCX format.")
    if ext not in SUPPORTED_EXTENSIONS:
        label = ext.upper() if ext else "UNKNOWN"
        raise UnsupportedFormatError(
            f"Unsupported file format: {label}. Supported formats: PDF, DOCX, PPTX, XLSX, TXT"
        )
    return ext


# ============================================
# Per-format parsers
# ============================================

def _pdf_text(content: bytes) -> str:
    text = ""
    with fitz.open(stream=content, filetype="pdf") as doc:
        for page in doc:
            text += page.get_text()
    return text


def _docx_text(content: bytes) -> str:
    doc = Document(BytesIO(content))
    chunks = [paragraph.text for paragraph in doc.paragraphs if paragraph.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                chunks.append("\t".join(cells))
    return "\n".join(chunks)


def _pptx_text(content: bytes) -> str:
    prs = Presentation(BytesIO(content))
    chunks = []
    for slide in prs.slides:
        for shape in slide.shapes:
            if getattr(shape, "has_text_frame", False) and shape.text_frame:
                value = shape.text_frame.text.strip()
                if value:
                    chunks.append(value)
            if getattr(shape, "has_table", False) and shape.has_table:
                for row in shape.table.rows:
                    cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                    if cells:
                        chunks.append("\t".join(cells))
    return "\n".join(chunks)


def _xlsx_text(content: bytes) -> str:
    workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    chunks = []
    try:
        for sheet in workbook.worksheets:
            for row in sheet.iter_rows(values_only=True):
                cells = [str(value).strip() for value in row if value is not None and str(value).strip()]
                if cells:
                    chunks.append("\t".join(cells))
    finally:
        workbook.close()
    return "\n".join(chunks)


def _txt_text(content: bytes) -> str:
    # utf-16 only with a BOM; latin-1 never fails
    encodings = ("utf-16",) if content[:2] in (b"\xff\xfe", b"\xfe\xff") else ("utf-8-sig", "latin-1")
    for encoding in encodings:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    return ""


PARSERS: Dict[str, Callable[[bytes], str]] = {
    "pdf": _pdf_text,
    "docx": _docx_text,
    "pptx": _pptx_text,
    "xlsx": _xlsx_text,
    "txt": _txt_text,
}


# ============================================
# Public API
# ============================================

def extract_text(filename: str, content: bytes) -> str:
    """
    Extract plain text from a document's bytes.

    Raises:
        FileTooLargeError: content over the upload limit
        UnsupportedFormatError: extension not handled (including .doc)
        ExtractionError: parser failure or no readable text
    """
    ext = validate_document(filename, len(content))
    logger.info(f"Extracting text: filename={filename}, size={len(content)}")

    try:
        text = PARSERS[ext](content)
    except Exception as e:
        logger.error(f"Text extraction failed for {filename}: {e}", exc_info=True)
        raise ExtractionError(f"Failed to extract text from {filename}: {e}") from e

    text = (text or "").strip()
    if not text:
        raise ExtractionError(NO_TEXT_MESSAGE)
    return text


def filename_from_url(url: str) -> str:
    name = PurePosixPath(unquote(urlparse(url).path)).name
    return name or "document"


def validate_url(url: str) -> str:
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidUrlError("Invalid URL format") from e
    if not parsed.scheme or not parsed.netloc:
        raise InvalidUrlError("Invalid URL format")
    if parsed.scheme not in ("http", "https"):
        raise InvalidUrlError("Only HTTP and HTTPS URLs are supported")
    return url


def extract_text_from_url(url: str, client: Optional[httpx.Client] = None) -> ExtractedDocument:
    """
    Download a document over http(s) and extract its text.

    The file type is taken from the last segment of the URL path.
    """
    validate_url(url)
    filename = filename_from_url(url)
    validate_document(filename, 0)
    logger.info(f"Fetching document from URL: {url}")

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=config.FETCH_TIMEOUT_SECONDS, follow_redirects=True)

    try:
        with client.stream("GET", url) as response:
            if not response.is_success:
                raise ExtractionError(
                    f"Failed to fetch file: {response.status_code} {response.reason_phrase}"
                )

            content_length = response.headers.get("content-length")
            if content_length and content_length.isdigit() and int(content_length) > config.MAX_UPLOAD_BYTES:
                raise FileTooLargeError(TOO_LARGE_MESSAGE)

            buffer = bytearray()
            for chunk in response.iter_bytes():
                buffer.extend(chunk)
                if len(buffer) > config.MAX_UPLOAD_BYTES:
                    raise FileTooLargeError(TOO_LARGE_MESSAGE)
    except httpx.TimeoutException as e:
        raise ExtractionError(f"Failed to fetch file: request to {url} timed out") from e
    except httpx.HTTPError as e:
        raise ExtractionError(f"Failed to fetch file: {e}") from e
    finally:
        if owns_client:
            client.close()

    text = extract_text(filename, bytes(buffer))
    return ExtractedDocument(text=text, url=url, filename=filename)
