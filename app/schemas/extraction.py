"""
Pydantic schemas for text extraction endpoints.
"""
from typing import Optional
from pydantic import BaseModel, Field


class ExtractTextResponse(BaseModel):
    text: str = Field(..., description="Plain text content")
    filename: str = Field(..., description="Uploaded file name")
    size: int = Field(..., description="File size in bytes")


class ExtractFromUrlRequest(BaseModel):
    url: Optional[str] = Field(None, description="http(s) URL of a PDF/DOCX/PPTX/XLSX/TXT document")


class ExtractFromUrlResponse(BaseModel):
    text: str = Field(..., description="Plain text content")
    url: str = Field(..., description="Source URL")
    filename: str = Field(..., description="File name taken from the URL path")
