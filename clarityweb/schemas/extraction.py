"""
clarityweb/schemas/extraction.py

Purpose: Content extraction payloads

- ExtractionResult: what the readability extractor reports
- ExtractResult: normalized shape returned to the browser
"""

from typing import Optional

from pydantic import BaseModel, Field


class ExtractionResult(BaseModel):
    """
    Flat result of a single extraction attempt.
    """
    success: bool
    title: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    byline: Optional[str] = None
    siteName: Optional[str] = None
    error: Optional[str] = None


class ExtractRequest(BaseModel):
    url: str = Field(..., min_length=1, description="Page to extract")


class ExtractedContent(BaseModel):
    title: Optional[str] = None
    content: str = ""
    excerpt: Optional[str] = None
    byline: Optional[str] = None
    siteName: Optional[str] = None


class ExtractResult(BaseModel):
    success: bool
    data: Optional[ExtractedContent] = None
    error: Optional[str] = None
