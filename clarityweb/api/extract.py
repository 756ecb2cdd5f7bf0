"""
clarityweb/api/extract.py

Purpose: HTTP entry point for the content extraction action

Extraction failures are part of the payload (success=false), so this
endpoint answers 200 for them; only a malformed body gets a 422.
"""

from fastapi import APIRouter, Depends

from clarityweb.api.deps import get_extractor
from clarityweb.core.logging import get_logger
from clarityweb.schemas.extraction import ExtractRequest, ExtractResult
from clarityweb.services.extraction_service import extract_from_url
from clarityweb.services.readability_service import ReadabilityExtractor

logger = get_logger(__name__)
router = APIRouter()


@router.post("/extract", response_model=ExtractResult, response_model_exclude_none=True)
async def extract(
    body: ExtractRequest,
    extractor: ReadabilityExtractor = Depends(get_extractor),
):
    result = await extract_from_url(body.url, extractor)
    if not result.success:
        logger.info(f"Extraction failed: {result.error}", extra={"url": body.url})
    return result
