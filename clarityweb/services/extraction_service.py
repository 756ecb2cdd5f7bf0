"""
clarityweb/services/extraction_service.py

Purpose: Content extraction action

- Delegates a URL to the readability extractor
- Normalizes its result into the {success, data | error} shape
- Never raises: faults are logged and turned into a generic message
"""

from clarityweb.core.logging import get_logger
from clarityweb.schemas.extraction import ExtractedContent, ExtractResult
from clarityweb.services.readability_service import ReadabilityExtractor
from clarityweb.utils.constants import ERROR_EXTRACTION_FAILED, ERROR_EXTRACTION_UNEXPECTED

logger = get_logger(__name__)


async def extract_from_url(url: str, extractor: ReadabilityExtractor) -> ExtractResult:
    """
    Extracts the main readable content of a web page.

    Args:
        url: The URL to extract content from
        extractor: Extraction collaborator

    Returns:
        ExtractResult with title/content/excerpt/byline/siteName, or an error message
    """
    try:
        result = await extractor.extract(url)
    except Exception as e:
        logger.error(f"Extract from URL error: {e}", extra={"url": url}, exc_info=True)
        return ExtractResult(success=False, error=ERROR_EXTRACTION_UNEXPECTED)

    if not result.success:
        return ExtractResult(success=False, error=result.error or ERROR_EXTRACTION_FAILED)

    return ExtractResult(
        success=True,
        data=ExtractedContent(
            title=result.title,
            content=result.content or "",
            excerpt=result.excerpt,
            byline=result.byline,
            siteName=result.siteName,
        ),
    )
