"""
clarityweb/services/readability_service.py

Purpose: Readable content extraction from web pages

- Validates the URL (http/https only)
- Fetches the page with a browser-like client and a timeout
- Runs readability-lxml to find the main article
- Converts it to clean plain text plus page metadata
- Expected failures come back as ExtractionResult(success=False, error=...)
"""

import asyncio
import re
from typing import Optional, Tuple
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from clarityweb.core.exceptions import UpstreamError
from clarityweb.core.logging import get_logger
from clarityweb.schemas.extraction import ExtractionResult
from clarityweb.utils.constants import (
    ERROR_CERTIFICATE,
    ERROR_CONNECTION_REFUSED,
    ERROR_CONTENT_TOO_SHORT,
    ERROR_DNS,
    ERROR_FETCH_GENERIC,
    ERROR_INVALID_URL,
    ERROR_NO_READABLE_CONTENT,
    ERROR_NOT_HTML,
    ERROR_TIMEOUT,
    ERROR_URL_PROTOCOL,
    EXTRACTION_HEADERS,
    HTML_CONTENT_TYPES,
    HTTP_STATUS_MESSAGES,
)

logger = get_logger(__name__)

# readability-lxml's placeholder when a page has no <title>
NO_TITLE = "[no-title]"

DNS_FAILURE_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated",
)


def validate_url(url: str) -> Tuple[bool, Optional[str]]:
    """
    Checks a URL without fetching it.

    Returns:
        (valid, error message or None)
    """
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False, ERROR_INVALID_URL

    if not parsed.scheme or not parsed.netloc:
        return False, ERROR_INVALID_URL

    if parsed.scheme not in ("http", "https"):
        return False, ERROR_URL_PROTOCOL

    return True, None


def clean_text(text: str) -> str:
    """
    Normalizes whitespace in extracted text.
    """
    text = re.sub(r"[\t\r]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = re.sub(r" {2,}", " ", text)
    return text.strip()


def _meta_content(soup: BeautifulSoup, *selectors: dict) -> Optional[str]:
    for attrs in selectors:
        tag = soup.find("meta", attrs=attrs)
        if tag and tag.get("content"):
            value = tag["content"].strip()
            if value:
                return value
    return None


def _transport_error_message(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.TimeoutException):
        return ERROR_TIMEOUT

    detail = str(exc).lower()
    if any(marker in detail for marker in DNS_FAILURE_MARKERS):
        return ERROR_DNS
    if "connection refused" in detail:
        return ERROR_CONNECTION_REFUSED
    if "certificate" in detail:
        return ERROR_CERTIFICATE

    logger.error(f"URL extraction error: {exc}", exc_info=True)
    return ERROR_FETCH_GENERIC


class ReadabilityExtractor:
    """
    Fetches pages and extracts their readable text.

    Owns one httpx.AsyncClient for the process; close() on shutdown.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        min_content_length: int = 100,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._min_content_length = min_content_length
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers=EXTRACTION_HEADERS,
            follow_redirects=True,
        )

    async def close(self):
        await self._client.aclose()

    async def _fetch_html(self, url: str) -> str:
        """
        Raises:
            UpstreamError: Non-2xx status or a non-HTML response
            httpx.HTTPError: Transport failure
        """
        response = await self._client.get(url)

        if not response.is_success:
            message = HTTP_STATUS_MESSAGES.get(
                response.status_code,
                f"Failed to fetch URL: {response.status_code} {response.reason_phrase}",
            )
            raise UpstreamError(message, details={"status": response.status_code})

        content_type = response.headers.get("content-type", "")
        if not any(kind in content_type for kind in HTML_CONTENT_TYPES):
            raise UpstreamError(ERROR_NOT_HTML, details={"content_type": content_type})

        return response.text

    def parse(self, html: str, url: str) -> ExtractionResult:
        """
        Extracts title, text and metadata from an HTML document.
        """
        document = Document(html, url=url)
        article_html = document.summary(html_partial=True)
        text = BeautifulSoup(article_html, "lxml").get_text("\n")

        if not text.strip():
            return ExtractionResult(success=False, error=ERROR_NO_READABLE_CONTENT)

        content = clean_text(text)
        if len(content) < self._min_content_length:
            return ExtractionResult(success=False, error=ERROR_CONTENT_TOO_SHORT)

        page = BeautifulSoup(html, "lxml")
        title = document.title()

        return ExtractionResult(
            success=True,
            title=title if title and title != NO_TITLE else None,
            content=content,
            excerpt=_meta_content(
                page,
                {"name": "description"},
                {"property": "og:description"},
            ),
            byline=_meta_content(
                page,
                {"name": "author"},
                {"property": "article:author"},
            ),
            siteName=_meta_content(page, {"property": "og:site_name"}),
        )

    async def extract(self, url: str) -> ExtractionResult:
        """
        Extracts readable content from a URL.

        Args:
            url: Page address (http or https)

        Returns:
            ExtractionResult; success=False with a user-facing message on failure
        """
        valid, error = validate_url(url)
        if not valid:
            return ExtractionResult(success=False, error=error)

        try:
            html = await self._fetch_html(url)
        except UpstreamError as e:
            logger.info(f"Extraction fetch rejected: {e.message}", extra={"url": url})
            return ExtractionResult(success=False, error=e.message)
        except httpx.HTTPError as e:
            return ExtractionResult(success=False, error=_transport_error_message(e))

        try:
            # lxml parsing is CPU-bound; keep it off the event loop
            return await asyncio.to_thread(self.parse, html, url)
        except Unparseable as e:
            logger.warning(f"Readability could not parse page: {e}", extra={"url": url})
            return ExtractionResult(success=False, error=ERROR_NO_READABLE_CONTENT)
