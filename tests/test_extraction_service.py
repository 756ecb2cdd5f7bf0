import pytest

from clarityweb.main import app
from clarityweb.schemas.extraction import ExtractionResult
from clarityweb.services.extraction_service import extract_from_url


class StubExtractor:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.urls = []

    async def extract(self, url):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.asyncio
async def test_success_is_normalized():
    extractor = StubExtractor(ExtractionResult(
        success=True,
        title="Title",
        content="Body text",
        excerpt="Summary",
        byline="Author",
        siteName="Site",
    ))

    result = await extract_from_url("https://example.com", extractor)

    assert extractor.urls == ["https://example.com"]
    assert result.success
    assert result.error is None
    assert result.data.model_dump() == {
        "title": "Title",
        "content": "Body text",
        "excerpt": "Summary",
        "byline": "Author",
        "siteName": "Site",
    }


@pytest.mark.asyncio
async def test_missing_content_defaults_to_empty_string():
    result = await extract_from_url("https://example.com", StubExtractor(ExtractionResult(success=True, title="T")))

    assert result.success
    assert result.data.content == ""
    assert result.data.excerpt is None


@pytest.mark.asyncio
async def test_collaborator_failure_keeps_its_message():
    extractor = StubExtractor(ExtractionResult(success=False, error="The page was not found"))
    result = await extract_from_url("https://example.com", extractor)
    assert not result.success
    assert result.error == "The page was not found"
    assert result.data is None


@pytest.mark.asyncio
async def test_collaborator_failure_without_message():
    result = await extract_from_url("https://example.com", StubExtractor(ExtractionResult(success=False)))
    assert result.error == "Failed to extract content from URL"


@pytest.mark.asyncio
async def test_thrown_fault_is_mapped_not_raised():
    extractor = StubExtractor(error=RuntimeError("lxml blew up on /etc/passwd"))
    result = await extract_from_url("https://example.com", extractor)
    assert not result.success
    assert result.error == "An unexpected error occurred while extracting content"


def test_endpoint_omits_absent_fields(client):
    app.state.extractor = StubExtractor(ExtractionResult(success=True, title="T"))

    response = client.post("/api/extract", json={"url": "https://example.com"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"title": "T", "content": ""}}


def test_endpoint_reports_failure_as_payload(client):
    app.state.extractor = StubExtractor(error=ValueError("boom"))

    response = client.post("/api/extract", json={"url": "https://example.com"})

    assert response.status_code == 200
    assert response.json() == {
        "success": False,
        "error": "An unexpected error occurred while extracting content",
    }


def test_endpoint_requires_url(client):
    response = client.post("/api/extract", json={})
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"
