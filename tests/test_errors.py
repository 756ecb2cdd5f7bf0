from fastapi.testclient import TestClient
from clarityweb.main import app
import pytest

client = TestClient(app, raise_server_exceptions=False)

def test_404_not_found():
    response = client.get("/api/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "error" in data
    assert "code" in data
    assert data["code"] == "HTTP_ERROR"

def test_405_method_not_allowed():
    response = client.get("/api/user/reset-onboarding")
    assert response.status_code == 405
    assert response.json()["code"] == "HTTP_ERROR"

def test_validation_error_structure():
    from pydantic import BaseModel

    class Item(BaseModel):
        name: str
        price: int

    @app.post("/api/test-validation")
    def create_item(item: Item):
        return item

    response = client.post("/api/test-validation", json={"name": "foo", "price": "invalid"})
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert "details" in data
    assert len(data["details"]) > 0

def test_custom_exception():
    from clarityweb.core.exceptions import NotFoundError

    @app.get("/api/test-custom-error")
    def trigger_custom_error():
        raise NotFoundError(message="Item not found")

    response = client.get("/api/test-custom-error")
    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "NOT_FOUND"
    assert data["error"] == "Item not found"

def test_unhandled_exception_is_generic():
    @app.get("/api/test-crash")
    def crash():
        raise RuntimeError("secret connection string mongodb://admin:pw@db")

    response = client.get("/api/test-crash")
    assert response.status_code == 500
    data = response.json()
    assert data == {"error": "Internal server error", "code": "INTERNAL_ERROR", "details": None}
    assert "mongodb://" not in response.text

@pytest.mark.parametrize("path", ["/live", "/"])
def test_liveness_endpoints(path):
    assert client.get(path).status_code == 200
