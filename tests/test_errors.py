from fastapi.testclient import TestClient
from contacts_api.main import app
from contacts_api.core.errors import describe_validation_errors

client = TestClient(app)


def test_404_not_found():
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "error" in data
    assert "code" in data
    assert data["code"] == "HTTP_ERROR"


def test_405_method_not_allowed():
    response = client.delete("/live")
    assert response.status_code == 405
    assert response.json()["code"] == "HTTP_ERROR"


def test_validation_error_structure():
    from pydantic import BaseModel

    class Item(BaseModel):
        name: str
        price: int

    @app.post("/test-validation")
    def create_item(item: Item):
        return item

    response = client.post("/test-validation", json={"name": "foo", "price": "invalid"})
    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["error"].startswith("price:")
    assert len(data["details"]) > 0


def test_custom_exceptions():
    from contacts_api.core.exceptions import (
        AuthenticationError,
        ConflictError,
        ExternalServiceError,
        ResourceNotFoundError,
    )

    @app.get("/test-not-found")
    def trigger_not_found():
        raise ResourceNotFoundError(message="Item not found")

    @app.get("/test-conflict")
    def trigger_conflict():
        raise ConflictError("Email in use")

    @app.get("/test-unauthorized")
    def trigger_unauthorized():
        raise AuthenticationError()

    @app.get("/test-upstream")
    def trigger_upstream():
        raise ExternalServiceError(details={"provider": "sendgrid"})

    response = client.get("/test-not-found")
    assert response.status_code == 404
    assert response.json() == {"error": "Item not found", "code": "NOT_FOUND", "details": None}

    response = client.get("/test-conflict")
    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"

    response = client.get("/test-unauthorized")
    assert response.status_code == 401
    assert response.json()["error"] == "Not authorized"

    response = client.get("/test-upstream")
    assert response.status_code == 502
    assert response.json()["details"] == {"provider": "sendgrid"}


def test_describe_validation_errors():
    assert describe_validation_errors([]) == "Input validation failed"
    errors = [{"loc": ["body", "email"], "msg": "Value error, email has an invalid format"}]
    assert describe_validation_errors(errors) == "email: Value error, email has an invalid format"


def test_liveness_probe():
    response = client.get("/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}
    assert "X-Process-Time" in response.headers


def test_readiness_without_database():
    response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["reason"] == "database_unavailable"
