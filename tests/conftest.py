import json

import httpx
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from contacts_api.api.deps import get_email_service
from contacts_api.core.config import Settings, get_settings
from contacts_api.db.mongo import get_database
from contacts_api.main import app
from contacts_api.services.email_service import EmailService

TEST_SECRET = "test-secret-key-long-enough-for-hs256-signing"


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        _env_file=None,
        ENVIRONMENT="development",
        SECRET_KEY=TEST_SECRET,
        SENDGRID_API_KEY="SG.test-key",
        APP_URL="http://testserver",
        UPLOAD_DIR=str(tmp_path / "tmp"),
        AVATARS_DIR=str(tmp_path / "avatars"),
    )


@pytest.fixture
def database():
    return AsyncMongoMockClient()["contacts_test"]


@pytest.fixture
def mailbox():
    """JSON payloads received by the fake SendGrid endpoint."""
    return []


@pytest.fixture
def mail_status():
    """Status the fake SendGrid endpoint answers with; tests may change it."""
    return {"code": 202}


@pytest.fixture
def mail_transport(mailbox, mail_status):
    def handler(request: httpx.Request) -> httpx.Response:
        if mail_status["code"] != 202:
            return httpx.Response(mail_status["code"], text="provider down")
        mailbox.append(json.loads(request.content))
        return httpx.Response(202, headers={"X-Message-Id": "test-message"})

    return httpx.MockTransport(handler)


@pytest.fixture
def client(database, test_settings, mail_transport):
    async def override_database():
        return database

    app.dependency_overrides[get_database] = override_database
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_email_service] = lambda: EmailService(test_settings, transport=mail_transport)

    yield TestClient(app)

    app.dependency_overrides.clear()


def verification_token_from(message: dict) -> str:
    text = message["content"][0]["value"]
    return text.rsplit("/", 1)[-1]


@pytest.fixture
def signup(client, mailbox):
    """Registers an account and, by default, follows its verification link."""
    def _signup(email="a@b.co", password="secret1", verify=True):
        response = client.post("/auth/register", json={"email": email, "password": password})
        assert response.status_code == 201
        token = verification_token_from(mailbox[-1])
        if verify:
            assert client.get(f"/auth/verify/{token}").status_code == 200
        return token

    return _signup


@pytest.fixture
def login(client, signup):
    """Registers, verifies and logs in; returns Authorization headers."""
    def _login(email="a@b.co", password="secret1"):
        signup(email, password)
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()}"}

    return _login
