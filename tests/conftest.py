"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from finsuite.main import app
from finsuite.auth.sessions import SessionStore, get_session_store
from finsuite.services.genai import GenAIService, get_genai_service


@pytest.fixture(scope="session")
def anyio_backend():
    """Backend for async tests."""
    return "asyncio"


class FakeGenAIService(GenAIService):
    """GenAIService that returns a canned reply instead of calling the API."""

    def __init__(self, reply: str = "", error: Exception = None):
        super().__init__(api_key="")
        self.reply = reply
        self.error = error
        self.prompts = []

    async def _generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture(autouse=True)
def session_store():
    """Fresh in-memory session store for every test."""
    store = SessionStore()
    app.dependency_overrides[get_session_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_session_store, None)


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def authenticated_client(client):
    """Test client holding a session cookie."""
    response = client.post(
        "/api/auth/login",
        json={"email": "priya@example.com", "password": "secret123"},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def fake_genai():
    """Install a fake AI service; set .reply / .error per test."""
    service = FakeGenAIService()
    app.dependency_overrides[get_genai_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_genai_service, None)
