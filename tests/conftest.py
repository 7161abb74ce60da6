"""
Global pytest configuration and fixtures for the Streme auth API test suite.
"""

import os

# Set test environment variables before settings are loaded
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32-chars"
os.environ["ENVIRONMENT"] = "test"

from typing import Any, Callable, Dict  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.core.settings import Settings  # noqa: E402
from src.domains.auth.models import Identity  # noqa: E402
from src.domains.auth.tokens import SessionTokenService  # noqa: E402
from src.domains.checkin.routes import get_checkin_service  # noqa: E402
from src.domains.checkin.service import CheckinService  # noqa: E402
from src.main import create_app  # noqa: E402

# Import fixtures from fixture modules
from tests.fixtures.auth_fixtures import *  # noqa: F403, F401, E402
from tests.fixtures.checkin_fixtures import *  # noqa: F403, F401, E402
from tests.fixtures.auth_fixtures import (  # noqa: E402
    TEST_FID,
    TEST_JWT_SECRET,
    FakeSignInVerifier,
)
from tests.fixtures.checkin_fixtures import CHECKIN_API_URL, UpstreamStub  # noqa: E402


@pytest.fixture
def test_jwt_secret() -> str:
    """JWT secret for generating test tokens."""
    return TEST_JWT_SECRET


@pytest.fixture
def test_settings() -> Settings:
    """Non-production settings with a fixed secret and a fake upstream."""
    return Settings(
        ENVIRONMENT="test",
        JWT_SECRET=TEST_JWT_SECRET,
        CHECKIN_API_URL=CHECKIN_API_URL,
    )


@pytest.fixture
def app(
    test_settings: Settings,
    fake_verifier: FakeSignInVerifier,
    upstream: UpstreamStub,
) -> FastAPI:
    """App wired to the fake verifier and the stubbed check-in API."""
    application = create_app(test_settings, sign_in_verifier=fake_verifier)
    application.dependency_overrides[get_checkin_service] = lambda: CheckinService(
        CHECKIN_API_URL, transport=upstream.transport()
    )
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """FastAPI test client for API endpoint testing."""
    return TestClient(app)


@pytest.fixture
def session_tokens(test_jwt_secret: str) -> SessionTokenService:
    """Token service sharing the app's secret."""
    return SessionTokenService(test_jwt_secret)


@pytest.fixture
def valid_token(session_tokens: SessionTokenService) -> str:
    """Session token for fid 12345."""
    return session_tokens.issue(Identity(fid=TEST_FID, address="0x1234567890abcdef"))


@pytest.fixture
def auth_headers(valid_token: str) -> Dict[str, str]:
    """Generate authentication headers with valid session token."""
    return {"Authorization": f"Bearer {valid_token}"}


@pytest.fixture
def make_app(
    fake_verifier: FakeSignInVerifier,
) -> Callable[..., FastAPI]:
    """Factory for apps with custom settings."""

    def _make(**overrides: Any) -> FastAPI:
        values: Dict[str, Any] = {"ENVIRONMENT": "test", "JWT_SECRET": TEST_JWT_SECRET}
        values.update(overrides)
        return create_app(Settings(**values), sign_in_verifier=fake_verifier)

    return _make
