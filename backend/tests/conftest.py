"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import hashlib
import hmac
import time
from datetime import datetime, timezone, timedelta
from unittest.mock import MagicMock

import jwt  # PyJWT
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer
from modules.auth.service import AuthService
from shared.config import Settings

from tests.fakes import (
    FakeAgencyRepository,
    FakeCvRepository,
    FakeFeedbackRepository,
    InMemoryProfileRepository,
)


# Test secrets (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_WEBHOOK_SECRET = "whsec_test_secret"

TEST_USER_ID = "3f0c2b1e-8a5d-4c3b-9e7f-1a2b3c4d5e6f"
TEST_USER_EMAIL = "test@example.com"

SESSION_COOKIE = "sb-access-token"


def create_test_token(
    user_id: str = TEST_USER_ID,
    email: str = TEST_USER_EMAIL,
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        secret: Signing secret; a different one yields an invalid token

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int((now - timedelta(hours=2)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def stripe_signature(payload: bytes, secret: str = TEST_WEBHOOK_SECRET) -> str:
    """Build a Stripe-Signature header the way Stripe signs webhooks."""
    timestamp = int(time.time())
    signed = f"{timestamp}.".encode("utf-8") + payload
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def fetch_csrf_token(client: TestClient) -> str:
    """Bootstrap the CSRF cookie the way the page script does."""
    response = client.get("/api/csrf-token")
    assert response.status_code == 200
    return response.json()["csrfToken"]


def login(client: TestClient, token: str) -> None:
    client.cookies.set(SESSION_COOKIE, token)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        supabase_jwt_secret=TEST_JWT_SECRET,
        stripe_secret_key="sk_test_123",
        stripe_webhook_secret=TEST_WEBHOOK_SECRET,
    )


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return TEST_USER_ID


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return TEST_USER_EMAIL


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def mock_supabase() -> MagicMock:
    """Stand-in for the service-role Supabase client."""
    return MagicMock()


@pytest.fixture
def profiles(test_user_id: str, test_user_email: str) -> InMemoryProfileRepository:
    """Profile store holding the test user's row."""
    return InMemoryProfileRepository(
        [{"id": test_user_id, "email": test_user_email, "username": "tester", "full_name": "Test User"}]
    )


@pytest.fixture
def cv_repository() -> FakeCvRepository:
    return FakeCvRepository()


@pytest.fixture
def agency_repository() -> FakeAgencyRepository:
    return FakeAgencyRepository()


@pytest.fixture
def feedback_repository() -> FakeFeedbackRepository:
    return FakeFeedbackRepository()


@pytest.fixture
def container(
    settings: Settings,
    mock_supabase: MagicMock,
    profiles: InMemoryProfileRepository,
    cv_repository: FakeCvRepository,
    agency_repository: FakeAgencyRepository,
    feedback_repository: FakeFeedbackRepository,
) -> ServiceContainer:
    """Container wired to in-memory stores; JWTs are validated for real."""
    return ServiceContainer(
        settings,
        service_client=mock_supabase,
        auth=AuthService(settings, lambda: mock_supabase),
        profiles=profiles,
        user_profiles=lambda access_token: profiles,
        cv_repository=cv_repository,
        agency_repository=agency_repository,
        feedback=feedback_repository,
    )


@pytest.fixture
def client(container: ServiceContainer):
    """HTTPS test client so Secure cookies round-trip."""
    with TestClient(create_app(container), base_url="https://testserver") as test_client:
        yield test_client


@pytest.fixture
def authed_client(client: TestClient, auth_token: str) -> TestClient:
    """Client with a session cookie and a CSRF header ready for writes."""
    login(client, auth_token)
    client.headers["X-CSRF-Token"] = fetch_csrf_token(client)
    return client
