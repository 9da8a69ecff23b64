"""Tests for modules/auth/guard.py."""

import time
from unittest.mock import MagicMock

import jwt
import pytest

from modules.auth.guard import SessionGuard, extract_access_token
from modules.auth.models import Redirect, RedirectReason, Verified
from modules.auth.service import AuthService
from shared.config import Settings
from shared.context import RequestContext
from shared.exceptions import BackendErrorKind, ExternalServiceError
from shared.models import Session

from tests.fakes import FakeAuthService, InMemoryProfileRepository, backend_error

USER_ID = "9b2d7c1a-0000-4000-8000-000000000001"
EMAIL = "new@example.com"
TOKEN = "valid-token"


def _context(session=None, access_token=TOKEN, path="/profile") -> RequestContext:
    return RequestContext(
        request_id="req-1",
        path=path,
        method="GET",
        access_token=access_token,
        session=session,
    )


def _request(cookies=None, headers=None, path="/profile") -> MagicMock:
    request = MagicMock()
    request.cookies = cookies or {}
    request.headers = headers or {}
    request.url.path = path
    return request


@pytest.fixture
def session() -> Session:
    return Session(user_id=USER_ID, email=EMAIL)


@pytest.fixture
def auth(session) -> FakeAuthService:
    return FakeAuthService({TOKEN: session})


@pytest.fixture
def repo() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def guard(auth, repo) -> SessionGuard:
    return SessionGuard(auth, repo, login_path="/")


class TestExtractAccessToken:
    def test_cookie_wins(self):
        request = _request(cookies={"sb-access-token": "c"}, headers={"Authorization": "Bearer h"})
        assert extract_access_token(request, "sb-access-token") == "c"

    def test_bearer_header(self):
        request = _request(headers={"Authorization": "Bearer abc.def"})
        assert extract_access_token(request, "sb-access-token") == "abc.def"

    def test_other_scheme_ignored(self):
        request = _request(headers={"Authorization": "Basic dXNlcg=="})
        assert extract_access_token(request, "sb-access-token") is None


class TestPopulateSession:
    """Session population is fail-closed and never raises."""

    @pytest.mark.asyncio
    async def test_no_credentials(self, guard, auth):
        assert await guard.populate_session(_request()) is None
        assert auth.resolve_calls == []

    @pytest.mark.asyncio
    async def test_valid_cookie(self, guard, session):
        request = _request(cookies={"sb-access-token": TOKEN})
        assert await guard.populate_session(request) == session

    @pytest.mark.asyncio
    async def test_backend_error_yields_none(self, guard, auth):
        auth.resolve_error = ExternalServiceError("down", service="supabase-auth")
        request = _request(cookies={"sb-access-token": TOKEN})
        assert await guard.populate_session(request) is None

    @pytest.mark.asyncio
    async def test_unexpected_error_yields_none(self, guard, auth):
        auth.resolve_error = RuntimeError("boom")
        request = _request(headers={"Authorization": f"Bearer {TOKEN}"})
        assert await guard.populate_session(request) is None


class TestRequireAuth:
    """Session verification and profile self-repair."""

    @pytest.mark.asyncio
    async def test_existing_profile(self, guard, repo, session):
        repo.rows[USER_ID] = {"id": USER_ID, "email": EMAIL}
        result = await guard.require_auth(_context(session))
        assert result == Verified(user_id=USER_ID, email=EMAIL)
        assert repo.insert_count == 0

    @pytest.mark.asyncio
    async def test_no_session_redirects_with_return_to(self, guard):
        result = await guard.require_auth(_context(access_token=None, path="/profile"))
        assert isinstance(result, Redirect)
        assert result.reason is RedirectReason.UNAUTHENTICATED
        assert result.location == "/?returnTo=%2Fprofile"

    @pytest.mark.asyncio
    async def test_re_resolves_missing_session_once(self, guard, auth, repo):
        repo.rows[USER_ID] = {"id": USER_ID, "email": EMAIL}
        result = await guard.require_auth(_context(session=None))
        assert isinstance(result, Verified)
        assert auth.resolve_calls == [TOKEN]

    @pytest.mark.asyncio
    async def test_resolution_error_redirects_with_session_flag(self, guard, auth):
        auth.resolve_error = ExternalServiceError("down", service="supabase-auth")
        result = await guard.require_auth(_context(session=None))
        assert result.reason is RedirectReason.SESSION_ERROR
        assert result.location == "/?error=session"

    @pytest.mark.asyncio
    async def test_incomplete_token_claims_redirect_with_session_flag(self, repo):
        settings = Settings(_env_file=None, supabase_jwt_secret="guard-secret")
        guard = SessionGuard(AuthService(settings, lambda: MagicMock()), repo, login_path="/")
        token = jwt.encode(
            {"sub": USER_ID, "email": EMAIL, "aud": "authenticated", "exp": int(time.time()) + 3600},
            "guard-secret",
            algorithm="HS256",
        )

        result = await guard.require_auth(_context(session=None, access_token=token))

        assert result.reason is RedirectReason.SESSION_ERROR
        assert result.location == "/?error=session"
        assert repo.insert_count == 0

    @pytest.mark.asyncio
    async def test_creates_missing_profile(self, guard, repo, session):
        result = await guard.require_auth(_context(session))
        assert isinstance(result, Verified)
        assert repo.insert_count == 1
        row = repo.rows[USER_ID]
        assert row["email"] == EMAIL
        assert "updated_at" in row

    @pytest.mark.asyncio
    async def test_not_found_error_triggers_repair(self, guard, repo, session):
        repo.get_error = backend_error(BackendErrorKind.NOT_FOUND)

        def clear_error(data):
            repo.get_error = None
            return InMemoryProfileRepository.insert(repo, data)

        repo.insert = clear_error
        result = await guard.require_auth(_context(session))
        assert isinstance(result, Verified)
        assert USER_ID in repo.rows

    @pytest.mark.asyncio
    async def test_idempotent_for_new_user(self, guard, repo, session):
        """Two sequential calls create exactly one profile row."""
        first = await guard.require_auth(_context(session))
        second = await guard.require_auth(_context(session))
        assert first == second
        assert repo.insert_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_insert_is_tolerated(self, guard, repo, session):
        repo.race_rows[USER_ID] = {"id": USER_ID, "email": EMAIL}
        result = await guard.require_auth(_context(session))
        assert isinstance(result, Verified)
        assert repo.insert_count == 0

    @pytest.mark.asyncio
    async def test_lookup_failure_signs_out(self, guard, auth, repo, session):
        repo.get_error = backend_error(BackendErrorKind.OTHER)
        result = await guard.require_auth(_context(session))
        assert result.reason is RedirectReason.UNRECOVERABLE
        assert result.location == "/?error=profile"
        assert auth.signed_out == [TOKEN]

    @pytest.mark.asyncio
    async def test_insert_failure_signs_out(self, guard, auth, repo, session):
        repo.insert_error = backend_error(BackendErrorKind.PERMISSION_DENIED)
        result = await guard.require_auth(_context(session))
        assert result.reason is RedirectReason.UNRECOVERABLE
        assert result.error_flag == "create-profile"
        assert result.location == "/?error=create-profile"
        assert auth.signed_out == [TOKEN]

    @pytest.mark.asyncio
    async def test_sign_out_failure_still_redirects(self, guard, auth, repo, session):
        repo.insert_error = backend_error(BackendErrorKind.OTHER)
        auth.sign_out_error = ExternalServiceError("down", service="supabase-auth")
        result = await guard.require_auth(_context(session))
        assert isinstance(result, Redirect)
        assert result.reason is RedirectReason.UNRECOVERABLE
