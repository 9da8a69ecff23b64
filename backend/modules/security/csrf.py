"""
CSRF token issuance and verification.

One token per browser session lives in a cookie that page scripts can read,
so the page can echo it back in the ``X-CSRF-Token`` header or a
``csrf_token`` form field. A state-changing request is accepted only when
the echoed value matches the cookie.
"""

import hmac
import logging
import re
import secrets
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from starlette.responses import Response

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
TOKEN_PATTERN = re.compile(r"^[0-9a-f]{64}$")

STATE_CHANGING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


@dataclass
class PendingCookie:
    """A cookie to be written on the outgoing response."""

    name: str
    value: str
    options: dict[str, Any] = field(default_factory=dict)


class CookieJar:
    """
    Cookies of one request plus the cookies it wants to set.

    Reads see pending writes, so a token issued earlier in the request is
    the one later verification compares against.
    """

    def __init__(self, cookies: Optional[Mapping[str, str]] = None) -> None:
        self._cookies: dict[str, str] = dict(cookies or {})
        self._pending: list[PendingCookie] = []

    def get(self, name: str) -> Optional[str]:
        return self._cookies.get(name)

    def set(self, name: str, value: str, **options: Any) -> None:
        self._cookies[name] = value
        self._pending.append(PendingCookie(name, value, options))

    @property
    def pending(self) -> list[PendingCookie]:
        return list(self._pending)

    def apply(self, response: Response) -> None:
        """Write pending cookies onto ``response``."""
        for cookie in self._pending:
            response.set_cookie(cookie.name, cookie.value, **cookie.options)


def requires_csrf_check(method: str) -> bool:
    """Only state-changing methods need a token."""
    return method.upper() in STATE_CHANGING_METHODS


class CsrfTokenService:
    """Issues and verifies cookie-bound CSRF tokens."""

    def __init__(
        self,
        cookie_name: str = "csrf_token",
        max_age: int = 7200,
        secure: bool = True,
        header_name: str = "X-CSRF-Token",
        form_field: str = "csrf_token",
    ) -> None:
        self._cookie_name = cookie_name
        self._max_age = max_age
        self._secure = secure
        self.header_name = header_name
        self.form_field = form_field

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    @staticmethod
    def generate_token() -> str:
        """256 bits from the OS CSPRNG, hex encoded."""
        return secrets.token_hex(TOKEN_BYTES)

    @staticmethod
    def is_well_formed(token: Any) -> bool:
        return isinstance(token, str) and TOKEN_PATTERN.fullmatch(token) is not None

    def get_or_create_token(self, jar: CookieJar) -> str:
        """
        Return the session's token, issuing one if the cookie is absent or malformed.

        The cookie is deliberately not HttpOnly: the page has to read it.
        """
        existing = jar.get(self._cookie_name)
        if self.is_well_formed(existing):
            return existing

        token = self.generate_token()
        jar.set(
            self._cookie_name,
            token,
            path="/",
            httponly=False,
            secure=self._secure,
            samesite="lax",
            max_age=self._max_age,
        )
        return token

    def verify(self, submitted: Any, jar: CookieJar) -> bool:
        """
        Constant-time comparison of ``submitted`` with the cookie token.

        Returns False for anything missing, malformed or different; never raises.
        """
        expected = jar.get(self._cookie_name)
        if not self.is_well_formed(submitted) or not self.is_well_formed(expected):
            logger.debug("CSRF token missing or malformed")
            return False
        return hmac.compare_digest(submitted.encode("ascii"), expected.encode("ascii"))
