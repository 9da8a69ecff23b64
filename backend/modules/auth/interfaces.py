"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with fakes and swapping the auth backend.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import Session


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for the external auth backend.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def resolve_session(self, access_token: Optional[str]) -> Optional[Session]:
        """
        Resolve a transport credential into a session.

        Args:
            access_token: Access token from the session cookie or bearer header

        Returns:
            Session if the credential is valid, None if there is no credential

        Raises:
            AuthenticationError: If the token is invalid or expired
            ExternalServiceError: If the auth backend could not be reached
        """
        ...

    async def sign_out(self, access_token: str) -> None:
        """
        Revoke the session behind ``access_token``.

        Raises:
            ExternalServiceError: If the auth backend rejected the call
        """
        ...
