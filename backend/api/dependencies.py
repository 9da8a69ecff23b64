"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

One container is built per application by ``create_app`` and stored on
``app.state.container``; there are no module-level client singletons.
Tests pass replacements as keyword overrides:

    container = ServiceContainer(settings, auth=FakeAuthService(), profiles=repo)
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from fastapi import Request

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.agency.interfaces import IAgencyRepository
    from modules.agency.service import InvitationService
    from modules.auth.guard import SessionGuard
    from modules.auth.interfaces import IAuthService
    from modules.billing.interfaces import IBillingService
    from modules.cv.interfaces import ICvRepository
    from modules.cv.service import CvService
    from modules.feedback.interfaces import IFeedbackRepository
    from modules.profiles.interfaces import IProfileRepository
    from modules.profiles.service import ProfileService
    from modules.security.csrf import CsrfTokenService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access and cached
    for the lifetime of the container. Any service can be supplied up
    front as a keyword override.
    """

    def __init__(self, settings: Optional[Settings] = None, **overrides: Any) -> None:
        self.settings = settings or get_settings()
        self._services: dict[str, Any] = dict(overrides)

    def _get(self, name: str, factory: Callable[[], Any]) -> Any:
        if name not in self._services:
            self._services[name] = factory()
        return self._services[name]

    @property
    def service_client(self) -> "Client":
        """Privileged Supabase client (bypasses RLS)."""
        from shared.database import create_service_client
        return self._get("service_client", lambda: create_service_client(self.settings))

    @property
    def user_profiles(self) -> Callable[[str], "IProfileRepository"]:
        """Factory for a profile repository bound to one user's access token."""
        def build() -> Callable[[str], "IProfileRepository"]:
            from modules.profiles.repository import ProfileRepository
            from shared.database import create_user_client

            def for_token(access_token: str) -> "IProfileRepository":
                return ProfileRepository(create_user_client(self.settings, access_token))

            return for_token

        return self._get("user_profiles", build)

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        def build() -> "IAuthService":
            from modules.auth.service import AuthService
            return AuthService(self.settings, lambda: self.service_client)

        return self._get("auth", build)

    @property
    def profiles(self) -> "IProfileRepository":
        """Get the privileged profile repository."""
        def build() -> "IProfileRepository":
            from modules.profiles.repository import ProfileRepository
            return ProfileRepository(self.service_client)

        return self._get("profiles", build)

    @property
    def guard(self) -> "SessionGuard":
        def build() -> "SessionGuard":
            from modules.auth.guard import SessionGuard
            return SessionGuard(
                auth=self.auth,
                profiles=self.profiles,
                session_cookie_name=self.settings.session_cookie_name,
                login_path=self.settings.login_path,
            )

        return self._get("guard", build)

    @property
    def csrf(self) -> "CsrfTokenService":
        def build() -> "CsrfTokenService":
            from modules.security.csrf import CsrfTokenService
            return CsrfTokenService(
                cookie_name=self.settings.csrf_cookie_name,
                max_age=self.settings.csrf_token_max_age,
                secure=not self.settings.debug,
                header_name=self.settings.csrf_header_name,
                form_field=self.settings.csrf_form_field,
            )

        return self._get("csrf", build)

    @property
    def profile_service(self) -> "ProfileService":
        def build() -> "ProfileService":
            from modules.profiles.service import ProfileService
            return ProfileService(self.profiles, self.user_profiles)

        return self._get("profile_service", build)

    @property
    def cv_repository(self) -> "ICvRepository":
        def build() -> "ICvRepository":
            from modules.cv.repository import CvRepository
            return CvRepository(self.service_client)

        return self._get("cv_repository", build)

    @property
    def cv(self) -> "CvService":
        def build() -> "CvService":
            from modules.cv.service import CvService
            return CvService(self.cv_repository)

        return self._get("cv", build)

    @property
    def billing(self) -> "IBillingService":
        """Get the billing service instance."""
        def build() -> "IBillingService":
            from modules.billing.service import BillingService
            return BillingService(self.settings, self.profiles)

        return self._get("billing", build)

    @property
    def agency_repository(self) -> "IAgencyRepository":
        def build() -> "IAgencyRepository":
            from modules.agency.repository import AgencyRepository
            return AgencyRepository(self.service_client)

        return self._get("agency_repository", build)

    @property
    def invitations(self) -> "InvitationService":
        def build() -> "InvitationService":
            from modules.agency.service import InvitationService
            return InvitationService(self.agency_repository)

        return self._get("invitations", build)

    @property
    def feedback(self) -> "IFeedbackRepository":
        def build() -> "IFeedbackRepository":
            from modules.feedback.repository import FeedbackRepository
            return FeedbackRepository(self.service_client)

        return self._get("feedback", build)

    def close(self) -> None:
        """
        Drop every cached service and client.

        Called on application shutdown; the next access rebuilds lazily.
        """
        logger.info("Releasing %d cached services", len(self._services))
        self._services.clear()


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_container(request: Request) -> ServiceContainer:
    """The container of the application serving ``request``."""
    return request.app.state.container


def get_app_settings(request: Request) -> Settings:
    return get_container(request).settings


def get_guard(request: Request) -> "SessionGuard":
    return get_container(request).guard


def get_csrf_service(request: Request) -> "CsrfTokenService":
    return get_container(request).csrf


def get_profile_service(request: Request) -> "ProfileService":
    return get_container(request).profile_service


def get_cv_service(request: Request) -> "CvService":
    return get_container(request).cv


def get_billing_service(request: Request) -> "IBillingService":
    """FastAPI dependency for billing service."""
    return get_container(request).billing


def get_invitation_service(request: Request) -> "InvitationService":
    return get_container(request).invitations


def get_feedback_repository(request: Request) -> "IFeedbackRepository":
    return get_container(request).feedback
