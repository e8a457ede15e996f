"""Authentication flows and the signed-in session context."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from zone_timings.domain.profiles import AuthSession, Role, SessionContext, UserProfile
from zone_timings.exceptions import AuthenticationError, StoreError, ValidationError
from zone_timings.services.profiles import ProfileRepository

logger = logging.getLogger(__name__)

SessionCallback = Callable[[str, AuthSession | None], None]


class AuthGateway(Protocol):
    """Interface for the external auth provider."""

    async def sign_up(self, email: str, password: str) -> None:
        """Register a new account."""

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Sign in and return the new session."""

    async def sign_out(self) -> None:
        """End the current session."""

    async def get_session(self) -> AuthSession | None:
        """Return the current session, if any."""

    def on_session_change(self, callback: SessionCallback) -> Callable[[], None]:
        """Register a session-change callback and return an unsubscribe function."""


@dataclass
class AuthService:
    """Sign-in lifecycle and resolution of the caller's role."""

    gateway: AuthGateway
    profile_repository: ProfileRepository

    async def sign_up(self, email: str, password: str) -> None:
        """Register a new account; the user signs in separately afterwards."""
        _require_credentials(email, password)
        await self.gateway.sign_up(email.strip(), password)
        logger.info("Registered %s", email.strip())

    async def sign_in(self, email: str, password: str) -> SessionContext:
        """Sign in and return the resulting session context."""
        _require_credentials(email, password)
        session = await self.gateway.sign_in_with_password(email.strip(), password)
        return await self._build_context(session)

    async def sign_out(self) -> None:
        """End the current session."""
        await self.gateway.sign_out()

    async def current_context(self) -> SessionContext | None:
        """Return the context for the active session, or None when signed out."""
        session = await self.gateway.get_session()
        if session is None:
            return None
        return await self._build_context(session)

    async def require_context(self) -> SessionContext:
        """Return the active session context or raise."""
        context = await self.current_context()
        if context is None:
            raise AuthenticationError("Not signed in")
        return context

    def watch_session(self, callback: SessionCallback) -> Callable[[], None]:
        """Subscribe to session changes."""
        return self.gateway.on_session_change(callback)

    async def resolve_profile(self, session: AuthSession) -> UserProfile:
        """Fetch the profile for a session, defaulting to a regular user."""
        try:
            profile = await self.profile_repository.get_profile(session.user_id)
        except StoreError:
            logger.exception("Failed to fetch profile for %s", session.user_id)
            profile = None
        if profile is None:
            return UserProfile(id=session.user_id, email=session.email, role=Role.USER)
        return profile

    async def _build_context(self, session: AuthSession) -> SessionContext:
        profile = await self.resolve_profile(session)
        return SessionContext(
            user_id=session.user_id,
            email=profile.email or session.email,
            role=profile.role,
            sign_out=self.sign_out,
        )


def _require_credentials(email: str, password: str) -> None:
    if not email or not email.strip():
        raise ValidationError("Email is required")
    if not password:
        raise ValidationError("Password is required")
