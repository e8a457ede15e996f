"""Supabase Auth adapter."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from supabase import AsyncClient, AuthError

from zone_timings.domain.profiles import AuthSession
from zone_timings.exceptions import AuthenticationError
from zone_timings.services.auth import AuthGateway, SessionCallback


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Email and password auth backed by Supabase."""

    client: AsyncClient

    async def sign_up(self, email: str, password: str) -> None:
        """Register a new account."""
        try:
            await self.client.auth.sign_up({"email": email, "password": password})
        except AuthError as exc:
            raise AuthenticationError(str(exc)) from exc

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        try:
            response = await self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            raise AuthenticationError(str(exc)) from exc
        if response.session is None:
            raise AuthenticationError("Sign-in did not return a session")
        return _to_session(response.session)

    async def sign_out(self) -> None:
        """Sign out of the current session."""
        await self.client.auth.sign_out()

    async def get_session(self) -> AuthSession | None:
        """Return the stored session, if any."""
        session = await self.client.auth.get_session()
        if session is None:
            return None
        return _to_session(session)

    def on_session_change(self, callback: SessionCallback) -> Callable[[], None]:
        """Forward auth state changes to the callback."""

        def _forward(event: Any, session: Any) -> None:
            callback(str(event), _to_session(session) if session else None)

        subscription = self.client.auth.on_auth_state_change(_forward)
        return subscription.unsubscribe


def _to_session(session: Any) -> AuthSession:
    return AuthSession(
        user_id=UUID(str(session.user.id)),
        email=session.user.email or "",
        access_token=session.access_token,
    )
