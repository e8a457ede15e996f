"""Domain models for user profiles and the signed-in session."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class Role(Enum):
    """Access role stored on a profile."""

    ADMIN = "admin"
    USER = "user"

    def toggled(self) -> "Role":
        """Return the opposite role."""
        return Role.USER if self is Role.ADMIN else Role.ADMIN


@dataclass(frozen=True)
class UserProfile:
    """Profile row keyed by the auth user id."""

    id: UUID
    email: str
    role: Role


@dataclass(frozen=True)
class AuthSession:
    """Minimal view of an auth provider session."""

    user_id: UUID
    email: str
    access_token: str


@dataclass(frozen=True)
class SessionContext:
    """Capabilities of the signed-in user, passed to whatever gates admin actions."""

    user_id: UUID
    email: str
    role: Role
    sign_out: Callable[[], Awaitable[None]]

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
