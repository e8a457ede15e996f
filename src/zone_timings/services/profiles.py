"""Profile and role management."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from zone_timings.domain.profiles import Role, UserProfile
from zone_timings.exceptions import PermissionDeniedError

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user id, if present."""

    async def list_profiles(self) -> list[UserProfile]:
        """Return all profiles."""

    async def update_role(self, user_id: UUID, role: Role) -> int:
        """Set a profile's role and return the number of rows affected."""


@dataclass
class ProfileService:
    """Admin operations over user profiles."""

    repository: ProfileRepository

    async def list_profiles(self) -> list[UserProfile]:
        """Return all profiles."""
        return await self.repository.list_profiles()

    async def toggle_role(self, profile_id: UUID, current_role: Role) -> Role:
        """Flip a profile between admin and user and return the new role."""
        new_role = current_role.toggled()
        affected = await self.repository.update_role(profile_id, new_role)
        if affected == 0:
            raise PermissionDeniedError(f"No permission to update profile {profile_id}")
        logger.info("Changed role of %s to %s", profile_id, new_role.value)
        return new_role
