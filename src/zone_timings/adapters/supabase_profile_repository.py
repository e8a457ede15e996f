"""Supabase-backed profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AsyncClient

from zone_timings.adapters.supabase_support import execute
from zone_timings.domain.profiles import Role, UserProfile
from zone_timings.exceptions import StoreError
from zone_timings.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: AsyncClient
    table: str = "profiles"

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user id, if present."""
        rows = await execute(
            self.client.table(self.table)
            .select("id, email, role")
            .eq("id", str(user_id))
            .limit(1)
        )
        if rows:
            return _parse_row(rows[0])
        return None

    async def list_profiles(self) -> list[UserProfile]:
        """Return all profiles."""
        rows = await execute(self.client.table(self.table).select("id, email, role"))
        return [_parse_row(row) for row in rows]

    async def update_role(self, user_id: UUID, role: Role) -> int:
        """Update a profile role."""
        rows = await execute(
            self.client.table(self.table)
            .update({"role": role.value})
            .eq("id", str(user_id))
        )
        return len(rows)


def _parse_row(row: dict[str, object]) -> UserProfile:
    raw_role = row.get("role")
    role = Role.ADMIN if raw_role == Role.ADMIN.value else Role.USER
    try:
        profile_id = UUID(str(row["id"]))
    except (KeyError, ValueError) as exc:
        raise StoreError(f"Invalid profile row: {row!r}") from exc
    return UserProfile(
        id=profile_id,
        email=str(row.get("email") or ""),
        role=role,
    )
