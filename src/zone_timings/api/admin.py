"""Admin-only profile management endpoints."""

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from zone_timings.api.dependencies import get_container, require_admin
from zone_timings.api.schemas import RoleToggleRequest
from zone_timings.domain.profiles import UserProfile

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/profiles", dependencies=[Depends(require_admin)])
async def list_profiles(request: Request) -> dict[str, object]:
    """Return every user profile."""
    container = get_container(request)
    profiles = await container.profile_service.list_profiles()
    return {"profiles": [_serialize_profile(profile) for profile in profiles]}


@router.post(
    "/profiles/{profile_id}/toggle-role", dependencies=[Depends(require_admin)]
)
async def toggle_role(
    profile_id: UUID, body: RoleToggleRequest, request: Request
) -> dict[str, str]:
    """Switch a profile between admin and user."""
    container = get_container(request)
    new_role = await container.profile_service.toggle_role(
        profile_id, body.current_role
    )
    return {"id": str(profile_id), "role": new_role.value}


def _serialize_profile(profile: UserProfile) -> dict[str, str]:
    return {"id": str(profile.id), "email": profile.email, "role": profile.role.value}
