"""Sign-up, sign-in and session endpoints."""

from fastapi import APIRouter, Depends, Request, status

from zone_timings.api.dependencies import (
    get_container,
    require_session,
    serialize_context,
)
from zone_timings.api.schemas import Credentials
from zone_timings.domain.profiles import SessionContext

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-up", status_code=status.HTTP_201_CREATED)
async def sign_up(credentials: Credentials, request: Request) -> dict[str, str]:
    """Register a new account."""
    container = get_container(request)
    await container.auth_service.sign_up(credentials.email, credentials.password)
    return {"status": "registered"}


@router.post("/sign-in")
async def sign_in(credentials: Credentials, request: Request) -> dict[str, object]:
    """Sign in with email and password."""
    container = get_container(request)
    context = await container.auth_service.sign_in(
        credentials.email, credentials.password
    )
    return {"session": serialize_context(context)}


@router.post("/sign-out")
async def sign_out(
    context: SessionContext = Depends(require_session),
) -> dict[str, str]:
    """End the current session."""
    await context.sign_out()
    return {"status": "signed_out"}


@router.get("/session")
async def current_session(request: Request) -> dict[str, object]:
    """Return the signed-in user, or null."""
    container = get_container(request)
    context = await container.auth_service.current_context()
    return {"session": serialize_context(context) if context else None}
