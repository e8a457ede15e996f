"""Request dependencies shared by the routers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, status

from zone_timings.domain.profiles import SessionContext  # noqa: TC001

if TYPE_CHECKING:
    from zone_timings.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the application container."""
    return request.app.state.container


async def require_session(request: Request) -> SessionContext:
    """Return the signed-in session context or reject the request."""
    container = get_container(request)
    context = await container.auth_service.current_context()
    if context is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return context


async def require_admin(
    context: SessionContext = Depends(require_session),
) -> SessionContext:
    """Ensure the signed-in user holds the admin role."""
    if not context.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return context


def serialize_context(context: SessionContext) -> dict[str, object]:
    return {
        "user_id": str(context.user_id),
        "email": context.email,
        "role": context.role.value,
        "is_admin": context.is_admin,
    }
