"""Shared helpers for Supabase adapters."""

from datetime import UTC, datetime
from typing import Any

import httpx
from postgrest.exceptions import APIError

from zone_timings.exceptions import StoreError


async def execute(query: Any) -> list[dict[str, Any]]:
    """Run a PostgREST query, translating failures into StoreError."""
    try:
        response = await query.execute()
    except (APIError, httpx.HTTPError) as exc:
        raise StoreError(str(exc)) from exc
    return response.data or []


def parse_timestamp(raw: object) -> datetime:
    """Parse an ISO timestamp column, reading offset-less values as UTC."""
    if not isinstance(raw, str) or not raw:
        raise StoreError(f"Invalid timestamp value: {raw!r}")
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise StoreError(f"Invalid timestamp value: {raw!r}") from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
