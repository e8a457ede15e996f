"""Zone directory endpoints."""

import asyncio
import json
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from zone_timings.api.dependencies import get_container, require_admin, require_session
from zone_timings.api.schemas import CreateZoneRequest, RecordClaimRequest
from zone_timings.domain.claims import (
    compose_claim_instant,
    compose_claim_today,
    parse_time_of_day,
)
from zone_timings.domain.cooldown import ZoneStatus
from zone_timings.domain.zones import ZoneRecord
from zone_timings.services.countdown import CountdownTicker
from zone_timings.services.zones import ZoneDirectory, group_by_title

router = APIRouter(prefix="/zones", tags=["zones"])


@router.get("", dependencies=[Depends(require_session)])
async def list_zones(request: Request, q: str = "") -> dict[str, object]:
    """Return zones matching the query, grouped by title."""
    directory = get_container(request).zone_directory
    query = q.strip()
    now = datetime.now(tz=UTC)
    groups = group_by_title(directory.filter(query))
    return {
        "query": query,
        "count": sum(len(records) for records in groups.values()),
        "groups": [
            {
                "title": title,
                "zones": [_serialize_zone(record, now) for record in records],
            }
            for title, records in groups.items()
        ],
    }


@router.post("/reload", dependencies=[Depends(require_session)])
async def reload_zones(request: Request) -> dict[str, object]:
    """Re-fetch every zone from the store."""
    directory = get_container(request).zone_directory
    reloaded = await directory.reload()
    return {"reloaded": reloaded, "count": len(directory.records)}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_zone(body: CreateZoneRequest, request: Request) -> dict[str, object]:
    """Create a zone from a date and time of day."""
    container = get_container(request)
    claimed_at = None
    if body.claimed_time:
        day = body.claimed_date or datetime.now(tz=container.timezone).date()
        claimed_at = compose_claim_instant(
            day, parse_time_of_day(body.claimed_time), container.timezone
        )
    record = await container.zone_directory.create_zone(
        title=body.title,
        description=body.description,
        claimed_at=claimed_at,
        photo_url=body.photo_url,
    )
    return {"zone": _serialize_zone(record, datetime.now(tz=UTC))}


@router.post(
    "/photos",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def upload_photo(request: Request, filename: str) -> dict[str, str]:
    """Upload the raw request body as a zone photo."""
    directory = get_container(request).zone_directory
    content = await request.body()
    content_type = request.headers.get("content-type", "application/octet-stream")
    photo_url = await directory.upload_photo(filename, content, content_type)
    return {"photo_url": photo_url}


@router.get("/{zone_id}", dependencies=[Depends(require_session)])
async def get_zone(zone_id: UUID, request: Request) -> dict[str, object]:
    """Return one loaded zone with its cooldown status."""
    record = _get_loaded_zone(request, zone_id)
    return {"zone": _serialize_zone(record, datetime.now(tz=UTC))}


@router.post("/{zone_id}/claims", dependencies=[Depends(require_admin)])
async def record_claim(
    zone_id: UUID, body: RecordClaimRequest, request: Request
) -> dict[str, object]:
    """Record a claim today at the given 12-hour clock time."""
    container = get_container(request)
    claimed_at = compose_claim_today(
        hour=body.hour,
        minute=body.minute,
        second=body.second,
        period=body.period,
        tz=container.timezone,
    )
    record = await container.zone_directory.record_claim(zone_id, claimed_at)
    return {"zone": _serialize_zone(record, datetime.now(tz=UTC))}


@router.delete("/{zone_id}", dependencies=[Depends(require_admin)])
async def delete_zone(zone_id: UUID, request: Request) -> dict[str, str]:
    """Delete a zone."""
    await get_container(request).zone_directory.delete_zone(zone_id)
    return {"status": "deleted"}


@router.get("/{zone_id}/countdown", dependencies=[Depends(require_session)])
async def zone_countdown(zone_id: UUID, request: Request) -> StreamingResponse:
    """Stream the remaining cooldown once per interval until it expires."""
    container = get_container(request)
    record = _get_loaded_zone(request, zone_id)
    queue: asyncio.Queue[ZoneStatus] = asyncio.Queue()
    ticker = CountdownTicker(
        last_claimed_at=record.last_claimed_at,
        on_tick=queue.put_nowait,
        interval=container.settings.countdown_interval_seconds,
    )

    async def events() -> AsyncIterator[str]:
        ticker.start()
        try:
            while True:
                zone_state = await queue.get()
                yield f"data: {json.dumps(_serialize_status(zone_state))}\n\n"
                if zone_state.is_expired:
                    break
        finally:
            ticker.stop()

    return StreamingResponse(events(), media_type="text/event-stream")


def _get_loaded_zone(request: Request, zone_id: UUID) -> ZoneRecord:
    record = get_container(request).zone_directory.get(zone_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return record


def _serialize_status(zone_state: ZoneStatus) -> dict[str, object]:
    return {
        "is_expired": zone_state.is_expired,
        "state": "AVAILABLE" if zone_state.is_expired else "LOCKED",
        "expiration_time": zone_state.expiration_time.isoformat(),
        "seconds_left": zone_state.seconds_left,
        "remaining": zone_state.remaining_display,
    }


def _serialize_zone(record: ZoneRecord, now: datetime) -> dict[str, object]:
    zone_state = ZoneDirectory.status_for(record, now)
    return {
        "id": str(record.id),
        "title": record.title,
        "description": record.description,
        "photo_url": record.photo_url,
        "last_claimed_at": record.last_claimed_at.isoformat(),
        "created_at": record.created_at.isoformat(),
        "status": _serialize_status(zone_state),
    }
