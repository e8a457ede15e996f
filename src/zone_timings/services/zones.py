"""Zone directory view-model."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import PurePosixPath
from typing import Protocol
from uuid import UUID, uuid4

from zone_timings.domain.cooldown import ZoneStatus, zone_status
from zone_timings.domain.zones import NewZone, ZoneRecord
from zone_timings.exceptions import PermissionDeniedError, StoreError, ValidationError

logger = logging.getLogger(__name__)


class ZoneRepository(Protocol):
    """Persistence interface for zone rows."""

    async def list_zones(self) -> list[ZoneRecord]:
        """Return every zone ordered by creation time, oldest first."""

    async def insert_zone(self, zone: NewZone) -> ZoneRecord:
        """Insert a zone and return the stored row."""

    async def update_last_claimed(
        self, zone_id: UUID, claimed_at: datetime
    ) -> ZoneRecord | None:
        """Set the claim instant of one zone; None when no row was affected."""

    async def delete_zone(self, zone_id: UUID) -> int:
        """Delete a zone and return the number of rows affected."""


class ImageStore(Protocol):
    """Interface for zone photo storage."""

    async def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Upload bytes to a path."""

    async def public_url(self, path: str) -> str:
        """Return the public URL for a stored path."""


class ChangeFeed(Protocol):
    """Interface for zone table change notifications."""

    async def subscribe(self, callback: Callable[[dict[str, object]], object]) -> None:
        """Invoke the callback on any insert, update or delete."""

    async def unsubscribe(self) -> None:
        """Stop delivering notifications."""


def filter_zones(records: list[ZoneRecord], query: str) -> list[ZoneRecord]:
    """Return records whose title or description contains the query."""
    if not query:
        return list(records)
    needle = query.lower()
    return [
        record
        for record in records
        if needle in record.title.lower() or needle in record.description.lower()
    ]


def group_by_title(records: list[ZoneRecord]) -> dict[str, list[ZoneRecord]]:
    """Group records by uppercased title, keeping first-seen order."""
    groups: dict[str, list[ZoneRecord]] = {}
    for record in records:
        groups.setdefault(record.title.upper(), []).append(record)
    return groups


@dataclass
class ZoneDirectory:
    """In-memory zone list kept in sync with the store by full reloads."""

    repository: ZoneRepository
    image_store: ImageStore
    placeholder_photo_url: str
    records: list[ZoneRecord] = field(default_factory=list)
    query: str = ""
    _pending: set[asyncio.Task] = field(default_factory=set, init=False, repr=False)

    async def reload(self) -> bool:
        """Replace the collection with the store's current zones.

        On failure the previous collection is kept and False is returned.
        """
        try:
            records = await self.repository.list_zones()
        except StoreError:
            logger.exception("Failed to reload zones")
            return False
        self.records = list(records)
        logger.info("Loaded %d zones", len(self.records))
        return True

    def on_external_change(
        self, payload: dict[str, object] | None = None
    ) -> asyncio.Task:
        """Schedule a full reload for any change notification."""
        logger.debug("Zone change received: %s", payload)
        task = asyncio.get_running_loop().create_task(self.reload())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def set_query(self, query: str) -> None:
        """Update the free-text search query."""
        self.query = query.strip()

    def filter(self, query: str) -> list[ZoneRecord]:
        """Return loaded zones matching the query."""
        return filter_zones(self.records, query)

    def visible(self) -> list[ZoneRecord]:
        """Return zones matching the current query."""
        return self.filter(self.query)

    def grouped(self) -> dict[str, list[ZoneRecord]]:
        """Return visible zones grouped by title."""
        return group_by_title(self.visible())

    def get(self, zone_id: UUID) -> ZoneRecord | None:
        """Return a loaded zone by id, if present."""
        for record in self.records:
            if record.id == zone_id:
                return record
        return None

    @staticmethod
    def status_for(record: ZoneRecord, now: datetime | None = None) -> ZoneStatus:
        """Return the cooldown status of a zone."""
        return zone_status(record.last_claimed_at, now or datetime.now(tz=UTC))

    async def create_zone(
        self,
        title: str,
        description: str,
        claimed_at: datetime | None,
        photo_url: str | None = None,
    ) -> ZoneRecord:
        """Validate and insert a new zone.

        The local collection is refreshed by the change notification, not here.
        """
        if not title or not title.strip():
            raise ValidationError("Title is required")
        if not description or not description.strip():
            raise ValidationError("Description is required")
        if claimed_at is None:
            raise ValidationError("Claim time is required")
        zone = NewZone(
            title=title.strip(),
            description=description.strip(),
            photo_url=photo_url or self.placeholder_photo_url,
            last_claimed_at=claimed_at,
        )
        created = await self.repository.insert_zone(zone)
        logger.info("Created zone %s (%s)", created.id, created.title)
        return created

    async def record_claim(self, zone_id: UUID, claimed_at: datetime) -> ZoneRecord:
        """Overwrite the claim instant of one zone."""
        updated = await self.repository.update_last_claimed(zone_id, claimed_at)
        if updated is None:
            raise PermissionDeniedError(f"No permission to update zone {zone_id}")
        logger.info("Recorded claim for zone %s at %s", zone_id, claimed_at)
        return updated

    async def delete_zone(self, zone_id: UUID) -> None:
        """Delete a zone, treating zero affected rows as a permission failure."""
        affected = await self.repository.delete_zone(zone_id)
        if affected == 0:
            raise PermissionDeniedError(f"No permission to delete zone {zone_id}")
        logger.info("Deleted zone %s", zone_id)

    async def upload_photo(
        self, filename: str, content: bytes, content_type: str
    ) -> str:
        """Store a zone photo under a random name and return its public URL."""
        if not content:
            raise ValidationError("Photo is empty")
        suffix = PurePosixPath(filename).suffix.lower()
        path = f"{uuid4()}{suffix}"
        await self.image_store.upload(path, content, content_type)
        return await self.image_store.public_url(path)
