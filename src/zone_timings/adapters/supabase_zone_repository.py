"""Supabase-backed zone repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import AsyncClient

from zone_timings.adapters.supabase_support import execute, parse_timestamp
from zone_timings.domain.zones import NewZone, ZoneRecord
from zone_timings.exceptions import StoreError
from zone_timings.services.zones import ZoneRepository


@dataclass
class SupabaseZoneRepository(ZoneRepository):
    """Supabase implementation for zone persistence."""

    client: AsyncClient
    table: str = "zones"

    async def list_zones(self) -> list[ZoneRecord]:
        """Return all zones, oldest first."""
        rows = await execute(
            self.client.table(self.table).select("*").order("created_at", desc=False)
        )
        return [_parse_row(row) for row in rows]

    async def insert_zone(self, zone: NewZone) -> ZoneRecord:
        """Insert a zone row and return it."""
        rows = await execute(
            self.client.table(self.table).insert(
                {
                    "title": zone.title,
                    "description": zone.description,
                    "photo_url": zone.photo_url,
                    "last_claimed_at": zone.last_claimed_at.isoformat(),
                }
            )
        )
        if not rows:
            raise StoreError("Failed to create zone in Supabase")
        return _parse_row(rows[0])

    async def update_last_claimed(
        self, zone_id: UUID, claimed_at: datetime
    ) -> ZoneRecord | None:
        """Update the claim instant of a zone."""
        rows = await execute(
            self.client.table(self.table)
            .update({"last_claimed_at": claimed_at.isoformat()})
            .eq("id", str(zone_id))
        )
        if not rows:
            return None
        return _parse_row(rows[0])

    async def delete_zone(self, zone_id: UUID) -> int:
        """Delete a zone row and return how many rows were removed."""
        rows = await execute(
            self.client.table(self.table).delete().eq("id", str(zone_id))
        )
        return len(rows)


def _parse_row(row: dict[str, object]) -> ZoneRecord:
    try:
        zone_id = UUID(str(row["id"]))
    except (KeyError, ValueError) as exc:
        raise StoreError(f"Invalid zone row: {row!r}") from exc
    return ZoneRecord(
        id=zone_id,
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        photo_url=str(row.get("photo_url") or ""),
        last_claimed_at=parse_timestamp(row.get("last_claimed_at")),
        created_at=parse_timestamp(row.get("created_at")),
    )
