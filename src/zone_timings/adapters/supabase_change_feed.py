"""Realtime subscription to zone table changes."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from supabase import AsyncClient

from zone_timings.services.zones import ChangeFeed

logger = logging.getLogger(__name__)


@dataclass
class SupabaseZoneChangeFeed(ChangeFeed):
    """Deliver every insert, update and delete on the zone table."""

    client: AsyncClient
    table: str = "zones"
    channel_name: str = "zones_changes"
    _channel: Any = field(default=None, init=False, repr=False)

    async def subscribe(self, callback: Callable[[dict[str, object]], object]) -> None:
        """Subscribe to postgres changes on the zone table."""
        if self._channel is not None:
            return
        channel = self.client.channel(self.channel_name)
        channel.on_postgres_changes(
            "*", callback=callback, table=self.table, schema="public"
        )
        await channel.subscribe()
        self._channel = channel
        logger.info("Subscribed to changes on %s", self.table)

    async def unsubscribe(self) -> None:
        """Remove the realtime channel."""
        if self._channel is None:
            return
        await self.client.remove_channel(self._channel)
        self._channel = None
