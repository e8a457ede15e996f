"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from supabase import acreate_client

from zone_timings.adapters.supabase_auth_gateway import SupabaseAuthGateway
from zone_timings.adapters.supabase_change_feed import SupabaseZoneChangeFeed
from zone_timings.adapters.supabase_image_store import SupabaseImageStore
from zone_timings.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from zone_timings.adapters.supabase_zone_repository import SupabaseZoneRepository
from zone_timings.config import Settings
from zone_timings.domain.profiles import AuthSession
from zone_timings.services.auth import AuthService
from zone_timings.services.profiles import ProfileService
from zone_timings.services.zones import ChangeFeed, ZoneDirectory

logger = logging.getLogger(__name__)

RELOAD_EVENTS = {"SIGNED_IN", "SIGNED_OUT"}


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    timezone: ZoneInfo
    zone_directory: ZoneDirectory
    auth_service: AuthService
    profile_service: ProfileService
    start: Callable[[], Awaitable[None]]
    close_resources: Callable[[], Awaitable[None]]


def wire_lifecycle(
    zone_directory: ZoneDirectory,
    auth_service: AuthService,
    change_feed: ChangeFeed,
) -> tuple[Callable[[], Awaitable[None]], Callable[[], Awaitable[None]]]:
    """Build start and close hooks that keep the directory in sync."""
    unsubscribers: list[Callable[[], None]] = []

    def on_session_change(event: str, session: AuthSession | None) -> None:
        logger.info("Auth session changed: %s", event)
        if event in RELOAD_EVENTS:
            zone_directory.on_external_change({"event": event})

    async def start() -> None:
        try:
            await change_feed.subscribe(zone_directory.on_external_change)
        except Exception:
            logger.exception("Failed to subscribe to zone changes")
        unsubscribers.append(auth_service.watch_session(on_session_change))
        await zone_directory.reload()

    async def close_resources() -> None:
        while unsubscribers:
            unsubscribers.pop()()
        await change_feed.unsubscribe()

    return start, close_resources


async def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = await acreate_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    zone_repository = SupabaseZoneRepository(
        supabase_client, table=resolved_settings.zones_table
    )
    profile_repository = SupabaseProfileRepository(
        supabase_client, table=resolved_settings.profiles_table
    )
    image_store = SupabaseImageStore(
        supabase_client, bucket=resolved_settings.images_bucket
    )
    change_feed = SupabaseZoneChangeFeed(
        supabase_client, table=resolved_settings.zones_table
    )
    zone_directory = ZoneDirectory(
        repository=zone_repository,
        image_store=image_store,
        placeholder_photo_url=resolved_settings.placeholder_photo_url,
    )
    auth_service = AuthService(
        gateway=SupabaseAuthGateway(supabase_client),
        profile_repository=profile_repository,
    )
    profile_service = ProfileService(profile_repository)
    start, close_resources = wire_lifecycle(zone_directory, auth_service, change_feed)

    return AppContainer(
        settings=resolved_settings,
        timezone=ZoneInfo(resolved_settings.timezone),
        zone_directory=zone_directory,
        auth_service=auth_service,
        profile_service=profile_service,
        start=start,
        close_resources=close_resources,
    )
