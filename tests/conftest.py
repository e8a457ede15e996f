"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

import pytest

from zone_timings.config import Settings
from zone_timings.containers import AppContainer, wire_lifecycle
from zone_timings.domain.profiles import AuthSession, Role, UserProfile
from zone_timings.domain.zones import NewZone, ZoneRecord
from zone_timings.exceptions import AuthenticationError, StoreError
from zone_timings.services.auth import AuthGateway, AuthService, SessionCallback
from zone_timings.services.profiles import ProfileRepository, ProfileService
from zone_timings.services.zones import ImageStore, ZoneDirectory, ZoneRepository

PLACEHOLDER_URL = "https://placeholder.test/zone.png"


def make_zone(
    title: str = "Davis",
    description: str = "Train tracks",
    last_claimed_at: datetime | None = None,
    created_at: datetime | None = None,
) -> ZoneRecord:
    now = datetime.now(tz=UTC)
    return ZoneRecord(
        id=uuid4(),
        title=title,
        description=description,
        photo_url=PLACEHOLDER_URL,
        last_claimed_at=last_claimed_at or now,
        created_at=created_at or now,
    )


@dataclass
class InMemoryZoneRepository(ZoneRepository):
    """In-memory zone repository for tests."""

    zones: dict[UUID, ZoneRecord] = field(default_factory=dict)
    fail: bool = False
    read_only: bool = False
    calls: list[str] = field(default_factory=list)

    def add(self, zone: ZoneRecord) -> ZoneRecord:
        self.zones[zone.id] = zone
        return zone

    def _check(self, action: str) -> None:
        self.calls.append(action)
        if self.fail:
            raise StoreError("store unavailable")

    async def list_zones(self) -> list[ZoneRecord]:
        self._check("list")
        return sorted(self.zones.values(), key=lambda zone: zone.created_at)

    async def insert_zone(self, zone: NewZone) -> ZoneRecord:
        self._check("insert")
        created = ZoneRecord(
            id=uuid4(),
            title=zone.title,
            description=zone.description,
            photo_url=zone.photo_url,
            last_claimed_at=zone.last_claimed_at,
            created_at=datetime.now(tz=UTC),
        )
        return self.add(created)

    async def update_last_claimed(
        self, zone_id: UUID, claimed_at: datetime
    ) -> ZoneRecord | None:
        self._check("update")
        current = self.zones.get(zone_id)
        if current is None or self.read_only:
            return None
        updated = ZoneRecord(
            id=current.id,
            title=current.title,
            description=current.description,
            photo_url=current.photo_url,
            last_claimed_at=claimed_at,
            created_at=current.created_at,
        )
        return self.add(updated)

    async def delete_zone(self, zone_id: UUID) -> int:
        self._check("delete")
        if self.read_only or zone_id not in self.zones:
            return 0
        del self.zones[zone_id]
        return 1


@dataclass
class InMemoryImageStore(ImageStore):
    """In-memory image store for tests."""

    objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)

    async def upload(self, path: str, content: bytes, content_type: str) -> None:
        self.objects[path] = (content, content_type)

    async def public_url(self, path: str) -> str:
        return f"https://storage.test/images/{path}"


@dataclass
class FakeChangeFeed:
    """Change feed that delivers notifications on demand."""

    callback: Callable[[dict[str, object]], object] | None = None
    unsubscribed: bool = False
    fail: bool = False

    async def subscribe(self, callback: Callable[[dict[str, object]], object]) -> None:
        if self.fail:
            raise ConnectionError("realtime unavailable")
        self.callback = callback

    async def unsubscribe(self) -> None:
        self.callback = None
        self.unsubscribed = True

    def emit(self, payload: dict[str, object]) -> object:
        assert self.callback is not None
        return self.callback(payload)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)
    fail: bool = False
    read_only: bool = False

    def add(self, profile: UserProfile) -> UserProfile:
        self.profiles[profile.id] = profile
        return profile

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        if self.fail:
            raise StoreError("store unavailable")
        return self.profiles.get(user_id)

    async def list_profiles(self) -> list[UserProfile]:
        return list(self.profiles.values())

    async def update_role(self, user_id: UUID, role: Role) -> int:
        current = self.profiles.get(user_id)
        if current is None or self.read_only:
            return 0
        self.add(UserProfile(id=current.id, email=current.email, role=role))
        return 1


@dataclass
class FakeAuthGateway(AuthGateway):
    """Auth gateway holding accounts and one session in memory."""

    accounts: dict[str, tuple[UUID, str]] = field(default_factory=dict)
    session: AuthSession | None = None
    callbacks: list[SessionCallback] = field(default_factory=list)

    def _notify(self, event: str) -> None:
        for callback in list(self.callbacks):
            callback(event, self.session)

    async def sign_up(self, email: str, password: str) -> None:
        if email in self.accounts:
            raise AuthenticationError("User already registered")
        self.accounts[email] = (uuid4(), password)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise AuthenticationError("Invalid login credentials")
        self.session = AuthSession(
            user_id=account[0], email=email, access_token="access-token"
        )
        self._notify("SIGNED_IN")
        return self.session

    async def sign_out(self) -> None:
        self.session = None
        self._notify("SIGNED_OUT")

    async def get_session(self) -> AuthSession | None:
        return self.session

    def on_session_change(self, callback: SessionCallback) -> Callable[[], None]:
        self.callbacks.append(callback)
        return lambda: self.callbacks.remove(callback)


def sign_in_as(
    gateway: FakeAuthGateway,
    profiles: InMemoryProfileRepository,
    role: Role,
    email: str = "someone@example.com",
) -> UserProfile:
    """Put the gateway into a signed-in state for a profile with a role."""
    profile = profiles.add(UserProfile(id=uuid4(), email=email, role=role))
    gateway.session = AuthSession(
        user_id=profile.id, email=email, access_token="access-token"
    )
    return profile


def hours_ago(hours: float) -> datetime:
    return datetime.now(tz=UTC) - timedelta(hours=hours)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="test.anon.key",
        placeholder_photo_url=PLACEHOLDER_URL,
        countdown_interval_seconds=0.01,
    )


@pytest.fixture
def zone_repository() -> InMemoryZoneRepository:
    return InMemoryZoneRepository()


@pytest.fixture
def image_store() -> InMemoryImageStore:
    return InMemoryImageStore()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def auth_gateway() -> FakeAuthGateway:
    return FakeAuthGateway()


@pytest.fixture
def change_feed() -> FakeChangeFeed:
    return FakeChangeFeed()


@pytest.fixture
def directory(
    zone_repository: InMemoryZoneRepository, image_store: InMemoryImageStore
) -> ZoneDirectory:
    return ZoneDirectory(
        repository=zone_repository,
        image_store=image_store,
        placeholder_photo_url=PLACEHOLDER_URL,
    )


@pytest.fixture
def container(
    settings: Settings,
    directory: ZoneDirectory,
    profile_repository: InMemoryProfileRepository,
    auth_gateway: FakeAuthGateway,
    change_feed: FakeChangeFeed,
) -> AppContainer:
    auth_service = AuthService(
        gateway=auth_gateway, profile_repository=profile_repository
    )
    start, close_resources = wire_lifecycle(directory, auth_service, change_feed)
    return AppContainer(
        settings=settings,
        timezone=ZoneInfo(settings.timezone),
        zone_directory=directory,
        auth_service=auth_service,
        profile_service=ProfileService(profile_repository),
        start=start,
        close_resources=close_resources,
    )
