"""Domain models for zones."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class ZoneRecord:
    """A map zone and the instant it was last claimed."""

    id: UUID
    title: str
    description: str
    photo_url: str
    last_claimed_at: datetime
    created_at: datetime


@dataclass(frozen=True)
class NewZone:
    """Validated input for creating a zone."""

    title: str
    description: str
    photo_url: str
    last_claimed_at: datetime
