"""Request bodies for the HTTP API."""

from datetime import date

from pydantic import BaseModel

from zone_timings.domain.profiles import Role


class Credentials(BaseModel):
    email: str
    password: str


class CreateZoneRequest(BaseModel):
    title: str = ""
    description: str = ""
    photo_url: str | None = None
    claimed_date: date | None = None
    claimed_time: str | None = None


class RecordClaimRequest(BaseModel):
    hour: int
    minute: int
    second: int = 0
    period: str


class RoleToggleRequest(BaseModel):
    current_role: Role
