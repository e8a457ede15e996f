"""Supabase Storage adapter for zone photos."""

from dataclasses import dataclass

import httpx
from storage3.utils import StorageException
from supabase import AsyncClient

from zone_timings.exceptions import StoreError
from zone_timings.services.zones import ImageStore


@dataclass
class SupabaseImageStore(ImageStore):
    """Upload photos to a public Supabase Storage bucket."""

    client: AsyncClient
    bucket: str = "images"

    async def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Upload bytes to the bucket."""
        try:
            await self.client.storage.from_(self.bucket).upload(
                path, content, {"content-type": content_type}
            )
        except (StorageException, httpx.HTTPError) as exc:
            raise StoreError(f"Failed to upload {path}: {exc}") from exc

    async def public_url(self, path: str) -> str:
        """Return the public URL of an uploaded object."""
        return await self.client.storage.from_(self.bucket).get_public_url(path)
