"""Gallery operations over the single site document.

Images live in an ordered array inside one document. Appends are an upserting
push; updates and removals are single-element operations that return the
entry as it was before the write.

Backing assets are deleted only after the database write has committed. A
failed delete leaves an orphaned asset and is logged at error level.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from skb_backend.adapters.cloudinary_client import AssetStore
from skb_backend.domain.errors import (
    AssetDeleteFailed,
    DocumentNotFound,
    ImageNotFound,
    PersistenceError,
)
from skb_backend.domain.gallery import ImageEntry, UploadedAsset

logger = logging.getLogger(__name__)


class SiteRepository(Protocol):
    """Persistence interface for the image array of the site document."""

    async def list_images(self) -> list[ImageEntry] | None:
        """Return the stored images, or None when the document or field is absent."""

    async def push_image(self, entry: ImageEntry) -> bool:
        """Append an entry, creating the document if needed; report whether it took."""

    async def update_image(  # noqa: PLR0913
        self,
        image_id: str,
        image_alt: str,
        image_url: str,
        cloudinary_id: str | None,
        updated_at: datetime,
    ) -> ImageEntry | None:
        """Update one entry in place and return it as it was before the write."""

    async def pull_image(self, image_id: str) -> ImageEntry | None:
        """Remove one entry and return it, or None when no entry matched."""


def _new_image_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class GalleryService:
    """Keeps the image array and the asset store in step."""

    repository: SiteRepository
    asset_store: AssetStore
    id_factory: Callable[[], str] = field(default=_new_image_id)
    clock: Callable[[], datetime] = field(default=_utcnow)

    async def upload(self, content: bytes, filename: str | None) -> UploadedAsset:
        """Store image bytes remotely; AssetUploadFailed propagates untouched."""
        return await self.asset_store.upload(content, filename=filename)

    async def list_images(self) -> list[ImageEntry]:
        """Return images in insertion order, empty before the first append."""
        return await self.repository.list_images() or []

    async def register(
        self, image_alt: str, image_url: str, cloudinary_id: str | None
    ) -> ImageEntry:
        """Append a new entry for an uploaded asset."""
        now = self.clock()
        entry = ImageEntry(
            image_id=self.id_factory(),
            image_alt=image_alt,
            image_url=image_url,
            cloudinary_id=cloudinary_id,
            created_at=now,
            updated_at=now,
        )
        if not await self.repository.push_image(entry):
            raise PersistenceError("Image append reported no modification")
        logger.info("Registered image", extra={"image_id": entry.image_id})
        return entry

    async def update(
        self,
        image_id: str,
        image_alt: str,
        image_url: str,
        cloudinary_id: str | None,
    ) -> ImageEntry:
        """Rewrite one entry and retire its previous asset if it was replaced."""
        updated_at = self.clock()
        previous = await self.repository.update_image(
            image_id,
            image_alt=image_alt,
            image_url=image_url,
            cloudinary_id=cloudinary_id,
            updated_at=updated_at,
        )
        if previous is None:
            raise await self._missing_error(image_id)
        if previous.cloudinary_id and previous.cloudinary_id != cloudinary_id:
            await self._discard_asset(previous.cloudinary_id, image_id)
        return replace(
            previous,
            image_alt=image_alt,
            image_url=image_url,
            cloudinary_id=cloudinary_id,
            updated_at=updated_at,
        )

    async def remove(self, image_id: str) -> ImageEntry:
        """Drop one entry, then delete its backing asset."""
        removed = await self.repository.pull_image(image_id)
        if removed is None:
            raise await self._missing_error(image_id)
        if removed.cloudinary_id:
            await self._discard_asset(removed.cloudinary_id, image_id)
        return removed

    async def _missing_error(self, image_id: str) -> Exception:
        if await self.repository.list_images() is None:
            return DocumentNotFound("Site document has no images")
        return ImageNotFound(image_id)

    async def _discard_asset(self, asset_id: str, image_id: str) -> None:
        try:
            await self.asset_store.delete(asset_id)
        except AssetDeleteFailed:
            logger.exception(
                "Orphaned asset left in the asset store",
                extra={"asset_id": asset_id, "image_id": image_id},
            )
