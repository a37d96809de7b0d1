"""MongoDB repository for the single site document."""

from dataclasses import dataclass
from datetime import UTC, datetime

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from skb_backend.domain.gallery import ImageEntry, PesertaPaket
from skb_backend.services.gallery import SiteRepository
from skb_backend.services.statistics import StatisticsRepository


@dataclass
class MongoSiteRepository(SiteRepository, StatisticsRepository):
    """Motor implementation over the collection holding the site document."""

    collection: AsyncIOMotorCollection

    async def list_images(self) -> list[ImageEntry] | None:
        """Return the image array, or None when it does not exist yet."""
        document = await self.collection.find_one(
            {}, projection={"images": 1, "_id": 0}
        )
        if not document or document.get("images") is None:
            return None
        return [_parse_image(row) for row in document["images"]]

    async def push_image(self, entry: ImageEntry) -> bool:
        """Append an entry with an upserting $push."""
        result = await self.collection.update_one(
            {}, {"$push": {"images": _serialize_image(entry)}}, upsert=True
        )
        return result.modified_count > 0 or result.upserted_id is not None

    async def update_image(  # noqa: PLR0913
        self,
        image_id: str,
        image_alt: str,
        image_url: str,
        cloudinary_id: str | None,
        updated_at: datetime,
    ) -> ImageEntry | None:
        """Set fields on the matching array element and return its pre-image."""
        document = await self.collection.find_one_and_update(
            {"images.imageId": image_id},
            {
                "$set": {
                    "images.$.imageAlt": image_alt,
                    "images.$.imageUrl": image_url,
                    "images.$.cloudinaryId": cloudinary_id,
                    "images.$.updatedAt": updated_at,
                }
            },
            projection=_element_projection(image_id),
            return_document=ReturnDocument.BEFORE,
        )
        return _first_image(document)

    async def pull_image(self, image_id: str) -> ImageEntry | None:
        """Pull the matching array element and return it."""
        document = await self.collection.find_one_and_update(
            {"images.imageId": image_id},
            {"$pull": {"images": {"imageId": image_id}}},
            projection=_element_projection(image_id),
            return_document=ReturnDocument.BEFORE,
        )
        return _first_image(document)

    async def get_peserta_paket(self) -> PesertaPaket | None:
        """Return the stored participant counts."""
        document = await self.collection.find_one(
            {}, projection={"pesertaPaket": 1, "_id": 0}
        )
        if not document or not document.get("pesertaPaket"):
            return None
        raw = document["pesertaPaket"]
        return PesertaPaket(
            siswa_paud=int(raw.get("siswaPAUD") or 0),
            paket_a=int(raw.get("paketA") or 0),
            paket_b=int(raw.get("paketB") or 0),
            paket_c=int(raw.get("paketC") or 0),
        )

    async def set_peserta_paket(self, counts: PesertaPaket) -> None:
        """Overwrite the participant counts, creating the document if needed."""
        await self.collection.update_one(
            {},
            {
                "$set": {
                    "pesertaPaket": {
                        "siswaPAUD": counts.siswa_paud,
                        "paketA": counts.paket_a,
                        "paketB": counts.paket_b,
                        "paketC": counts.paket_c,
                    }
                }
            },
            upsert=True,
        )


def _element_projection(image_id: str) -> dict[str, object]:
    return {"_id": 0, "images": {"$elemMatch": {"imageId": image_id}}}


def _first_image(document: dict[str, object] | None) -> ImageEntry | None:
    if not document or not document.get("images"):
        return None
    return _parse_image(document["images"][0])


def _serialize_image(entry: ImageEntry) -> dict[str, object]:
    return {
        "imageId": entry.image_id,
        "imageAlt": entry.image_alt,
        "imageUrl": entry.image_url,
        "cloudinaryId": entry.cloudinary_id,
        "createdAt": entry.created_at,
        "updatedAt": entry.updated_at,
    }


def _parse_image(row: dict[str, object]) -> ImageEntry:
    return ImageEntry(
        image_id=str(row.get("imageId", "")),
        image_alt=str(row.get("imageAlt") or ""),
        image_url=str(row.get("imageUrl") or ""),
        cloudinary_id=row.get("cloudinaryId") or None,
        created_at=_parse_datetime(row.get("createdAt")),
        updated_at=_parse_datetime(row.get("updatedAt")),
    )


def _parse_datetime(value: object) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return datetime.min.replace(tzinfo=UTC)
