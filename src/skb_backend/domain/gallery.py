"""Domain models for the site document."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ImageEntry:
    """Single gallery image stored inside the site document."""

    image_id: str
    image_alt: str
    image_url: str
    cloudinary_id: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PesertaPaket:
    """Participant counts per learning programme."""

    siswa_paud: int = 0
    paket_a: int = 0
    paket_b: int = 0
    paket_c: int = 0


@dataclass(frozen=True)
class UploadedAsset:
    """Result of storing image bytes in the asset store."""

    public_url: str
    asset_id: str
