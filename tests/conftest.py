"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime

import pytest

from skb_backend.adapters.cloudinary_client import AssetStore
from skb_backend.config import Settings
from skb_backend.containers import AppContainer
from skb_backend.domain.auth import Credential
from skb_backend.domain.errors import AssetDeleteFailed, AssetUploadFailed
from skb_backend.domain.gallery import ImageEntry, PesertaPaket, UploadedAsset
from skb_backend.services.auth import AuthService, CredentialRepository, hash_password
from skb_backend.services.gallery import GalleryService, SiteRepository
from skb_backend.services.statistics import StatisticsRepository, StatisticsService
from skb_backend.services.tokens import TokenService

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "rahasia-skb"
ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD)


@dataclass
class InMemorySiteRepository(SiteRepository, StatisticsRepository):
    """In-memory stand-in for the single site document."""

    images: list[ImageEntry] | None = None
    peserta_paket: PesertaPaket | None = None
    push_takes_effect: bool = True

    async def list_images(self) -> list[ImageEntry] | None:
        return list(self.images) if self.images is not None else None

    async def push_image(self, entry: ImageEntry) -> bool:
        if not self.push_takes_effect:
            return False
        if self.images is None:
            self.images = []
        self.images.append(entry)
        return True

    async def update_image(  # noqa: PLR0913
        self,
        image_id: str,
        image_alt: str,
        image_url: str,
        cloudinary_id: str | None,
        updated_at: datetime,
    ) -> ImageEntry | None:
        for index, entry in enumerate(self.images or []):
            if entry.image_id == image_id:
                self.images[index] = replace(
                    entry,
                    image_alt=image_alt,
                    image_url=image_url,
                    cloudinary_id=cloudinary_id,
                    updated_at=updated_at,
                )
                return entry
        return None

    async def pull_image(self, image_id: str) -> ImageEntry | None:
        for index, entry in enumerate(self.images or []):
            if entry.image_id == image_id:
                return self.images.pop(index)
        return None

    async def get_peserta_paket(self) -> PesertaPaket | None:
        return self.peserta_paket

    async def set_peserta_paket(self, counts: PesertaPaket) -> None:
        self.peserta_paket = counts


@dataclass
class InMemoryCredentialRepository(CredentialRepository):
    """In-memory credential store for tests."""

    credentials: dict[str, Credential] = field(default_factory=dict)

    async def get_by_username(self, username: str) -> Credential | None:
        return self.credentials.get(username)


@dataclass
class FakeAssetStore(AssetStore):
    """Fake asset store that records uploads and deletes."""

    uploads: list[tuple[str | None, bytes]] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    fail_upload: bool = False
    fail_delete: bool = False
    on_delete: list[Callable[[str], None]] = field(default_factory=list)

    async def upload(self, content: bytes, filename: str | None = None) -> UploadedAsset:
        if self.fail_upload:
            raise AssetUploadFailed("remote store unavailable")
        self.uploads.append((filename, content))
        asset_id = f"magang/asset-{len(self.uploads)}"
        return UploadedAsset(
            public_url=f"https://res.cloudinary.com/demo/image/upload/{asset_id}.jpg",
            asset_id=asset_id,
        )

    async def delete(self, asset_id: str) -> None:
        for callback in self.on_delete:
            callback(asset_id)
        if self.fail_delete:
            raise AssetDeleteFailed(asset_id, "remote store unavailable")
        self.deleted.append(asset_id)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        secret_key="test-secret",
        mongodb_uri="mongodb://localhost:27017/skb",
        cloud_name="demo",
        cloud_api_key="cloud-key",
        cloud_secret="cloud-secret",
    )


@pytest.fixture
def site_repository() -> InMemorySiteRepository:
    return InMemorySiteRepository()


@pytest.fixture
def asset_store() -> FakeAssetStore:
    return FakeAssetStore()


@pytest.fixture
def credential_repository() -> InMemoryCredentialRepository:
    return InMemoryCredentialRepository(
        credentials={
            ADMIN_USERNAME: Credential(
                username=ADMIN_USERNAME, password_hash=ADMIN_PASSWORD_HASH
            )
        }
    )


@pytest.fixture
def container(
    settings: Settings,
    site_repository: InMemorySiteRepository,
    asset_store: FakeAssetStore,
    credential_repository: InMemoryCredentialRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=AuthService(credential_repository),
        token_service=TokenService(secret_key=settings.secret_key),
        gallery_service=GalleryService(
            repository=site_repository, asset_store=asset_store
        ),
        statistics_service=StatisticsService(site_repository),
        close_resources=close_resources,
    )
