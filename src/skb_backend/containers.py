"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from motor.motor_asyncio import AsyncIOMotorClient

from skb_backend.adapters.cloudinary_client import HttpxCloudinaryClient
from skb_backend.adapters.mongo_site_repository import MongoSiteRepository
from skb_backend.adapters.mongo_user_repository import MongoUserRepository
from skb_backend.config import Settings
from skb_backend.services.auth import AuthService
from skb_backend.services.gallery import GalleryService
from skb_backend.services.statistics import StatisticsService
from skb_backend.services.tokens import TokenService

DEFAULT_DATABASE = "skb"


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    token_service: TokenService
    gallery_service: GalleryService
    statistics_service: StatisticsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    mongo_client = AsyncIOMotorClient(resolved_settings.mongodb_uri, tz_aware=True)
    if resolved_settings.mongodb_database:
        database = mongo_client[resolved_settings.mongodb_database]
    else:
        database = mongo_client.get_default_database(DEFAULT_DATABASE)
    site_repository = MongoSiteRepository(
        database[resolved_settings.site_collection]
    )
    user_repository = MongoUserRepository(database[resolved_settings.user_collection])
    cloudinary_client = HttpxCloudinaryClient.create(
        cloud_name=resolved_settings.cloud_name,
        api_key=resolved_settings.cloud_api_key,
        api_secret=resolved_settings.cloud_secret,
        folder=resolved_settings.cloudinary_folder,
        base_url=resolved_settings.cloudinary_base_url,
    )
    token_service = TokenService(
        secret_key=resolved_settings.secret_key,
        ttl=timedelta(hours=resolved_settings.session_ttl_hours),
    )

    async def close_resources() -> None:
        await cloudinary_client.close()
        mongo_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(user_repository),
        token_service=token_service,
        gallery_service=GalleryService(
            repository=site_repository, asset_store=cloudinary_client
        ),
        statistics_service=StatisticsService(site_repository),
        close_resources=close_resources,
    )
