"""Error taxonomy shared by services, adapters and the HTTP surface."""


class SiteError(Exception):
    """Base class for expected application failures."""


class AuthFailure(SiteError):
    """Credentials or session token were rejected."""


class UserNotFound(AuthFailure):
    """No credential exists for the given username."""


class PasswordMismatch(AuthFailure):
    """The password does not match the stored hash."""


class InvalidOrExpiredToken(AuthFailure):
    """The session token is missing, malformed, badly signed or expired."""


class NotFound(SiteError):
    """A requested record does not exist."""


class DocumentNotFound(NotFound):
    """The site document, or its image list, does not exist yet."""


class ImageNotFound(NotFound):
    """No image entry carries the requested id."""

    def __init__(self, image_id: str) -> None:
        super().__init__(f"Image {image_id} not found")
        self.image_id = image_id


class AssetStoreFailure(SiteError):
    """The remote asset store rejected or failed a request."""


class AssetUploadFailed(AssetStoreFailure):
    """Uploading bytes to the asset store failed."""


class AssetDeleteFailed(AssetStoreFailure):
    """Deleting an asset from the asset store failed."""

    def __init__(self, asset_id: str, reason: str) -> None:
        super().__init__(f"Failed to delete asset {asset_id}: {reason}")
        self.asset_id = asset_id


class PersistenceError(SiteError):
    """A database write reported no effect."""
