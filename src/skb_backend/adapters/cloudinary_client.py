"""Cloudinary asset store client."""

import hashlib
import time
from dataclasses import dataclass
from typing import Protocol

import httpx

from skb_backend.domain.errors import AssetDeleteFailed, AssetUploadFailed
from skb_backend.domain.gallery import UploadedAsset

_UNSIGNED_PARAMS = {"file", "api_key", "resource_type", "cloud_name"}


class AssetStore(Protocol):
    """Interface for the remote image store."""

    async def upload(
        self, content: bytes, filename: str | None = None
    ) -> UploadedAsset:
        """Upload image bytes and return where they landed."""

    async def delete(self, asset_id: str) -> None:
        """Delete an asset by its store id."""


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Return the Cloudinary request signature for the given parameters."""
    to_sign = "&".join(
        f"{key}={value}"
        for key, value in sorted(params.items())
        if key not in _UNSIGNED_PARAMS and value != ""
    )
    digest = hashlib.sha1((to_sign + api_secret).encode("utf-8"))  # noqa: S324
    return digest.hexdigest()


@dataclass
class HttpxCloudinaryClient(AssetStore):
    """Signed Cloudinary upload API client using httpx."""

    cloud_name: str
    api_key: str
    api_secret: str
    folder: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str,
        base_url: str = "https://api.cloudinary.com/v1_1",
    ) -> "HttpxCloudinaryClient":
        """Create a Cloudinary client with a managed httpx session."""
        return cls(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            folder=folder,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def upload(
        self, content: bytes, filename: str | None = None
    ) -> UploadedAsset:
        """Upload image bytes into the configured folder."""
        params = {
            "folder": self.folder,
            "timestamp": str(int(time.time())),
            "use_filename": "true",
        }
        url = f"{self.base_url}/{self.cloud_name}/image/upload"
        try:
            response = await self.http_client.post(
                url,
                data=self._signed(params),
                files={"file": (filename or "upload", content)},
                timeout=60,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise AssetUploadFailed(f"Cloudinary upload failed: {exc}") from exc
        if not isinstance(payload, dict):
            raise AssetUploadFailed("Cloudinary upload returned a non-object payload")
        secure_url = payload.get("secure_url")
        public_id = payload.get("public_id")
        if not secure_url or not public_id:
            raise AssetUploadFailed("Cloudinary upload returned no asset reference")
        return UploadedAsset(public_url=secure_url, asset_id=public_id)

    async def delete(self, asset_id: str) -> None:
        """Destroy an asset; an asset that is already gone counts as deleted."""
        params = {"public_id": asset_id, "timestamp": str(int(time.time()))}
        url = f"{self.base_url}/{self.cloud_name}/image/destroy"
        try:
            response = await self.http_client.post(
                url, data=self._signed(params), timeout=20
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise AssetDeleteFailed(asset_id, str(exc)) from exc
        if not isinstance(payload, dict):
            raise AssetDeleteFailed(asset_id, "non-object payload")
        result = payload.get("result")
        if result not in {"ok", "not found"}:
            raise AssetDeleteFailed(asset_id, f"unexpected result {result!r}")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    def _signed(self, params: dict[str, str]) -> dict[str, str]:
        return {
            **params,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }
