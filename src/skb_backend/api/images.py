"""Gallery endpoints: asset upload and image CRUD."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import JSONResponse  # noqa: TC002

from skb_backend.api.auth import require_session
from skb_backend.api.models import ImagePayload  # noqa: TC001
from skb_backend.api.responses import failure
from skb_backend.domain.errors import (
    DocumentNotFound,
    NotFound,
)

if TYPE_CHECKING:
    from skb_backend.containers import AppContainer
    from skb_backend.domain.gallery import ImageEntry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["images"])


@router.post("/upload", dependencies=[Depends(require_session)], response_model=None)
async def upload_image(
    request: Request, image: UploadFile | None = File(default=None)
) -> dict[str, object] | JSONResponse:
    """Upload the multipart field "image" to the asset store."""
    container: AppContainer = request.app.state.container
    if image is None:
        return failure(
            status.HTTP_400_BAD_REQUEST, "Field 'image' wajib berisi file"
        )
    try:
        content = await image.read()
        asset = await container.gallery_service.upload(content, image.filename)
    except Exception:
        logger.exception("Upload error", extra={"upload_filename": image.filename})
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Gagal upload gambar")
    return {
        "success": True,
        "message": "Gambar berhasil diupload",
        "data": {"imageUrl": asset.public_url, "cloudinaryId": asset.asset_id},
    }


@router.get("/images", response_model=None)
async def list_images(request: Request) -> dict[str, object] | JSONResponse:
    """Return every gallery image in display order."""
    container: AppContainer = request.app.state.container
    try:
        images = await container.gallery_service.list_images()
    except Exception:
        logger.exception("Get images error")
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Gagal mengambil data")
    return {"success": True, "data": [serialize_image(entry) for entry in images]}


@router.post("/images", dependencies=[Depends(require_session)], response_model=None)
async def create_image(
    payload: ImagePayload, request: Request
) -> dict[str, object] | JSONResponse:
    """Register an uploaded asset as a new gallery image."""
    container: AppContainer = request.app.state.container
    try:
        entry = await container.gallery_service.register(
            payload.image_alt, payload.image_url, payload.cloudinary_id
        )
    except Exception:
        logger.exception("Save image error")
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Gagal menyimpan gambar")
    return {
        "success": True,
        "message": "Gambar berhasil disimpan",
        "data": serialize_image(entry),
    }


@router.put(
    "/images/{image_id}", dependencies=[Depends(require_session)], response_model=None
)
async def update_image(
    image_id: str, payload: ImagePayload, request: Request
) -> dict[str, object] | JSONResponse:
    """Update alt text, URL and asset reference of one image."""
    container: AppContainer = request.app.state.container
    try:
        entry = await container.gallery_service.update(
            image_id, payload.image_alt, payload.image_url, payload.cloudinary_id
        )
    except NotFound as exc:
        return failure(status.HTTP_404_NOT_FOUND, _not_found_message(exc))
    except Exception:
        logger.exception("Update image error", extra={"image_id": image_id})
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Gagal update data")
    return {
        "success": True,
        "message": "Gambar berhasil diupdate",
        "data": serialize_image(entry),
    }


@router.delete(
    "/images/{image_id}", dependencies=[Depends(require_session)], response_model=None
)
async def delete_image(
    image_id: str, request: Request
) -> dict[str, object] | JSONResponse:
    """Remove one image and its backing asset."""
    container: AppContainer = request.app.state.container
    try:
        await container.gallery_service.remove(image_id)
    except NotFound as exc:
        return failure(status.HTTP_404_NOT_FOUND, _not_found_message(exc))
    except Exception:
        logger.exception("Delete image error", extra={"image_id": image_id})
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Gagal menghapus gambar")
    return {"success": True, "message": "Gambar berhasil dihapus"}


def serialize_image(entry: ImageEntry) -> dict[str, object]:
    """Render an image entry with the field names the frontend reads."""
    return {
        "imageId": entry.image_id,
        "imageAlt": entry.image_alt,
        "imageUrl": entry.image_url,
        "cloudinaryId": entry.cloudinary_id,
        "createdAt": entry.created_at.isoformat(),
        "updatedAt": entry.updated_at.isoformat(),
    }


def _not_found_message(exc: NotFound) -> str:
    if isinstance(exc, DocumentNotFound):
        return "Data gambar tidak ditemukan"
    return "Gambar tidak ditemukan"
