"""Participant statistics endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse  # noqa: TC002

from skb_backend.api.auth import require_session
from skb_backend.api.models import PesertaPaketPayload  # noqa: TC001
from skb_backend.api.responses import failure

if TYPE_CHECKING:
    from skb_backend.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["statistics"])


@router.post(
    "/updatePesertaPaket", dependencies=[Depends(require_session)], response_model=None
)
async def update_peserta_paket(
    payload: PesertaPaketPayload, request: Request
) -> dict[str, object] | JSONResponse:
    """Overwrite the participant counts."""
    container: AppContainer = request.app.state.container
    try:
        await container.statistics_service.update(
            payload.paud_count,
            payload.paket_a_count,
            payload.paket_b_count,
            payload.paket_c_count,
        )
    except Exception:
        logger.exception("Error updating peserta paket")
        return failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Gagal memperbarui statistik peserta paket",
        )
    return {
        "success": True,
        "message": "Statistik peserta paket berhasil diperbarui",
    }


@router.get("/pesertaPaket", response_model=None)
async def get_peserta_paket(request: Request) -> dict[str, object] | JSONResponse:
    """Return the participant counts."""
    container: AppContainer = request.app.state.container
    try:
        counts = await container.statistics_service.get()
    except Exception:
        logger.exception("Error fetching peserta paket")
        return failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Gagal mengambil data peserta paket",
        )
    return {
        "success": True,
        "data": {
            "siswaPAUD": counts.siswa_paud,
            "paketA": counts.paket_a,
            "paketB": counts.paket_b,
            "paketC": counts.paket_c,
        },
    }
