"""Login, logout and session cookie checks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Cookie, Request, Response, status
from fastapi.responses import JSONResponse  # noqa: TC002

from skb_backend.api.models import LoginRequest  # noqa: TC001
from skb_backend.api.responses import failure
from skb_backend.domain.auth import SessionClaims  # noqa: TC001
from skb_backend.domain.errors import (
    InvalidOrExpiredToken,
    PasswordMismatch,
    UserNotFound,
)

if TYPE_CHECKING:
    from skb_backend.containers import AppContainer

SESSION_COOKIE = "token"

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


class SessionRejected(Exception):  # noqa: N818
    """Raised by the session dependency when the cookie does not verify."""


async def require_session(
    request: Request, token: str | None = Cookie(default=None)
) -> SessionClaims:
    """Ensure the request carries a valid session cookie."""
    container: AppContainer = request.app.state.container
    try:
        return container.token_service.verify(token)
    except InvalidOrExpiredToken as exc:
        raise SessionRejected from exc


@router.post("/login", response_model=None)
async def login(
    payload: LoginRequest, request: Request, response: Response
) -> dict[str, object] | JSONResponse:
    """Check credentials and set the session cookie."""
    container: AppContainer = request.app.state.container
    try:
        role = await container.auth_service.authenticate(
            payload.username, payload.password
        )
    except UserNotFound:
        return failure(status.HTTP_401_UNAUTHORIZED, "User tidak ditemukan")
    except PasswordMismatch:
        return failure(status.HTTP_401_UNAUTHORIZED, "Password salah")
    except Exception:
        logger.exception("Login failed", extra={"username": payload.username})
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Gagal login")

    settings = container.settings
    response.set_cookie(
        SESSION_COOKIE,
        container.token_service.issue(role),
        max_age=settings.session_ttl_hours * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return {"success": True, "message": "Login berhasil"}


@router.post("/logout")
async def logout(request: Request, response: Response) -> dict[str, object]:
    """Clear the session cookie."""
    container: AppContainer = request.app.state.container
    response.delete_cookie(
        SESSION_COOKIE,
        httponly=True,
        secure=container.settings.cookie_secure,
        samesite="lax",
    )
    return {"success": True, "message": "Logout berhasil"}


@router.get("/verifyToken")
async def verify_token(
    request: Request, token: str | None = Cookie(default=None)
) -> dict[str, bool]:
    """Report whether the session cookie is valid; never fails."""
    container: AppContainer = request.app.state.container
    return {"valid": container.token_service.is_valid(token)}
