"""Login gate for the single admin account."""

import logging
from dataclasses import dataclass
from typing import Protocol

import bcrypt

from skb_backend.domain.auth import ADMIN_ROLE, Credential
from skb_backend.domain.errors import PasswordMismatch, UserNotFound

logger = logging.getLogger(__name__)


class CredentialRepository(Protocol):
    """Read-only access to stored credentials."""

    async def get_by_username(self, username: str) -> Credential | None:
        """Return the credential for a username, if present."""


def hash_password(password: str) -> str:
    """Hash a plain password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


BCRYPT_MAX_PASSWORD_BYTES = 72


def check_password(password: str, password_hash: str) -> bool:
    """Compare a plain password against a bcrypt hash in constant time."""
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        logger.info("Rejected password longer than the bcrypt input limit")
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


@dataclass
class AuthService:
    """Authenticates the admin and returns the role to put in the token."""

    repository: CredentialRepository

    async def authenticate(self, username: str, password: str) -> str:
        """Return the admin role marker or raise an AuthFailure."""
        credential = await self.repository.get_by_username(username)
        if credential is None:
            raise UserNotFound(username)
        if not check_password(password, credential.password_hash):
            raise PasswordMismatch(username)
        return ADMIN_ROLE
