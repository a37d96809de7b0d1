"""Domain models for authentication."""

from dataclasses import dataclass
from datetime import datetime

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Credential:
    """Stored login credential."""

    username: str
    password_hash: str


@dataclass(frozen=True)
class SessionClaims:
    """Decoded contents of a session token."""

    role: str
    expires_at: datetime
