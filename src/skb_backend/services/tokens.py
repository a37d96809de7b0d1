"""Signed session tokens carried in the login cookie."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from skb_backend.domain.auth import ADMIN_ROLE, SessionClaims
from skb_backend.domain.errors import InvalidOrExpiredToken

ALGORITHM = "HS256"


@dataclass
class TokenService:
    """Issues and verifies HS256 session tokens."""

    secret_key: str
    ttl: timedelta = timedelta(hours=24)

    def __post_init__(self) -> None:
        if not self.secret_key:
            raise ValueError("A signing secret is required to issue session tokens")

    def issue(self, role: str = ADMIN_ROLE) -> str:
        """Return a signed token carrying the role claim and an expiry."""
        now = datetime.now(tz=UTC)
        claims = {"role": role, "iat": now, "exp": now + self.ttl}
        return jwt.encode(claims, self.secret_key, algorithm=ALGORITHM)

    def verify(self, token: str | None) -> SessionClaims:
        """Decode a token or raise InvalidOrExpiredToken."""
        if not token:
            raise InvalidOrExpiredToken("Missing session token")
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[ALGORITHM],
                options={"require_exp": True},
            )
        except JWTError as exc:
            raise InvalidOrExpiredToken(str(exc)) from exc
        role = payload.get("role")
        if role != ADMIN_ROLE:
            raise InvalidOrExpiredToken("Token does not carry the admin role")
        return SessionClaims(
            role=role,
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
        )

    def is_valid(self, token: str | None) -> bool:
        """Return true when the token verifies."""
        try:
            self.verify(token)
        except InvalidOrExpiredToken:
            return False
        return True
