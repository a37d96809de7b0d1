"""MongoDB-backed credential lookup."""

from dataclasses import dataclass

from motor.motor_asyncio import AsyncIOMotorCollection

from skb_backend.domain.auth import Credential
from skb_backend.services.auth import CredentialRepository


@dataclass
class MongoUserRepository(CredentialRepository):
    """Reads login credentials from the user collection."""

    collection: AsyncIOMotorCollection

    async def get_by_username(self, username: str) -> Credential | None:
        """Return the credential for a username, if present."""
        row = await self.collection.find_one(
            {"username": username}, projection={"username": 1, "password": 1}
        )
        if not row or not row.get("password"):
            return None
        return Credential(username=row["username"], password_hash=row["password"])
