"""Request models for the HTTP surface."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials posted to /login."""

    username: str
    password: str


class ImagePayload(BaseModel):
    """Fields accepted when registering or updating an image."""

    model_config = ConfigDict(populate_by_name=True)

    image_alt: str = Field(alias="imageAlt")
    image_url: str = Field(alias="imageUrl")
    cloudinary_id: str | None = Field(default=None, alias="cloudinaryId")


class PesertaPaketPayload(BaseModel):
    """Participant counts posted to /updatePesertaPaket."""

    model_config = ConfigDict(populate_by_name=True)

    paud_count: int = Field(alias="paudCount", ge=0)
    paket_a_count: int = Field(alias="paketACount", ge=0)
    paket_b_count: int = Field(alias="paketBCount", ge=0)
    paket_c_count: int = Field(alias="paketCCount", ge=0)
