"""Process entrypoint that serves the API with uvicorn."""

import uvicorn

from skb_backend.config import Settings


def main() -> None:
    """Run the ASGI app on the configured host and port."""
    settings = Settings()
    uvicorn.run("skb_backend.api.asgi:app", host=settings.host, port=settings.port)
