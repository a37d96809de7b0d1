"""ASGI entrypoint for the SKB backend API."""

from skb_backend.api.app import create_app
from skb_backend.containers import build_container

app = create_app(build_container())
