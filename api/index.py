"""Serverless function entrypoint.

Platforms that discover functions inside ``api/`` pick up the ASGI ``app``
from here; locally run ``uvicorn lunch_places.main:app`` instead.
"""

from lunch_places.main import app  # noqa: F401  (re-exported for the ASGI runtime)

__all__ = ["app"]
