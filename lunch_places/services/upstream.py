from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Type

import aiohttp

from lunch_places.config import Settings
from lunch_places.errors import UpstreamError
from lunch_places.result import Failure, Ok, Result

logger = logging.getLogger(__name__)


async def fetch_json(
    session: aiohttp.ClientSession,
    url: str,
    params: Dict[str, Any],
    *,
    settings: Settings,
    error_cls: Type[UpstreamError],
) -> Result[Any]:
    """GET a Google Maps JSON endpoint with the API key attached.

    Transport problems never escape: they come back as ``Failure(error_cls(...))``
    with the upstream HTTP status, 504 for a timeout, or 502 otherwise.
    """
    params = {**params, "key": settings.lunch_places_api_key}
    timeout = aiohttp.ClientTimeout(total=settings.http_timeout_s)

    try:
        async with session.get(url, params=params, timeout=timeout) as resp:
            if resp.status >= 400:
                text = await resp.text()
                logger.error("Upstream %s returned HTTP %s", url, resp.status)
                return Failure(error_cls(details=text, status_code=resp.status))
            data = await resp.json(content_type=None)
    except asyncio.TimeoutError:
        logger.error("Upstream %s timed out after %.1fs", url, settings.http_timeout_s)
        return Failure(error_cls(details="Upstream request timed out.", status_code=504))
    except aiohttp.ClientError as e:
        logger.error("Upstream %s transport error: %s", url, e)
        return Failure(error_cls(details=str(e), status_code=502))
    except ValueError as e:
        logger.error("Upstream %s returned a body that is not JSON: %s", url, e)
        return Failure(error_cls(details="Upstream response was not valid JSON.", status_code=502))

    return Ok(data)


def provider_details(status: str, error_message: Optional[str]) -> str:
    if error_message:
        return f"{status}: {error_message}"
    return status
