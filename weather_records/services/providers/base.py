from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from weather_records.core.config import settings
from weather_records.core.errors import UpstreamError

logger = logging.getLogger(__name__)


class OpenMeteoHttpClient:
    """
    Shared HTTP plumbing for the Open-Meteo clients.

    Each request opens its own `httpx.AsyncClient`. Any transport, status or
    JSON decoding failure is raised as `UpstreamError` carrying the raw
    message; nothing is retried.
    """

    def __init__(
        self,
        timeout_s: Optional[float] = settings.http_timeout_s,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout_s
        self.transport = transport

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        logger.debug("GET %s params=%s", url, params)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(url, params=params, headers={"accept": "application/json"})
                r.raise_for_status()
                return r.json()
        except httpx.HTTPError as e:
            raise UpstreamError(str(e) or type(e).__name__) from e
        except ValueError as e:
            # Body was not valid JSON
            raise UpstreamError(str(e)) from e
