from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from weather_records.core.config import settings
from weather_records.core.errors import NotFoundError, UpstreamError, ValidationError
from weather_records.schemas.records import ResolvedLocation
from weather_records.services.providers.base import OpenMeteoHttpClient

logger = logging.getLogger(__name__)

LOCATION_NOT_FOUND = (
    "Location not found. Try: city name, zip code, or landmark "
    "(e.g. New York, 10001, Eiffel Tower)"
)


class GeocodingClient(OpenMeteoHttpClient):
    """
    Open-Meteo geocoding client.

    Endpoint: https://geocoding-api.open-meteo.com/v1/search?name={q}&count=1

    Only the best match is requested and it is taken as authoritative;
    there is no disambiguation between candidates.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = settings.http_timeout_s,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout_s=timeout_s, transport=transport)
        self.base_url = base_url or settings.geocoding_url

    @staticmethod
    def display_name(match: Dict[str, Any]) -> str:
        """
        Build "Name, Region, Country", dropping region or country when absent.
        """
        parts = (match.get("name"), match.get("admin1"), match.get("country"))
        return ", ".join(str(p) for p in parts if p)

    async def resolve(self, query: str) -> ResolvedLocation:
        """
        Resolve a free-text location (city, zip code, "lat,lon", landmark).

        Raises:
            ValidationError: the query is empty after trimming.
            NotFoundError: the service returned no match.
            UpstreamError: network failure or unexpected response shape.
        """
        if not query or not query.strip():
            raise ValidationError("Please enter a location")

        data = await self._get_json(
            self.base_url,
            {"name": query, "count": 1, "language": "en", "format": "json"},
        )

        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            raise NotFoundError(LOCATION_NOT_FOUND)

        match = results[0]
        try:
            resolved = ResolvedLocation(
                latitude=match["latitude"],
                longitude=match["longitude"],
                display_name=self.display_name(match),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(f"Unexpected geocoding response: {e}") from e

        logger.debug("Resolved %r to %s (%s, %s)", query, resolved.display_name, resolved.latitude, resolved.longitude)
        return resolved
