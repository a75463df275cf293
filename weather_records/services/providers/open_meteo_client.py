from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import httpx

from weather_records.core.config import settings
from weather_records.core.errors import UpstreamError
from weather_records.schemas.records import DailySeries
from weather_records.schemas.weather import CurrentConditions, ForecastDay
from weather_records.services.providers.base import OpenMeteoHttpClient
from weather_records.services.weather_codes import describe_weather_code

logger = logging.getLogger(__name__)

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation",
    "weathercode",
    "windspeed_10m",
    "pressure_msl",
)
FORECAST_DAILY_FIELDS = ("temperature_2m_max", "temperature_2m_min", "weathercode", "precipitation_sum")
ARCHIVE_DAILY_FIELDS = ("temperature_2m_max", "temperature_2m_min", "precipitation_sum", "weathercode")

# Today plus the five days exposed as the forecast.
FORECAST_DAYS = 6


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return int(math.floor(value + 0.5))


class OpenMeteoClient(OpenMeteoHttpClient):
    """
    Open-Meteo weather client.

    Endpoints used:
    - Forecast (current + daily): https://api.open-meteo.com/v1/forecast
    - Historical archive (daily): https://archive-api.open-meteo.com/v1/archive

    Current values are rounded for display. Archive series are returned
    untouched so that averages are computed on raw daily values.
    """

    def __init__(
        self,
        forecast_url: Optional[str] = None,
        archive_url: Optional[str] = None,
        timeout_s: Optional[float] = settings.http_timeout_s,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout_s=timeout_s, transport=transport)
        self.forecast_url = forecast_url or settings.forecast_url
        self.archive_url = archive_url or settings.archive_url

    async def fetch_current(self, latitude: float, longitude: float) -> Tuple[CurrentConditions, List[ForecastDay]]:
        """
        Current conditions plus a five-day forecast.

        Six daily entries are requested; the first (today) is dropped so the
        forecast always starts tomorrow.
        """
        data = await self._get_json(
            self.forecast_url,
            {
                "latitude": latitude,
                "longitude": longitude,
                "current": ",".join(CURRENT_FIELDS),
                "daily": ",".join(FORECAST_DAILY_FIELDS),
                "timezone": "auto",
                "forecast_days": FORECAST_DAYS,
            },
        )
        try:
            return self.parse_current(data["current"]), self.parse_forecast(data["daily"])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise UpstreamError(f"Unexpected forecast response: {e!r}") from e

    async def fetch_historical(self, latitude: float, longitude: float, start_date: date, end_date: date) -> DailySeries:
        """
        Archived daily max/min temperature and precipitation sum for the
        closed interval [start_date, end_date].
        """
        data = await self._get_json(
            self.archive_url,
            {
                "latitude": latitude,
                "longitude": longitude,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "daily": ",".join(ARCHIVE_DAILY_FIELDS),
                "timezone": "auto",
            },
        )
        try:
            return DailySeries.model_validate(data["daily"])
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(f"Unexpected archive response: {e!r}") from e

    @staticmethod
    def parse_current(current: Dict[str, Any]) -> CurrentConditions:
        return CurrentConditions(
            temperature=round_half_up(current["temperature_2m"]),
            feels_like=round_half_up(current["apparent_temperature"]),
            humidity=current.get("relative_humidity_2m"),
            wind_speed=round_half_up(current["windspeed_10m"]),
            pressure=round_half_up(current["pressure_msl"]),
            precipitation=current.get("precipitation"),
            condition=describe_weather_code(current.get("weathercode")),
        )

    @staticmethod
    def parse_forecast(daily: Dict[str, Any]) -> List[ForecastDay]:
        codes = daily.get("weathercode") or []
        days = []
        for i in range(1, FORECAST_DAYS):
            days.append(
                ForecastDay(
                    date=daily["time"][i],
                    max_temp=round_half_up(daily["temperature_2m_max"][i]),
                    min_temp=round_half_up(daily["temperature_2m_min"][i]),
                    condition=describe_weather_code(codes[i] if i < len(codes) else None),
                    precipitation=daily["precipitation_sum"][i],
                )
            )
        return days
