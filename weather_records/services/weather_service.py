from __future__ import annotations

from typing import Optional

from weather_records.schemas.weather import CurrentWeatherResponse, CurrentWeatherView
from weather_records.services.providers.geocoding_client import GeocodingClient
from weather_records.services.providers.open_meteo_client import OpenMeteoClient


class WeatherService:
    """
    Current-weather workflow: resolve the location, then fetch conditions
    and the five-day forecast. Nothing is persisted.
    """

    def __init__(
        self,
        geocoder: Optional[GeocodingClient] = None,
        weather: Optional[OpenMeteoClient] = None,
    ):
        self.geocoder = geocoder or GeocodingClient()
        self.weather = weather or OpenMeteoClient()

    async def current(self, location: str) -> CurrentWeatherResponse:
        resolved = await self.geocoder.resolve(location)
        conditions, forecast = await self.weather.fetch_current(resolved.latitude, resolved.longitude)

        view = CurrentWeatherView(
            location=resolved.display_name,
            latitude=resolved.latitude,
            longitude=resolved.longitude,
            **conditions.model_dump(),
        )
        return CurrentWeatherResponse(current=view, forecast=forecast)
