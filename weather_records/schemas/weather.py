from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CurrentConditions(BaseModel):
    """
    Instantaneous conditions as returned by the forecast endpoint.

    Temperature, feels-like, wind speed and pressure are rounded to whole
    numbers for display.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    temperature: int
    feels_like: int
    humidity: Optional[float] = None
    wind_speed: int
    pressure: int
    precipitation: Optional[float] = None
    condition: str


class ForecastDay(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str
    max_temp: int
    min_temp: int
    condition: str
    precipitation: Optional[float] = None


class CurrentWeatherView(CurrentConditions):
    """
    Current conditions for a resolved location. Not persisted.
    """

    location: str = Field(..., description="Canonical display name of the location")
    latitude: float
    longitude: float


class CurrentWeatherResponse(BaseModel):
    """
    Response payload for the current-weather view: conditions now plus the
    next five days (today excluded).
    """

    current: CurrentWeatherView
    forecast: list[ForecastDay] = Field(default_factory=list)
