from fastapi import APIRouter, Depends, Query

from weather_records.core.db import get_session_state
from weather_records.core.state import SessionState
from weather_records.schemas.weather import CurrentWeatherResponse
from weather_records.services.weather_service import WeatherService

router = APIRouter(prefix="/weather", tags=["Weather"])


@router.get(
    "/current",
    response_model=CurrentWeatherResponse,
    summary="Current weather and 5-day forecast",
    description=(
        "Resolves a free-text location (city, zip code, `lat,lon` or landmark) and returns "
        "current conditions plus the forecast for the next five days. Today is not part of "
        "the forecast."
    ),
)
async def current_weather(
    location: str = Query("", description="Location text, e.g. `New York`, `10001`, `Eiffel Tower`"),
    session: SessionState = Depends(get_session_state),
):
    session.begin(location=location)
    return await WeatherService().current(location)
