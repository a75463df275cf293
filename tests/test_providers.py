from datetime import date

import httpx
import pytest

from weather_records.core.errors import NotFoundError, UpstreamError, ValidationError
from weather_records.services.providers.geocoding_client import GeocodingClient
from weather_records.services.providers.open_meteo_client import OpenMeteoClient, round_half_up


def _transport(payload, status_code=200, calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


FORECAST_PAYLOAD = {
    "current": {
        "temperature_2m": 18.6,
        "relative_humidity_2m": 71,
        "apparent_temperature": 17.5,
        "precipitation": 0.2,
        "weathercode": 61,
        "windspeed_10m": 12.4,
        "pressure_msl": 1013.5,
    },
    "daily": {
        "time": ["2024-05-01", "2024-05-02", "2024-05-03", "2024-05-04", "2024-05-05", "2024-05-06"],
        "temperature_2m_max": [20.0, 21.6, 22.4, 19.5, 18.0, 17.2],
        "temperature_2m_min": [10.0, 11.5, 12.2, 9.4, 8.0, 7.7],
        "weathercode": [0, 1, 2, 3, 45, 9999],
        "precipitation_sum": [0.0, 0.1, 0.0, 2.4, 5.0, 0.3],
    },
}


# ---------------------------------------------------------------------
# Geocoding
# ---------------------------------------------------------------------

@pytest.mark.asyncio
async def test_resolve_uses_first_match(geocoding_payload):
    calls = []
    client = GeocodingClient(transport=_transport(geocoding_payload, calls=calls))

    resolved = await client.resolve("Paris")

    assert resolved.display_name == "Paris, Île-de-France, France"
    assert resolved.latitude == 48.85341
    assert resolved.longitude == 2.3488

    params = calls[0].url.params
    assert params["name"] == "Paris"
    assert params["count"] == "1"


@pytest.mark.asyncio
async def test_resolve_omits_missing_region():
    payload = {"results": [{"name": "Monaco", "country": "Monaco", "latitude": 43.73, "longitude": 7.42}]}
    client = GeocodingClient(transport=_transport(payload))

    resolved = await client.resolve("Monaco")

    assert resolved.display_name == "Monaco, Monaco"


@pytest.mark.asyncio
async def test_resolve_omits_missing_country():
    payload = {"results": [{"name": "Antarctica Station", "latitude": -75.1, "longitude": 123.3}]}
    client = GeocodingClient(transport=_transport(payload))

    resolved = await client.resolve("Antarctica Station")

    assert resolved.display_name == "Antarctica Station"
    assert "None" not in resolved.display_name


@pytest.mark.asyncio
async def test_resolve_empty_query_never_calls_upstream():
    calls = []
    client = GeocodingClient(transport=_transport({}, calls=calls))

    with pytest.raises(ValidationError):
        await client.resolve("   ")
    assert calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{}, {"results": []}])
async def test_resolve_without_match_raises_not_found(payload):
    client = GeocodingClient(transport=_transport(payload))

    with pytest.raises(NotFoundError, match="zip code, or landmark"):
        await client.resolve("Nowhere-at-all")


@pytest.mark.asyncio
async def test_resolve_http_failure_is_upstream_error():
    client = GeocodingClient(transport=_transport({"error": True}, status_code=500))

    with pytest.raises(UpstreamError):
        await client.resolve("Paris")


# ---------------------------------------------------------------------
# Current weather and forecast
# ---------------------------------------------------------------------

@pytest.mark.asyncio
async def test_fetch_current_rounds_and_drops_today():
    calls = []
    client = OpenMeteoClient(transport=_transport(FORECAST_PAYLOAD, calls=calls))

    current, forecast = await client.fetch_current(48.85, 2.35)

    assert current.temperature == 19
    assert current.feels_like == 18
    assert current.wind_speed == 12
    assert current.pressure == 1014
    assert current.humidity == 71
    assert current.precipitation == 0.2
    assert current.condition == "Light rain"

    assert [d.date for d in forecast] == ["2024-05-02", "2024-05-03", "2024-05-04", "2024-05-05", "2024-05-06"]
    assert forecast[0].max_temp == 22
    assert forecast[0].min_temp == 12
    assert forecast[3].precipitation == 5.0
    assert forecast[-1].condition == "Unknown"

    assert calls[0].url.params["forecast_days"] == "6"


@pytest.mark.asyncio
async def test_fetch_current_unexpected_shape_is_upstream_error():
    client = OpenMeteoClient(transport=_transport({"current": {}}))

    with pytest.raises(UpstreamError):
        await client.fetch_current(48.85, 2.35)


def test_round_half_up_matches_display_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(-2.6) == -3


# ---------------------------------------------------------------------
# Historical archive
# ---------------------------------------------------------------------

@pytest.mark.asyncio
async def test_fetch_historical_keeps_raw_values(archive_daily):
    calls = []
    client = OpenMeteoClient(transport=_transport({"daily": archive_daily}, calls=calls))

    daily = await client.fetch_historical(48.85, 2.35, date(2023, 1, 1), date(2023, 1, 3))

    assert daily.temperature_2m_max == [10.0, 12.5, 11.2]
    assert daily.precipitation_sum == [0.0, 4.3, 1.25]

    params = calls[0].url.params
    assert params["start_date"] == "2023-01-01"
    assert params["end_date"] == "2023-01-03"
    assert "precipitation_sum" in params["daily"]


@pytest.mark.asyncio
async def test_fetch_historical_missing_daily_is_upstream_error():
    client = OpenMeteoClient(transport=_transport({"reason": "out of range", "error": True}, status_code=400))

    with pytest.raises(UpstreamError):
        await client.fetch_historical(48.85, 2.35, date(2023, 1, 1), date(2023, 1, 3))
