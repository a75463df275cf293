from typing import Optional

# WMO weather interpretation codes as used by Open-Meteo.
WEATHER_DESCRIPTIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Foggy",
    51: "Light drizzle",
    53: "Drizzle",
    55: "Heavy drizzle",
    61: "Light rain",
    63: "Rain",
    65: "Heavy rain",
    71: "Light snow",
    73: "Snow",
    75: "Heavy snow",
    80: "Rain showers",
    81: "Rain showers",
    82: "Heavy rain showers",
    95: "Thunderstorm",
    96: "Thunderstorm with hail",
    99: "Heavy thunderstorm",
}

UNKNOWN_CONDITION = "Unknown"


def describe_weather_code(code: Optional[int]) -> str:
    """
    Map a weather code to its condition text; unmapped codes yield "Unknown".
    """
    if code is None:
        return UNKNOWN_CONDITION
    try:
        return WEATHER_DESCRIPTIONS.get(int(code), UNKNOWN_CONDITION)
    except (TypeError, ValueError):
        return UNKNOWN_CONDITION
