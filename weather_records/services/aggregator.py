from typing import Iterable, List, Optional

from weather_records.core.errors import UpstreamError, ValidationError
from weather_records.schemas.records import DailySeries, Summary


def one_decimal(value: float) -> float:
    """Format to exactly one fractional digit, as shown and stored."""
    return float(f"{value:.1f}")


def _present(values: Iterable[Optional[float]]) -> List[float]:
    # Archive days without a measurement come back as null.
    return [float(v) for v in values if v is not None]


def summarize(daily: DailySeries) -> Summary:
    """
    Reduce a daily series to mean max/min temperature and total precipitation.

    Means are taken over the unrounded daily values; only the results are
    rounded to one decimal.

    Raises:
        UpstreamError: the daily arrays differ in length.
        ValidationError: the series holds no temperature values.
    """
    lengths = {len(daily.temperature_2m_max), len(daily.temperature_2m_min), len(daily.precipitation_sum)}
    if len(lengths) > 1:
        raise UpstreamError("Unexpected archive response: daily arrays differ in length")

    maxima = _present(daily.temperature_2m_max)
    minima = _present(daily.temperature_2m_min)
    precipitation = _present(daily.precipitation_sum)

    if not maxima or not minima:
        raise ValidationError("No daily weather data available for the selected date range")

    return Summary(
        avg_max_temp=one_decimal(sum(maxima) / len(maxima)),
        avg_min_temp=one_decimal(sum(minima) / len(minima)),
        total_precipitation=one_decimal(sum(precipitation)),
    )
