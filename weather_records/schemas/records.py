from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DailySeries(BaseModel):
    """
    Per-day arrays returned by the Open-Meteo archive for a date range.

    Keys mirror the upstream `daily` object. Unknown upstream keys are kept
    so the stored series is the full payload backing the summary.
    """

    model_config = ConfigDict(extra="allow")

    time: list[str] = Field(default_factory=list)
    temperature_2m_max: list[Optional[float]] = Field(default_factory=list)
    temperature_2m_min: list[Optional[float]] = Field(default_factory=list)
    precipitation_sum: list[Optional[float]] = Field(default_factory=list)
    weathercode: Optional[list[Optional[int]]] = None


class Summary(BaseModel):
    """
    Summary statistics derived from a daily series, one fractional digit each.
    """

    avg_max_temp: float
    avg_min_temp: float
    total_precipitation: float


class DateRange(BaseModel):
    start_date: date
    end_date: date


class ResolvedLocation(BaseModel):
    """
    First geocoding match for a free-text location query.
    """

    latitude: float
    longitude: float
    display_name: str


class WeatherRecord(BaseModel):
    """
    One saved historical-weather summary for a location and date range.

    Serialized with camelCase field names, which is also the format of the
    stored collection and of the JSON export.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    location: str
    latitude: float
    longitude: float
    start_date: date
    end_date: date
    avg_max_temp: float
    avg_min_temp: float
    total_precipitation: float
    daily_data: DailySeries
    saved_at: datetime


class RecordRequest(BaseModel):
    """
    Request body for saving a new record or editing an existing one.

    Dates are optional at the schema level so a missing date is reported
    with the same message as any other date-range policy violation.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    location: str = Field(default="", examples=["Eiffel Tower"])
    start_date: Optional[date] = Field(default=None, examples=["2023-01-01"])
    end_date: Optional[date] = Field(default=None, examples=["2023-06-01"])


class LoadOutcome(str, Enum):
    """
    How the stored collection was obtained.

    `corrupt` covers undecodable payloads and storage read failures; the
    caller still receives an empty collection.
    """

    OK = "ok"
    EMPTY = "empty"
    CORRUPT = "corrupt"


class RecordListResponse(BaseModel):
    """
    Response payload for the saved records list view.
    """

    items: list[WeatherRecord] = Field(default_factory=list)
    total: int
    storage: LoadOutcome = Field(..., description="Outcome of reading the record store")
