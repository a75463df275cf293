from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from weather_records.core.errors import ValidationError
from weather_records.repositories.record_repository import LoadResult, RecordRepository
from weather_records.schemas.exports import ExportResult
from weather_records.schemas.records import DailySeries, DateRange, ResolvedLocation, Summary, WeatherRecord
from weather_records.services.aggregator import summarize
from weather_records.services.date_range import validate_date_range
from weather_records.services.exporter import export_records
from weather_records.services.providers.geocoding_client import GeocodingClient
from weather_records.services.providers.open_meteo_client import OpenMeteoClient

logger = logging.getLogger(__name__)


class RecordService:
    """
    Save, edit, delete, list and export historical weather records.

    Saving and editing run the same sequence: validate the input, resolve
    the location, fetch the archive series for the range, summarize it and
    persist. Editing always re-resolves the location text, so coordinates
    follow the edited name.
    """

    def __init__(
        self,
        db: AsyncSession,
        geocoder: Optional[GeocodingClient] = None,
        weather: Optional[OpenMeteoClient] = None,
    ):
        self.repo = RecordRepository(db)
        self.geocoder = geocoder or GeocodingClient()
        self.weather = weather or OpenMeteoClient()

    async def _fetch_summary(
        self,
        location: str,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> Tuple[ResolvedLocation, DateRange, Summary, DailySeries]:
        if not location or not location.strip():
            raise ValidationError("Please enter a location")
        validate_date_range(start_date, end_date)

        date_range = DateRange(start_date=start_date, end_date=end_date)
        resolved = await self.geocoder.resolve(location)
        daily = await self.weather.fetch_historical(
            resolved.latitude, resolved.longitude, date_range.start_date, date_range.end_date
        )
        return resolved, date_range, summarize(daily), daily

    async def save(self, location: str, start_date: Optional[date], end_date: Optional[date]) -> WeatherRecord:
        resolved, date_range, summary, daily = await self._fetch_summary(location, start_date, end_date)
        return await self.repo.create(resolved, date_range, summary, daily)

    async def edit(
        self,
        record_id: str,
        location: str,
        start_date: Optional[date],
        end_date: Optional[date],
    ) -> WeatherRecord:
        # Fail fast on an unknown id before calling the upstream services.
        await self.repo.get(record_id)
        resolved, date_range, summary, daily = await self._fetch_summary(location, start_date, end_date)
        return await self.repo.update(record_id, resolved, date_range, summary, daily)

    async def remove(self, record_id: str) -> bool:
        return await self.repo.delete(record_id)

    async def list_records(self) -> LoadResult:
        return await self.repo.load_all()

    async def detail(self, record_id: str) -> WeatherRecord:
        return await self.repo.get(record_id)

    async def export(self, fmt: str) -> ExportResult:
        records, _ = await self.repo.load_all()
        return export_records(records, fmt)
