import asyncio
import logging
import secrets
import string
import time
from datetime import datetime, timezone
from typing import List, NamedTuple, Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from weather_records.core.config import settings
from weather_records.core.errors import NotFoundError
from weather_records.models.storage_slot import StorageSlot
from weather_records.schemas.records import (
    DailySeries,
    DateRange,
    LoadOutcome,
    ResolvedLocation,
    Summary,
    WeatherRecord,
)

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(List[WeatherRecord])

# Serializes read-modify-write cycles on the collection within this process.
_collection_lock = asyncio.Lock()

_ID_ALPHABET = string.ascii_lowercase + string.digits


class LoadResult(NamedTuple):
    records: List[WeatherRecord]
    outcome: LoadOutcome


def new_record_id() -> str:
    """
    Return `weather_{epoch millis}_{9 random base36 chars}`.
    """
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"weather_{int(time.time() * 1000)}_{suffix}"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def sort_by_recency(records: List[WeatherRecord]) -> List[WeatherRecord]:
    return sorted(records, key=lambda r: r.saved_at, reverse=True)


class RecordRepository:
    """
    Repository for the saved weather record collection.

    The whole collection is stored as one JSON document in a named
    `StorageSlot` and every mutation rewrites it entirely. Reads never fail
    the caller: a missing slot yields an empty collection, an undecodable
    one yields an empty collection tagged `LoadOutcome.CORRUPT`.
    """

    def __init__(self, db: AsyncSession, slot: Optional[str] = None):
        """
        Initialize the repository with an active database session.

        Args:
            db: Asynchronous SQLAlchemy session.
            slot: Storage slot name; defaults to `STORAGE_SLOT`.
        """
        self.db = db
        self.slot = slot or settings.storage_slot

    # ------------------------------------------------------------------
    # Storage slot I/O
    # ------------------------------------------------------------------

    async def _read_slot(self) -> Optional[str]:
        slot = await self.db.get(StorageSlot, self.slot)
        return slot.payload if slot else None

    async def _write_slot(self, records: List[WeatherRecord]) -> None:
        payload = _records_adapter.dump_json(records, by_alias=True).decode("utf-8")

        slot = await self.db.get(StorageSlot, self.slot)
        if slot is None:
            slot = StorageSlot(name=self.slot)
            self.db.add(slot)
        slot.payload = payload
        slot.updated_at = _now()

        await self.db.commit()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def load_all(self) -> LoadResult:
        """
        Return the stored collection, most recently saved first.
        """
        try:
            payload = await self._read_slot()
        except SQLAlchemyError as e:
            logger.warning("Record store unreadable (slot %s): %s", self.slot, e)
            await self.db.rollback()
            return LoadResult([], LoadOutcome.CORRUPT)

        if not payload:
            return LoadResult([], LoadOutcome.EMPTY)

        try:
            records = _records_adapter.validate_json(payload)
        except PydanticValidationError as e:
            logger.warning("Record store corrupt (slot %s), treating as empty: %s", self.slot, e)
            return LoadResult([], LoadOutcome.CORRUPT)

        return LoadResult(sort_by_recency(records), LoadOutcome.OK)

    async def get(self, record_id: str) -> WeatherRecord:
        records, _ = await self.load_all()
        for record in records:
            if record.id == record_id:
                return record
        raise NotFoundError(f"Record {record_id} not found")

    async def create(
        self,
        location: ResolvedLocation,
        date_range: DateRange,
        summary: Summary,
        daily: DailySeries,
    ) -> WeatherRecord:
        """
        Save a new record in front of the collection and persist it.
        """
        async with _collection_lock:
            records, _ = await self.load_all()

            record = WeatherRecord(
                id=new_record_id(),
                location=location.display_name,
                latitude=location.latitude,
                longitude=location.longitude,
                start_date=date_range.start_date,
                end_date=date_range.end_date,
                avg_max_temp=summary.avg_max_temp,
                avg_min_temp=summary.avg_min_temp,
                total_precipitation=summary.total_precipitation,
                daily_data=daily,
                saved_at=_now(),
            )

            await self._write_slot([record, *records])

        logger.info("Saved record %s for %s (%s..%s)", record.id, record.location, record.start_date, record.end_date)
        return record

    async def update(
        self,
        record_id: str,
        location: ResolvedLocation,
        date_range: DateRange,
        summary: Summary,
        daily: DailySeries,
    ) -> WeatherRecord:
        """
        Replace every mutable field of an existing record and persist.

        Raises:
            NotFoundError: no record has `record_id`.
        """
        async with _collection_lock:
            records, _ = await self.load_all()

            index = next((i for i, r in enumerate(records) if r.id == record_id), None)
            if index is None:
                raise NotFoundError(f"Record {record_id} not found")

            updated = records[index].model_copy(
                update={
                    "location": location.display_name,
                    "latitude": location.latitude,
                    "longitude": location.longitude,
                    "start_date": date_range.start_date,
                    "end_date": date_range.end_date,
                    "avg_max_temp": summary.avg_max_temp,
                    "avg_min_temp": summary.avg_min_temp,
                    "total_precipitation": summary.total_precipitation,
                    "daily_data": daily,
                    "saved_at": _now(),
                }
            )
            records[index] = updated

            await self._write_slot(sort_by_recency(records))

        logger.info("Updated record %s for %s (%s..%s)", updated.id, updated.location, updated.start_date, updated.end_date)
        return updated

    async def delete(self, record_id: str) -> bool:
        """
        Remove a record if present and persist the remainder.

        Returns:
            True if a record was removed. An unknown id is not an error.
        """
        async with _collection_lock:
            records, _ = await self.load_all()
            remaining = [r for r in records if r.id != record_id]
            await self._write_slot(remaining)

        removed = len(remaining) != len(records)
        if removed:
            logger.info("Deleted record %s", record_id)
        return removed
