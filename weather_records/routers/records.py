from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from weather_records.core.db import get_db, get_session_state
from weather_records.core.state import SessionState
from weather_records.schemas.records import RecordListResponse, RecordRequest, WeatherRecord
from weather_records.services.record_service import RecordService

router = APIRouter(prefix="/records", tags=["Records"])


@router.get(
    "",
    response_model=RecordListResponse,
    summary="List saved records",
    description=(
        "Returns all saved records, most recently saved or edited first. "
        "An unreadable store is reported as an empty list with `storage = corrupt`."
    ),
)
async def list_records(db: AsyncSession = Depends(get_db)):
    records, outcome = await RecordService(db).list_records()
    return RecordListResponse(items=records, total=len(records), storage=outcome)


@router.post(
    "",
    response_model=WeatherRecord,
    status_code=201,
    summary="Save a historical weather summary",
    description=(
        "Resolves the location, fetches archived daily weather for the inclusive date range "
        "and stores the averaged summary together with the daily series.\n\n"
        "The range must end no later than today and span at most one year."
    ),
)
async def create_record(
    payload: RecordRequest,
    db: AsyncSession = Depends(get_db),
    session: SessionState = Depends(get_session_state),
):
    session.begin(location=payload.location)
    return await RecordService(db).save(payload.location, payload.start_date, payload.end_date)


@router.get(
    "/{record_id}",
    response_model=WeatherRecord,
    summary="Record details",
)
async def get_record(
    record_id: str,
    db: AsyncSession = Depends(get_db),
    session: SessionState = Depends(get_session_state),
):
    session.begin()
    record = await RecordService(db).detail(record_id)
    session.selected_record_id = record.id
    return record


@router.put(
    "/{record_id}",
    response_model=WeatherRecord,
    summary="Edit a saved record",
    description=(
        "Re-resolves the (possibly edited) location text, refetches the archive for the new "
        "range and replaces the stored summary. The record keeps its id."
    ),
)
async def update_record(
    record_id: str,
    payload: RecordRequest,
    db: AsyncSession = Depends(get_db),
    session: SessionState = Depends(get_session_state),
):
    session.begin()
    session.editing_record_id = record_id
    record = await RecordService(db).edit(record_id, payload.location, payload.start_date, payload.end_date)
    session.editing_record_id = None
    return record


@router.delete(
    "/{record_id}",
    status_code=204,
    summary="Delete a saved record",
    description="Deleting an unknown id is a no-op.",
)
async def delete_record(
    record_id: str,
    db: AsyncSession = Depends(get_db),
    session: SessionState = Depends(get_session_state),
):
    session.begin()
    await RecordService(db).remove(record_id)
    session.forget_record(record_id)
    return Response(status_code=204)
