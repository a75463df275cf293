from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from weather_records.core.db import get_db, get_session_state
from weather_records.core.state import SessionState
from weather_records.services.record_service import RecordService

router = APIRouter(prefix="/exports", tags=["Export"])


@router.get(
    "/{export_format}",
    summary="Export saved records",
    description=(
        "Downloads all saved records as `json`, `csv`, `xml` or `markdown`. "
        "Only `json` includes the daily series.\n\n"
        "When nothing is saved the response is a JSON notice instead of a file."
    ),
)
async def export_records(
    export_format: str,
    db: AsyncSession = Depends(get_db),
    session: SessionState = Depends(get_session_state),
):
    session.begin()
    result = await RecordService(db).export(export_format)

    if result.is_empty:
        return JSONResponse(status_code=200, content={"detail": result.notice})

    return Response(
        content=result.content,
        media_type=result.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )
