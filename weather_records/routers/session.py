from fastapi import APIRouter, Depends

from weather_records.core.db import get_session_state
from weather_records.core.state import SessionState

router = APIRouter(tags=["Session"])


@router.get(
    "/session",
    response_model=SessionState,
    summary="Current session state",
    description="Last location queried, selected and edited record, and the latest error message.",
)
def get_session(session: SessionState = Depends(get_session_state)):
    return session
