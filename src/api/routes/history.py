"""
History endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import get_reminder_runtime
from src.application.dto.responses import (
    ClearHistoryResponse,
    ErrorResponse,
    HistoryEntryResponse,
    HistoryListResponse,
)
from src.application.runtime import ReminderRuntime

router = APIRouter(prefix="/api/history", tags=["history"])


@router.get("", response_model=HistoryListResponse)
async def list_history(
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> HistoryListResponse:
    """List dismiss and snooze events, oldest first."""
    entries = runtime.list_history()
    return HistoryListResponse(
        entries=[HistoryEntryResponse.from_entity(e) for e in entries],
        total=len(entries),
    )


@router.delete(
    "",
    response_model=ClearHistoryResponse,
    responses={400: {"model": ErrorResponse}},
)
async def clear_history(
    confirm: bool = Query(default=False, description="Must be true to clear"),
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> ClearHistoryResponse:
    """Delete the whole history. Requires ?confirm=true."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Clearing history requires confirm=true",
        )
    cleared = await runtime.clear_history()
    return ClearHistoryResponse(cleared=cleared)
