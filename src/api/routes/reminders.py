"""
Reminder management endpoints.
"""

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_reminder_runtime
from src.application.dto.requests import CreateReminderRequest
from src.application.dto.responses import (
    ErrorResponse,
    ReminderListResponse,
    ReminderResponse,
)
from src.application.runtime import ReminderRuntime
from src.core.entities.reminder import Reminder

router = APIRouter(prefix="/api/reminders", tags=["reminders"])


def _list_response(reminders: list[Reminder], threshold: int) -> ReminderListResponse:
    return ReminderListResponse(
        reminders=[ReminderResponse.from_entity(r, threshold) for r in reminders],
        total=len(reminders),
        low_stock_threshold=threshold,
    )


@router.post(
    "",
    response_model=ReminderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_reminder(
    request: CreateReminderRequest,
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> ReminderResponse:
    """Add a reminder. It starts active with no trigger marker."""
    reminder = await runtime.add_reminder(request.to_spec())
    return ReminderResponse.from_entity(reminder, runtime.low_stock_threshold)


@router.get("", response_model=ReminderListResponse)
async def list_reminders(
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> ReminderListResponse:
    """List reminders in the order they were added."""
    return _list_response(runtime.list_reminders(), runtime.low_stock_threshold)


@router.get("/low-stock", response_model=ReminderListResponse)
async def list_low_stock(
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> ReminderListResponse:
    """List reminders with only a few doses left."""
    return _list_response(runtime.low_stock(), runtime.low_stock_threshold)


@router.get(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_reminder(
    reminder_id: str,
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> ReminderResponse:
    """Get a reminder by ID."""
    reminder = runtime.get_reminder(reminder_id)
    return ReminderResponse.from_entity(reminder, runtime.low_stock_threshold)


@router.delete(
    "/{reminder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_reminder(
    reminder_id: str,
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> Response:
    """Delete a reminder by ID."""
    await runtime.remove_reminder(reminder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
