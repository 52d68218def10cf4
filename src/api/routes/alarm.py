"""
Alarm endpoints.

The alarm rings from the tick loop; clients poll GET /api/alarm and resolve
it with dismiss or snooze. Resolving when nothing rings is not an error.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_reminder_runtime
from src.application.dto.responses import (
    AlarmStatusResponse,
    HistoryEntryResponse,
    ResolveAlarmResponse,
)
from src.application.runtime import ReminderRuntime
from src.core.entities.history import HistoryEntry

router = APIRouter(prefix="/api/alarm", tags=["alarm"])


def _resolution(runtime: ReminderRuntime, entry: HistoryEntry | None) -> ResolveAlarmResponse:
    return ResolveAlarmResponse(
        resolved=entry is not None,
        entry=HistoryEntryResponse.from_entity(entry) if entry is not None else None,
        alarm=AlarmStatusResponse.from_status(runtime.alarm_status()),
    )


@router.get("", response_model=AlarmStatusResponse)
async def get_alarm_status(
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> AlarmStatusResponse:
    """Current alarm state."""
    return AlarmStatusResponse.from_status(runtime.alarm_status())


@router.post("/dismiss", response_model=ResolveAlarmResponse)
async def dismiss_alarm(
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> ResolveAlarmResponse:
    """Mark the ringing dose as taken."""
    entry = await runtime.dismiss()
    return _resolution(runtime, entry)


@router.post("/snooze", response_model=ResolveAlarmResponse)
async def snooze_alarm(
    runtime: ReminderRuntime = Depends(get_reminder_runtime),
) -> ResolveAlarmResponse:
    """Postpone the ringing reminder by its snooze duration."""
    entry = await runtime.snooze()
    return _resolution(runtime, entry)
