"""Alarm state exposed to the host."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class AlarmState(str, Enum):
    """Alarm controller states."""

    IDLE = "idle"
    RINGING = "ringing"


class AlarmStatus(BaseModel):
    """Snapshot of the single alarm slot."""

    state: AlarmState = AlarmState.IDLE
    reminder_id: str | None = None
    reminder_name: str | None = None
    message: str | None = None
    since: datetime | None = None

    @property
    def is_ringing(self) -> bool:
        return self.state == AlarmState.RINGING
