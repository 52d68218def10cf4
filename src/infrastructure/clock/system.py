"""
Wall clock for the scheduler.

The clock returns aware datetimes in local time: the configured zone or the
host's own. Reminder matching reads only the wall-clock fields, while
history entries keep the offset and stay placeable on a timeline.
"""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from src.core.interfaces.clock import IClock


class SystemClock(IClock):
    """Reads the system time, optionally in a named timezone."""

    def __init__(self, timezone: str | None = None):
        self._tz = ZoneInfo(timezone) if timezone else None

    @property
    def timezone(self) -> str | None:
        return self._tz.key if self._tz is not None else None

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now().astimezone()
        return datetime.now(self._tz)


class FixedClock(IClock):
    """Manually driven clock for tests and dry runs."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def set(self, moment: datetime) -> None:
        self.moment = moment

    def advance(self, minutes: int = 0, days: int = 0) -> datetime:
        self.moment += timedelta(days=days, minutes=minutes)
        return self.moment
