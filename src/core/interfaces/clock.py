"""Clock contract: the host's only source of time."""

from abc import ABC, abstractmethod
from datetime import datetime


class IClock(ABC):
    """Abstract interface for reading the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """
        Current instant at minute resolution or finer.

        Wall-clock fields are local time; implementations return an aware
        datetime so history timestamps carry their UTC offset.
        """
        pass
