"""
Abstract interfaces for storage providers.

Defines the persistence contracts for reminders and history. Both are
whole-collection stores: ``load`` returns everything in order (empty on first
run), ``save`` replaces everything.
"""

from abc import ABC, abstractmethod

from src.core.entities.history import HistoryEntry
from src.core.entities.reminder import Reminder


class IReminderRepository(ABC):
    """Abstract interface for reminder persistence."""

    @abstractmethod
    async def load(self) -> list[Reminder]:
        """
        Load all reminders in store order.

        Raises:
            ParseError: If a persisted record is corrupt.
        """
        pass

    @abstractmethod
    async def save(self, reminders: list[Reminder]) -> None:
        """Replace the persisted collection with reminders."""
        pass


class IHistoryRepository(ABC):
    """Abstract interface for history persistence."""

    @abstractmethod
    async def load(self) -> list[HistoryEntry]:
        """
        Load all history entries in chronological order.

        Raises:
            ParseError: If a persisted record is corrupt.
        """
        pass

    @abstractmethod
    async def save(self, entries: list[HistoryEntry]) -> None:
        """Replace the persisted history with entries."""
        pass

    @abstractmethod
    async def append(self, entry: HistoryEntry) -> None:
        """Persist one new entry at the end of the history."""
        pass
