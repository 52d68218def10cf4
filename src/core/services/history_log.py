"""Append-only log of alarm resolutions."""

from __future__ import annotations

from collections.abc import Iterable

from src.config import get_logger
from src.core.entities.history import HistoryEntry

logger = get_logger(__name__)


class HistoryLog:
    """Chronological sequence of dismiss/snooze entries."""

    def __init__(self, entries: Iterable[HistoryEntry] | None = None) -> None:
        self._entries: list[HistoryEntry] = list(entries or [])

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)

    def list(self) -> list[HistoryEntry]:
        return list(self._entries)

    def clear(self) -> int:
        """Drop every entry. Returns how many were removed."""
        removed = len(self._entries)
        self._entries = []
        logger.info("history_cleared", removed=removed)
        return removed

    def replace_all(self, entries: Iterable[HistoryEntry]) -> None:
        self._entries = list(entries)
