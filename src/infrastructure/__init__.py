"""Infrastructure layer implementations."""

from src.infrastructure import alarm, clock, storage

__all__ = ["storage", "clock", "alarm"]
