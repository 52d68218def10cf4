"""Clock implementations."""

from src.infrastructure.clock.system import FixedClock, SystemClock

__all__ = ["SystemClock", "FixedClock"]
