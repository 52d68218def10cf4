"""Alarm side-effect implementations."""

from src.infrastructure.alarm.logging_signal import LoggingAlarmSignal

__all__ = ["LoggingAlarmSignal"]
