"""
Side-effect contract invoked when an alarm starts and stops.

Implementations make noise, speak, or show a message. None of them may block
the alarm state machine; failures are reported by raising and the caller
falls back to ``show_alarm_message``.
"""

from abc import ABC, abstractmethod

from src.core.entities.reminder import Reminder


class IAlarmSignal(ABC):
    """Abstract interface for alarm side effects."""

    @property
    def supports_speech(self) -> bool:
        """Whether ``announce`` actually speaks on this host."""
        return False

    @abstractmethod
    def start_alarm_signal(self, reminder: Reminder) -> None:
        """Start ringing for reminder."""
        pass

    @abstractmethod
    def stop_alarm_signal(self) -> None:
        """Stop ringing and any ongoing speech."""
        pass

    def announce(self, text: str) -> None:
        """Speak text. Hosts without speech keep this no-op."""
        return None

    @abstractmethod
    def show_alarm_message(self, text: str) -> None:
        """Make text visible to the user."""
        pass
