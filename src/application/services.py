"""
Service factory functions for dependency injection.

This module provides the process-wide ReminderRuntime that wires the
infrastructure implementations to the scheduling core. API handlers and
use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from src.application.runtime import ReminderRuntime

# Singleton runtime instance
_runtime: ReminderRuntime | None = None


def get_runtime() -> ReminderRuntime:
    """
    Get or create the ReminderRuntime instance.

    Creates infrastructure dependencies from settings. The lifespan handler
    calls ``start()`` before the first request.

    Returns:
        The process-wide ReminderRuntime
    """
    global _runtime
    if _runtime is None:
        _runtime = ReminderRuntime()
    return _runtime


def set_runtime(runtime: ReminderRuntime | None) -> None:
    """Install a preconfigured runtime (tests, alternative hosts)."""
    global _runtime
    _runtime = runtime


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _runtime
    _runtime = None


__all__ = [
    # Factory functions
    "get_runtime",
    "set_runtime",
    # Reset
    "reset_services",
]
