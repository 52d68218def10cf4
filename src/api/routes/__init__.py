"""API route modules."""

from src.api.routes.alarm import router as alarm_router
from src.api.routes.data import router as data_router
from src.api.routes.health import router as health_router
from src.api.routes.history import router as history_router
from src.api.routes.reminders import router as reminders_router

__all__ = [
    "health_router",
    "reminders_router",
    "alarm_router",
    "history_router",
    "data_router",
]
