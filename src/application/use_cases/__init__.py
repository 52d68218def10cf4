"""Application use cases."""

from src.application.use_cases.export_data import ExportDataUseCase, ExportResult
from src.application.use_cases.import_data import ImportDataUseCase, ImportResult

__all__ = [
    "ExportDataUseCase",
    "ExportResult",
    "ImportDataUseCase",
    "ImportResult",
]
