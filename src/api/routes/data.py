"""
Backup export/import endpoints.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.api.dependencies import get_export_data_use_case, get_import_data_use_case
from src.application.dto.responses import ErrorResponse, ImportDataResponse
from src.application.use_cases import ExportDataUseCase, ImportDataUseCase

router = APIRouter(prefix="/api/data", tags=["data"])


@router.get("/export")
async def export_data(
    use_case: ExportDataUseCase = Depends(get_export_data_use_case),
) -> JSONResponse:
    """Download reminders and history as one JSON document."""
    result = use_case.execute()
    return JSONResponse(
        content=result.document,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.post(
    "/import",
    response_model=ImportDataResponse,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def import_data(
    request: Request,
    use_case: ImportDataUseCase = Depends(get_import_data_use_case),
) -> ImportDataResponse:
    """
    Restore from an exported document.

    The raw body is decoded here so malformed JSON is reported as PARSE_ERROR.
    """
    body = await request.body()
    result = await use_case.execute(body)
    return ImportDataResponse(
        reminders_replaced=result.reminders_replaced,
        history_replaced=result.history_replaced,
        reminder_count=result.reminder_count,
        history_count=result.history_count,
    )
