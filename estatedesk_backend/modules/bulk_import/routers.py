"""Bulk spreadsheet import and export routes."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import ValidationError
from ...core.utils import utc_now
from ...database import get_db
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse
from . import services, spreadsheet
from .schemas import CombinedImportResult, ImportResult

router = APIRouter(tags=["Bulk Import"])

TemplateKind = Literal["properties", "tenants", "combined"]


async def _read_upload(request: Request, file: UploadFile | None) -> bytes:
    if file is None:
        raise ValidationError("No file uploaded")
    content = await file.read()
    services.check_upload(
        file.filename,
        file.content_type,
        len(content),
        request.app.state.settings.upload_max_bytes,
    )
    return content


def _xlsx_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=spreadsheet.XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/bulk-upload/properties", response_model=BaseResponse[ImportResult])
async def upload_properties(
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    file: Annotated[UploadFile | None, File()] = None,
):
    content = await _read_upload(request, file)
    result = await services.import_properties(db, current_user.id, content)
    return BaseResponse(
        success=True,
        message=f"Upload completed. {result.success_count} properties imported successfully.",
        data=result,
    )


@router.post("/bulk-upload/tenants", response_model=BaseResponse[ImportResult])
async def upload_tenants(
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    file: Annotated[UploadFile | None, File()] = None,
):
    content = await _read_upload(request, file)
    result = await services.import_tenants(db, current_user.id, content)
    return BaseResponse(
        success=True,
        message=f"Upload completed. {result.success_count} tenants imported successfully.",
        data=result,
    )


@router.post(
    "/bulk-upload/combined", response_model=BaseResponse[CombinedImportResult]
)
async def upload_combined(
    request: Request,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    file: Annotated[UploadFile | None, File()] = None,
):
    """Properties and their tenants from one sheet."""
    content = await _read_upload(request, file)
    result = await services.import_combined(db, current_user.id, content)
    return BaseResponse(
        success=True, message=services.combined_message(result), data=result
    )


@router.get("/bulk-upload/templates/{kind}")
async def download_template(kind: TemplateKind, current_user: CurrentUser):
    return _xlsx_response(spreadsheet.build_template(kind), f"{kind}_template.xlsx")


@router.get("/export")
async def export_data(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Download all of the caller's data as one workbook."""
    content = await services.export_workbook(db, current_user.id)
    filename = f"estatedesk-export-{utc_now():%Y%m%d}.xlsx"
    return _xlsx_response(content, filename)
