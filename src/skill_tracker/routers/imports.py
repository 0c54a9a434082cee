"""Bulk import API router - JSON rows, xlsx uploads and templates."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile

from skill_tracker.config import import_config
from skill_tracker.deps import get_row_importer
from skill_tracker.schemas.imports import ImportKind, ImportRequest, ImportResult
from skill_tracker.services.importer import RowImporter
from skill_tracker.services.spreadsheet import XLSX_MEDIA_TYPE, build_template, read_rows
from skill_tracker.utils.slug import export_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/import")

ALLOWED_SUFFIXES = {".xlsx", ".xlsm"}


def _check_row_count(count: int) -> None:
    if count > import_config.max_rows:
        raise HTTPException(
            status_code=413,
            detail=f"Too many rows: {count} (max {import_config.max_rows})",
        )


@router.post("/{kind}", response_model=ImportResult)
def import_rows(
    kind: ImportKind,
    request: ImportRequest,
    importer: RowImporter = Depends(get_row_importer),
) -> ImportResult:
    """
    Import rows already parsed from a spreadsheet.

    Raises:
        HTTPException 400: If ``data`` is missing, empty or not a list.
        HTTPException 413: If the batch exceeds the configured row limit.
    """
    if not isinstance(request.data, list) or not request.data:
        raise HTTPException(status_code=400, detail="No data provided")
    _check_row_count(len(request.data))
    return importer.import_rows(kind, request.data)


@router.post("/{kind}/file", response_model=ImportResult)
def import_file(
    kind: ImportKind,
    file: UploadFile = File(...),
    importer: RowImporter = Depends(get_row_importer),
) -> ImportResult:
    """
    Import the first worksheet of an uploaded xlsx workbook.

    Raises:
        HTTPException 400: If the file is not an xlsx workbook or has no rows.
        HTTPException 413: If the file or its row count exceeds the limits.
        SpreadsheetError (422): If the workbook cannot be read.
    """
    suffix = Path(file.filename or "").suffix.lower()
    if suffix not in ALLOWED_SUFFIXES:
        raise HTTPException(status_code=400, detail="Only .xlsx files are supported")

    max_bytes = import_config.max_upload_mb * 1024 * 1024
    content = file.file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=413, detail=f"Max upload size is {import_config.max_upload_mb}MB"
        )

    rows = read_rows(content)
    if not rows:
        raise HTTPException(status_code=400, detail="No data provided")
    _check_row_count(len(rows))

    logger.info("Importing %d %s rows from %s", len(rows), kind.value, file.filename)
    return importer.import_rows(kind, rows)


@router.get("/templates/{kind}")
def download_template(kind: ImportKind) -> Response:
    """Download an example workbook for an import kind."""
    filename = export_filename(f"{kind.value} template")
    return Response(
        content=build_template(kind),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
