"""Spreadsheet reading, import templates and matrix export (openpyxl)."""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from skill_tracker.exceptions import SpreadsheetError
from skill_tracker.schemas.dashboard import SkillMatrix
from skill_tracker.schemas.imports import ImportKind
from skill_tracker.schemas.skill_rating import SkillLevel

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

TEMPLATES: dict[ImportKind, dict[str, Any]] = {
    ImportKind.TEAM_MEMBERS: {
        "headers": ["name", "role", "department", "email"],
        "rows": [
            ["Alex Johnson", "Frontend Developer", "Engineering", "alex@example.com"],
            ["Jamie Williams", "Backend Developer", "Engineering", "jamie@example.com"],
        ],
        "instructions": [
            "One team member per row.",
            "All four columns are required. Email must be unique.",
        ],
    },
    ImportKind.SKILLS: {
        "headers": ["name", "category", "description"],
        "rows": [
            ["React.js", "Frontend Development", "JavaScript library for building user interfaces"],
            ["Docker", "DevOps", "Platform for containerized applications"],
        ],
        "instructions": [
            "One skill per row.",
            "Name and category are required. Names must be unique.",
        ],
    },
    ImportKind.SKILL_RATINGS: {
        "headers": ["teamMemberName", "skillName", "level", "weekOf"],
        "rows": [
            ["Alex Johnson", "React.js", 3, "2024-05-12"],
            ["Jamie Williams", "Docker", "Hands-on Experience", "2024-05-12"],
        ],
        "instructions": [
            "One rating per row.",
            "Members and skills may be given by id (teamMemberId, skillId) or by name.",
            "Level is 0-3 or a label: Unknown, Basic Knowledge, Hands-on Experience, Expert.",
            "weekOf is any date in the rated week. Empty means the current week.",
        ],
    },
}


def _autosize(ws):
    for column_cells in ws.columns:
        length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column_cells)
        ws.column_dimensions[get_column_letter(column_cells[0].column)].width = min(max(length + 2, 12), 60)


def _to_bytes(wb: Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def read_rows(content: bytes) -> list[dict[str, Any]]:
    """
    Read the first worksheet of an xlsx workbook into row dictionaries.

    The first row holds the headers. Blank rows are skipped and empty
    cells are left out of their row.

    Args:
        content: Raw workbook bytes

    Returns:
        One dictionary per data row, keyed by header

    Raises:
        SpreadsheetError: If the content is not a readable workbook
    """
    try:
        wb = load_workbook(BytesIO(content), data_only=True, read_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError, ValueError) as e:
        raise SpreadsheetError(f"Could not read workbook: {e}") from e

    try:
        ws = wb.worksheets[0] if wb.worksheets else None
        if ws is None:
            return []
        rows = list(ws.iter_rows(values_only=True))
    finally:
        wb.close()

    if not rows:
        return []

    headers = [str(h).strip() if h is not None else "" for h in rows[0]]
    records: list[dict[str, Any]] = []
    for row in rows[1:]:
        if all(cell is None or str(cell).strip() == "" for cell in row):
            continue
        record = {h: v for h, v in zip(headers, row) if h and v is not None}
        records.append(record)

    logger.info("Read %d rows from workbook", len(records))
    return records


def build_template(kind: ImportKind) -> bytes:
    """
    Build a template workbook for an import kind.

    The first sheet holds the headers and example rows, the second the
    instructions.
    """
    template = TEMPLATES[kind]
    wb = Workbook()
    ws = wb.active
    ws.title = "Template"
    ws.append(template["headers"])
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in template["rows"]:
        ws.append(row)
    _autosize(ws)

    ws_help = wb.create_sheet("Instructions")
    ws_help.append(["Instructions"])
    ws_help["A1"].font = Font(bold=True)
    for line in template["instructions"]:
        ws_help.append([line])
    _autosize(ws_help)

    return _to_bytes(wb)


def export_matrix(matrix: SkillMatrix) -> bytes:
    """
    Export a weekly skill matrix as a workbook.

    Sheet "Skill Matrix" has one row per member and one level column per
    skill; sheet "Legend" lists the level labels.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Skill Matrix"
    ws.append(["Team Member", "Role", "Department"] + [s.name for s in matrix.skills])
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for member in matrix.team_members:
        levels = {cell.skill_id: cell.level for cell in member.skills}
        ws.append(
            [member.team_member_name, member.role, member.department]
            + [levels.get(s.id, int(SkillLevel.UNKNOWN)) for s in matrix.skills]
        )
    _autosize(ws)

    ws_legend = wb.create_sheet("Legend")
    ws_legend.append(["Level", "Label"])
    for cell in ws_legend[1]:
        cell.font = Font(bold=True)
    for level in SkillLevel:
        ws_legend.append([int(level), level.label])
    ws_legend.append([])
    ws_legend.append(["Week starting", matrix.week_start.isoformat()])
    _autosize(ws_legend)

    return _to_bytes(wb)
