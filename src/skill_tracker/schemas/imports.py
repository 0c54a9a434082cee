"""Bulk import Pydantic schemas."""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class ImportKind(str, Enum):
    """Entity kinds accepted by the bulk importer."""

    TEAM_MEMBERS = "team-members"
    SKILLS = "skills"
    SKILL_RATINGS = "skill-ratings"


class ImportRequest(BaseModel):
    """
    Schema for a JSON bulk import (rows as parsed from a spreadsheet).

    ``data`` is left untyped; the router rejects anything but a non-empty
    list and the importer reports non-object rows one by one.
    """

    data: Any = None


class ImportRowError(BaseModel):
    """Failure for a single row (1-based row number)."""

    row: int
    message: str


class ImportResult(BaseModel):
    """Per-batch tally of imported rows and row errors."""

    message: str
    success: int
    errors: list[ImportRowError]
