"""Bulk import of loosely shaped spreadsheet rows."""

from __future__ import annotations

import logging
import re
import unicodedata
from collections.abc import Callable, Sequence
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from skill_tracker.exceptions import NotFoundError, SkillTrackerError
from skill_tracker.models.skill import Skill
from skill_tracker.models.team_member import TeamMember
from skill_tracker.schemas.imports import ImportKind, ImportResult, ImportRowError
from skill_tracker.schemas.skill import SkillCreate
from skill_tracker.schemas.skill_rating import MAX_LEVEL, MIN_LEVEL, SkillLevel, SkillRatingCreate
from skill_tracker.schemas.team_member import TeamMemberCreate
from skill_tracker.services.store import SkillStore
from skill_tracker.services.weeks import parse_timestamp, utcnow

logger = logging.getLogger(__name__)

# Header aliases per field, in normalized form (lowercase alphanumerics)
MEMBER_FIELDS: dict[str, tuple[str, ...]] = {
    "name": ("name", "fullname", "teammembername"),
    "role": ("role", "position", "title"),
    "department": ("department", "dept", "team"),
    "email": ("email", "emailaddress", "mail"),
}
SKILL_FIELDS: dict[str, tuple[str, ...]] = {
    "name": ("name", "skill", "skillname"),
    "category": ("category", "skillcategory"),
    "description": ("description", "details"),
}
RATING_MEMBER_ID = ("teammemberid", "memberid")
RATING_MEMBER_NAME = ("teammembername", "membername", "name", "member")
RATING_SKILL_ID = ("skillid",)
RATING_SKILL_NAME = ("skillname", "skill")
RATING_LEVEL = ("level", "skilllevel", "rating")
RATING_WEEK = ("weekof", "week", "date")

# Keyword -> level for textual level cells, checked in order
_LEVEL_KEYWORDS: tuple[tuple[tuple[str, ...], SkillLevel], ...] = (
    (("unknown", "none"), SkillLevel.UNKNOWN),
    (("basic", "beginner"), SkillLevel.BASIC_KNOWLEDGE),
    (("hands", "experienced", "intermediate"), SkillLevel.HANDS_ON_EXPERIENCE),
    (("expert", "advanced"), SkillLevel.EXPERT),
)


def normalize_header(header: Any) -> str:
    """
    Normalize a column header for alias matching.

    Examples:
        >>> normalize_header("Team Member Id")
        'teammemberid'
        >>> normalize_header("week_of")
        'weekof'
    """
    if header is None:
        return ""
    text = unicodedata.normalize("NFKD", str(header))
    text = "".join(ch for ch in text if unicodedata.category(ch) != "Mn")
    return re.sub(r"[^a-z0-9]", "", text.lower())


def normalize_row(row: dict[str, Any]) -> dict[str, Any]:
    """Re-key a row by normalized header, dropping empty cells."""
    normalized: dict[str, Any] = {}
    for key, value in row.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        normalized.setdefault(normalize_header(key), value)
    return normalized


def _pick(row: dict[str, Any], aliases: Sequence[str]) -> Any:
    for alias in aliases:
        if alias in row:
            return row[alias]
    return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip()


def parse_level(value: Any) -> int:
    """
    Parse a level cell into an integer in 0-3.

    Textual labels are matched by keyword, numbers are parsed and clamped,
    anything else counts as Unknown.

    Examples:
        >>> parse_level("Expert")
        3
        >>> parse_level("Hands-on Experience")
        2
        >>> parse_level(7)
        3
        >>> parse_level("n/a")
        0
    """
    if value is None or isinstance(value, bool):
        return int(SkillLevel.UNKNOWN)
    if isinstance(value, (int, float)):
        try:
            level = int(value)
        except (ValueError, OverflowError):
            return int(SkillLevel.UNKNOWN)
    else:
        text = str(value).strip().lower()
        for keywords, keyword_level in _LEVEL_KEYWORDS:
            if any(k in text for k in keywords):
                return int(keyword_level)
        try:
            level = int(float(text))
        except (ValueError, OverflowError):
            return int(SkillLevel.UNKNOWN)
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def _parse_id(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None


def _describe(error: Exception) -> str:
    if isinstance(error, ValidationError):
        parts = []
        for detail in error.errors():
            field = ".".join(str(p) for p in detail.get("loc", ())) or "row"
            parts.append(f"{field}: {detail.get('msg', 'invalid value')}")
        return "; ".join(parts)
    return str(error)


class RowImporter:
    """
    Import rows of team members, skills or ratings.

    Rows are independent: each successful row is committed on its own and
    a failing row is recorded with its 1-based number while the batch
    continues.
    """

    def __init__(self, store: SkillStore) -> None:
        """
        Initialize the importer.

        Args:
            store: Entity store that receives the rows
        """
        self.store = store

    def import_rows(self, kind: ImportKind, rows: Sequence[dict[str, Any]]) -> ImportResult:
        """Dispatch rows to the importer for ``kind``."""
        handlers: dict[ImportKind, Callable[[Sequence[dict[str, Any]]], ImportResult]] = {
            ImportKind.TEAM_MEMBERS: self.import_team_members,
            ImportKind.SKILLS: self.import_skills,
            ImportKind.SKILL_RATINGS: self.import_skill_ratings,
        }
        return handlers[kind](rows)

    def import_team_members(self, rows: Sequence[dict[str, Any]]) -> ImportResult:
        """Create one team member per row."""
        return self._run("team members", rows, self._import_member)

    def import_skills(self, rows: Sequence[dict[str, Any]]) -> ImportResult:
        """Create one skill per row."""
        return self._run("skills", rows, self._import_skill)

    def import_skill_ratings(self, rows: Sequence[dict[str, Any]]) -> ImportResult:
        """
        Create one rating per row.

        Members and skills are resolved by id or by case-insensitive name.
        Textual levels are mapped by keyword. A missing or unreadable week
        defaults to the current time.
        """
        return self._run("skill ratings", rows, self._import_rating)

    def _run(
        self,
        label: str,
        rows: Sequence[dict[str, Any]],
        handler: Callable[[dict[str, Any]], object],
    ) -> ImportResult:
        success = 0
        errors: list[ImportRowError] = []
        for index, row in enumerate(rows):
            try:
                if not isinstance(row, dict):
                    raise ValueError("Row must be an object")
                handler(normalize_row(row))
                success += 1
            except (ValidationError, SkillTrackerError, ValueError, OverflowError) as e:
                self.store.db.rollback()
                errors.append(ImportRowError(row=index + 1, message=_describe(e)))
                logger.warning("Import %s row %d failed: %s", label, index + 1, _describe(e))
            except SQLAlchemyError as e:
                self.store.db.rollback()
                errors.append(ImportRowError(row=index + 1, message="Database error"))
                logger.warning("Import %s row %d database error: %s", label, index + 1, e)

        logger.info("Imported %d %s with %d errors", success, label, len(errors))
        return ImportResult(
            message=f"Imported {success} {label} successfully with {len(errors)} errors.",
            success=success,
            errors=errors,
        )

    def _import_member(self, row: dict[str, Any]) -> TeamMember:
        data = TeamMemberCreate(
            **{field: _text(_pick(row, aliases)) for field, aliases in MEMBER_FIELDS.items()}
        )
        return self.store.create_team_member(data)

    def _import_skill(self, row: dict[str, Any]) -> Skill:
        data = SkillCreate(
            **{field: _text(_pick(row, aliases)) for field, aliases in SKILL_FIELDS.items()}
        )
        return self.store.create_skill(data)

    def _resolve_member(self, row: dict[str, Any]) -> TeamMember:
        member_id = _parse_id(_pick(row, RATING_MEMBER_ID))
        if member_id is not None:
            member = self.store.get_team_member(member_id)
            if member:
                return member
        name = _text(_pick(row, RATING_MEMBER_NAME))
        if name:
            member = self.store.find_team_member_by_name(name)
            if member:
                return member
        raise NotFoundError("Team member not found")

    def _resolve_skill(self, row: dict[str, Any]) -> Skill:
        skill_id = _parse_id(_pick(row, RATING_SKILL_ID))
        if skill_id is not None:
            skill = self.store.get_skill(skill_id)
            if skill:
                return skill
        name = _text(_pick(row, RATING_SKILL_NAME))
        if name:
            skill = self.store.find_skill_by_name(name)
            if skill:
                return skill
        raise NotFoundError("Skill not found")

    def _import_rating(self, row: dict[str, Any]):
        member = self._resolve_member(row)
        skill = self._resolve_skill(row)
        data = SkillRatingCreate(
            team_member_id=member.id,
            skill_id=skill.id,
            level=parse_level(_pick(row, RATING_LEVEL)),
            week_of=parse_timestamp(_pick(row, RATING_WEEK)) or utcnow(),
        )
        return self.store.create_skill_rating(data)
