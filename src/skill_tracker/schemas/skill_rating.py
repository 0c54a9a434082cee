"""Skill rating Pydantic schemas."""

from datetime import datetime
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class SkillLevel(IntEnum):
    """Ordinal proficiency levels."""

    UNKNOWN = 0
    BASIC_KNOWLEDGE = 1
    HANDS_ON_EXPERIENCE = 2
    EXPERT = 3

    @property
    def label(self) -> str:
        """Human-readable label for the level."""
        return SKILL_LEVEL_LABELS[self]


SKILL_LEVEL_LABELS: dict[int, str] = {
    SkillLevel.UNKNOWN: "Unknown",
    SkillLevel.BASIC_KNOWLEDGE: "Basic Knowledge",
    SkillLevel.HANDS_ON_EXPERIENCE: "Hands-on Experience",
    SkillLevel.EXPERT: "Expert",
}

MIN_LEVEL = int(SkillLevel.UNKNOWN)
MAX_LEVEL = int(SkillLevel.EXPERT)


class SkillLevelOption(BaseModel):
    """One entry of the skill level catalogue."""

    value: int
    label: str


def skill_level_options() -> list[SkillLevelOption]:
    """Return the level catalogue in ascending order."""
    return [SkillLevelOption(value=int(level), label=level.label) for level in SkillLevel]


class SkillRatingCreate(BaseModel):
    """Schema for creating a new skill rating."""

    team_member_id: int = Field(gt=0)
    skill_id: int = Field(gt=0)
    level: int = Field(ge=MIN_LEVEL, le=MAX_LEVEL)
    week_of: datetime


class SkillRatingLevelUpdate(BaseModel):
    """Schema for updating the level of an existing rating."""

    level: int = Field(ge=MIN_LEVEL, le=MAX_LEVEL)


class SkillRating(BaseModel):
    """Complete skill rating schema with database fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    team_member_id: int
    skill_id: int
    level: int
    week_of: datetime


class WeeklyRatingResult(BaseModel):
    """Outcome of a create-or-update for a member/skill/week."""

    created: bool
    rating: SkillRating


class RatingDetail(BaseModel):
    """Skill rating enriched with member and skill names."""

    id: int
    team_member_id: int
    team_member_name: str
    skill_id: int
    skill_name: str
    skill_category: str
    level: int
    week_of: datetime
