"""Skill Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SkillBase(BaseModel):
    """Base skill schema with common fields."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str | None = None


class SkillCreate(SkillBase):
    """Schema for creating a new skill."""

    pass


class Skill(SkillBase):
    """Complete skill schema with database fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
