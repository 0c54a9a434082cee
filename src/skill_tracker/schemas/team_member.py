"""Team member Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class TeamMemberBase(BaseModel):
    """Base team member schema with common fields."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    role: str = Field(min_length=1)
    department: str = Field(min_length=1)
    email: str = Field(min_length=1)


class TeamMemberCreate(TeamMemberBase):
    """Schema for creating a new team member."""

    pass


class TeamMember(TeamMemberBase):
    """Complete team member schema with database fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
