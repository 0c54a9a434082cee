"""Tests for Pydantic schemas."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from skill_tracker.schemas.imports import ImportKind, ImportRequest
from skill_tracker.schemas.skill import SkillCreate
from skill_tracker.schemas.skill_rating import (
    SkillLevel,
    SkillRatingCreate,
    SkillRatingLevelUpdate,
    skill_level_options,
)
from skill_tracker.schemas.team_member import TeamMember, TeamMemberCreate


class TestTeamMemberSchemas:
    """Tests for team member schemas."""

    def test_valid(self):
        member = TeamMemberCreate(name=" Alex Johnson ", role="Dev", department="Eng", email="alex@example.com")
        assert member.name == "Alex Johnson"

    @pytest.mark.parametrize("field", ["name", "role", "department", "email"])
    def test_blank_field_rejected(self, field):
        data = {"name": "Alex", "role": "Dev", "department": "Eng", "email": "alex@example.com"}
        data[field] = "   "
        with pytest.raises(ValidationError):
            TeamMemberCreate(**data)

    def test_from_orm_attributes(self):
        class Row:
            id = 1
            name = "Alex"
            role = "Dev"
            department = "Eng"
            email = "alex@example.com"

        assert TeamMember.model_validate(Row()).id == 1


class TestSkillSchemas:
    """Tests for skill schemas."""

    def test_description_optional(self):
        assert SkillCreate(name="Docker", category="DevOps").description is None

    def test_category_required(self):
        with pytest.raises(ValidationError):
            SkillCreate(name="Docker", category="")


class TestSkillRatingSchemas:
    """Tests for skill rating schemas."""

    def test_valid(self):
        rating = SkillRatingCreate(team_member_id=1, skill_id=2, level=3, week_of="2024-05-15T10:00:00")
        assert rating.week_of == datetime(2024, 5, 15, 10, 0)

    @pytest.mark.parametrize("level", [-1, 4])
    def test_level_out_of_range(self, level):
        with pytest.raises(ValidationError):
            SkillRatingCreate(team_member_id=1, skill_id=2, level=level, week_of=datetime(2024, 5, 15))
        with pytest.raises(ValidationError):
            SkillRatingLevelUpdate(level=level)

    def test_non_positive_ids_rejected(self):
        with pytest.raises(ValidationError):
            SkillRatingCreate(team_member_id=0, skill_id=2, level=1, week_of=datetime(2024, 5, 15))

    def test_level_labels(self):
        assert SkillLevel.HANDS_ON_EXPERIENCE.label == "Hands-on Experience"
        assert [(o.value, o.label) for o in skill_level_options()] == [
            (0, "Unknown"),
            (1, "Basic Knowledge"),
            (2, "Hands-on Experience"),
            (3, "Expert"),
        ]


class TestImportSchemas:
    """Tests for import schemas."""

    def test_kind_values(self):
        assert ImportKind("skill-ratings") is ImportKind.SKILL_RATINGS

    def test_data_optional(self):
        assert ImportRequest().data is None
