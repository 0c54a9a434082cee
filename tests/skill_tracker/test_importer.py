"""Tests for the bulk row importer."""

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from skill_tracker.database import Base
from skill_tracker.schemas.imports import ImportKind
from skill_tracker.schemas.skill import SkillCreate
from skill_tracker.schemas.team_member import TeamMemberCreate
from skill_tracker.services.importer import RowImporter, normalize_header, parse_level
from skill_tracker.services.store import SkillStore
from skill_tracker.services.weeks import utcnow, week_start


@pytest.fixture
def store():
    """Store on an in-memory SQLite database."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()

    yield SkillStore(session)

    session.close()
    engine.dispose()


@pytest.fixture
def importer(store):
    return RowImporter(store)


@pytest.fixture
def seeded(store):
    member = store.create_team_member(
        TeamMemberCreate(name="Alex Johnson", role="Frontend Developer", department="Engineering", email="alex@example.com")
    )
    skill = store.create_skill(SkillCreate(name="React.js", category="Frontend Development"))
    return member, skill


class TestParseLevel:
    """Tests for level cell parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("Expert", 3),
            ("advanced", 3),
            ("Hands-on Experience", 2),
            ("Intermediate", 2),
            ("Basic Knowledge", 1),
            ("beginner", 1),
            ("Unknown", 0),
            ("none", 0),
            ("2", 2),
            (1, 1),
            (2.0, 2),
            (7, 3),
            (-1, 0),
            ("not a level", 0),
            ("1e999", 0),
            ("inf", 0),
            ("-inf", 0),
            ("nan", 0),
            (float("inf"), 0),
            (float("nan"), 0),
            (None, 0),
        ],
    )
    def test_parse_level(self, value, expected):
        assert parse_level(value) == expected


class TestNormalizeHeader:
    """Tests for header normalization."""

    @pytest.mark.parametrize(
        "header, expected",
        [
            ("teamMemberId", "teammemberid"),
            ("Team Member ID", "teammemberid"),
            ("team_member_id", "teammemberid"),
            ("E-mail", "email"),
            (None, ""),
        ],
    )
    def test_normalize(self, header, expected):
        assert normalize_header(header) == expected


class TestImportTeamMembers:
    """Tests for team member rows."""

    def test_import_with_header_variants(self, importer, store):
        result = importer.import_team_members(
            [
                {"Name": "Alex Johnson", "Position": "Frontend Developer", "Department": "Engineering", "E-mail": "alex@example.com"},
                {"name": "Jamie Williams", "role": "Backend Developer", "department": "Engineering", "email": "jamie@example.com"},
            ]
        )

        assert result.success == 2
        assert result.errors == []
        assert result.message == "Imported 2 team members successfully with 0 errors."
        assert [m.role for m in store.list_team_members()] == ["Frontend Developer", "Backend Developer"]

    def test_row_errors_do_not_stop_batch(self, importer, store):
        result = importer.import_team_members(
            [
                {"name": "Alex Johnson", "role": "Dev", "department": "Eng", "email": "alex@example.com"},
                {"name": "Missing Email", "role": "Dev", "department": "Eng"},
                {"name": "Alex Again", "role": "Dev", "department": "Eng", "email": "alex@example.com"},
                {"name": "Sam Rodriguez", "role": "DevOps Engineer", "department": "Operations", "email": "sam@example.com"},
            ]
        )

        assert result.success == 2
        assert [e.row for e in result.errors] == [2, 3]
        assert "email" in result.errors[0].message
        assert result.message == "Imported 2 team members successfully with 2 errors."
        assert len(store.list_team_members()) == 2


class TestImportSkills:
    """Tests for skill rows."""

    def test_import_skills(self, importer, store):
        result = importer.import_skills(
            [
                {"name": "Docker", "category": "DevOps", "description": "Containers"},
                {"Skill Name": "Node.js", "Category": "Backend Development"},
                {"name": "No Category"},
            ]
        )

        assert result.success == 2
        assert [e.row for e in result.errors] == [3]
        assert result.message == "Imported 2 skills successfully with 1 errors."
        assert store.find_skill_by_name("node.js").description is None


class TestImportSkillRatings:
    """Tests for rating rows."""

    def test_textual_level_and_names(self, importer, store, seeded):
        member, skill = seeded

        result = importer.import_skill_ratings(
            [{"teamMemberName": "alex johnson", "skillName": "REACT.JS", "level": "Expert", "weekOf": "2024-05-15"}]
        )

        assert result.success == 1
        rating = store.list_skill_ratings()[0]
        assert rating.team_member_id == member.id
        assert rating.skill_id == skill.id
        assert rating.level == 3
        assert rating.week_of == datetime(2024, 5, 15)

    def test_ids_take_precedence(self, importer, store, seeded):
        member, skill = seeded

        result = importer.import_skill_ratings(
            [{"team_member_id": member.id, "skill_id": str(skill.id), "level": 2, "week_of": "2024-05-15"}]
        )

        assert result.success == 1
        assert store.list_skill_ratings()[0].level == 2

    def test_unparseable_level_is_unknown(self, importer, store, seeded):
        importer.import_skill_ratings(
            [{"member": "Alex Johnson", "skill": "React.js", "level": "sort of", "date": "2024-05-15"}]
        )
        assert store.list_skill_ratings()[0].level == 0

    def test_missing_week_defaults_to_current_week(self, importer, store, seeded):
        importer.import_skill_ratings([{"name": "Alex Johnson", "skill": "React.js", "level": 1}])

        rating = store.list_skill_ratings()[0]
        assert week_start(rating.week_of) == week_start(utcnow())

    def test_invalid_week_defaults_to_current_week(self, importer, store, seeded):
        importer.import_skill_ratings([{"name": "Alex Johnson", "skill": "React.js", "level": 1, "week": "someday"}])

        rating = store.list_skill_ratings()[0]
        assert week_start(rating.week_of) == week_start(utcnow())

    def test_unknown_references_reported(self, importer, store, seeded):
        result = importer.import_skill_ratings(
            [
                {"teamMemberName": "Nobody", "skillName": "React.js", "level": 1},
                {"teamMemberName": "Alex Johnson", "skillName": "Cobol", "level": 1},
                {"teamMemberName": "Alex Johnson", "skillName": "React.js", "level": 1},
            ]
        )

        assert result.success == 1
        assert [(e.row, e.message) for e in result.errors] == [
            (1, "Team member not found"),
            (2, "Skill not found"),
        ]
        assert result.message == "Imported 1 skill ratings successfully with 2 errors."

    def test_overflowing_level_does_not_stop_batch(self, importer, store, seeded):
        result = importer.import_skill_ratings(
            [
                {"name": "Alex Johnson", "skill": "React.js", "level": "1e999", "week": "2024-05-15"},
                {"name": "Alex Johnson", "skill": "React.js", "level": 2, "week": "2024-05-22"},
            ]
        )

        assert result.success == 2
        assert result.errors == []
        assert [r.level for r in store.list_skill_ratings()] == [0, 2]

    def test_non_finite_id_falls_back_to_name(self, importer, store, seeded):
        member, skill = seeded

        result = importer.import_skill_ratings(
            [
                {"teamMemberId": "inf", "teamMemberName": "Alex Johnson", "skillId": "1e999", "skill": "React.js", "level": 1},
                {"teamMemberId": "inf", "skill": "React.js", "level": 1},
            ]
        )

        assert result.success == 1
        assert [(e.row, e.message) for e in result.errors] == [(2, "Team member not found")]
        assert store.list_skill_ratings()[0].team_member_id == member.id

    def test_non_dict_row_reported(self, importer):
        result = importer.import_skill_ratings(["not a row"])
        assert result.success == 0
        assert result.errors[0].row == 1

    def test_dispatch_by_kind(self, importer, store):
        result = importer.import_rows(ImportKind.SKILLS, [{"name": "Docker", "category": "DevOps"}])
        assert result.success == 1
        assert store.find_skill_by_name("docker") is not None
