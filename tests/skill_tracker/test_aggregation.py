"""Tests for the weekly matrix and the historical aggregation."""

from datetime import date, datetime

import pytest

from skill_tracker.models.skill import Skill
from skill_tracker.models.skill_rating import SkillRating
from skill_tracker.models.team_member import TeamMember
from skill_tracker.services.aggregation import build_history, build_matrix, ratings_in_week

WEEK = datetime(2024, 5, 15, 10, 0)
PREVIOUS_WEEK = datetime(2024, 5, 8, 10, 0)


@pytest.fixture
def members():
    return [
        TeamMember(id=1, name="Alex Johnson", role="Frontend Developer", department="Engineering", email="alex@example.com"),
        TeamMember(id=2, name="Jamie Williams", role="Backend Developer", department="Engineering", email="jamie@example.com"),
    ]


@pytest.fixture
def skills():
    return [
        Skill(id=1, name="React.js", category="Frontend Development"),
        Skill(id=2, name="Docker", category="DevOps"),
    ]


def rating(id, member_id, skill_id, level, week_of=WEEK):
    return SkillRating(id=id, team_member_id=member_id, skill_id=skill_id, level=level, week_of=week_of)


class TestBuildMatrix:
    """Tests for the dense member x skill matrix."""

    def test_unrated_pairs_default_to_unknown(self, members, skills):
        matrix = build_matrix(WEEK, members[:1], skills, [rating(1, 1, 1, 1)])

        cells = matrix.team_members[0].skills
        assert [(c.skill_id, c.level) for c in cells] == [(1, 1), (2, 0)]
        assert cells[0].rated is True
        assert cells[0].rating_id == 1
        assert cells[1].rated is False
        assert cells[1].rating_id is None

    def test_one_row_per_member_one_cell_per_skill(self, members, skills):
        matrix = build_matrix(WEEK, members, skills, [])

        assert [m.team_member_id for m in matrix.team_members] == [1, 2]
        assert all(len(m.skills) == len(skills) for m in matrix.team_members)
        assert [s.name for s in matrix.skills] == ["React.js", "Docker"]

    def test_member_fields_copied(self, members, skills):
        row = build_matrix(WEEK, members, skills, []).team_members[1]

        assert row.team_member_name == "Jamie Williams"
        assert row.role == "Backend Developer"
        assert row.department == "Engineering"
        assert row.email == "jamie@example.com"

    def test_ratings_outside_week_ignored(self, members, skills):
        ratings = [rating(1, 1, 1, 3, week_of=PREVIOUS_WEEK)]
        matrix = build_matrix(WEEK, members, skills, ratings)

        assert matrix.team_members[0].skills[0].level == 0

    def test_highest_id_wins_for_duplicates(self, members, skills):
        ratings = [rating(7, 1, 1, 3), rating(4, 1, 1, 1)]
        cell = build_matrix(WEEK, members, skills, ratings).team_members[0].skills[0]

        assert cell.level == 3
        assert cell.rating_id == 7

    def test_week_fields(self, members, skills):
        matrix = build_matrix(WEEK, members, skills, [])

        assert matrix.week_of == WEEK
        assert matrix.week_start == date(2024, 5, 12)

    def test_accepts_plain_date(self, members, skills):
        matrix = build_matrix(date(2024, 5, 15), members, skills, [rating(1, 1, 1, 2)])

        assert matrix.week_start == date(2024, 5, 12)
        assert matrix.team_members[0].skills[0].level == 2

    def test_empty_inputs(self):
        matrix = build_matrix(WEEK, [], [], [])
        assert matrix.team_members == []
        assert matrix.skills == []


class TestRatingsInWeek:
    """Tests for the week filter."""

    def test_half_open_bounds(self):
        ratings = [
            rating(1, 1, 1, 1, week_of=datetime(2024, 5, 12, 0, 0)),
            rating(2, 1, 1, 1, week_of=datetime(2024, 5, 18, 23, 59)),
            rating(3, 1, 1, 1, week_of=datetime(2024, 5, 19, 0, 0)),
            rating(4, 1, 1, 1, week_of=datetime(2024, 5, 11, 23, 59)),
        ]
        assert [r.id for r in ratings_in_week(ratings, WEEK)] == [1, 2]


class TestBuildHistory:
    """Tests for week-bucketed history."""

    def test_buckets_sorted_ascending(self, members, skills):
        ratings = [
            rating(1, 1, 1, 3, week_of=WEEK),
            rating(2, 1, 1, 2, week_of=PREVIOUS_WEEK),
            rating(3, 2, 2, 1, week_of=WEEK),
        ]
        buckets = build_history(ratings, members, skills)

        assert [b.week_of for b in buckets] == ["2024-05-05", "2024-05-12"]
        assert [r.id for r in buckets[1].ratings] == [1, 3]

    def test_ratings_enriched_with_names(self, members, skills):
        buckets = build_history([rating(1, 2, 2, 2)], members, skills)
        detail = buckets[0].ratings[0]

        assert detail.team_member_name == "Jamie Williams"
        assert detail.skill_name == "Docker"
        assert detail.skill_category == "DevOps"

    def test_filters_are_independent(self, members, skills):
        ratings = [rating(1, 1, 1, 1), rating(2, 1, 2, 1), rating(3, 2, 1, 1)]

        by_member = build_history(ratings, members, skills, member_id=1)
        by_skill = build_history(ratings, members, skills, skill_id=1)
        both = build_history(ratings, members, skills, member_id=1, skill_id=1)

        assert [r.id for r in by_member[0].ratings] == [1, 2]
        assert [r.id for r in by_skill[0].ratings] == [1, 3]
        assert [r.id for r in both[0].ratings] == [1]

    def test_dangling_references_use_placeholder(self, members, skills):
        buckets = build_history([rating(1, 99, 42, 2)], members, skills)
        detail = buckets[0].ratings[0]

        assert detail.team_member_name == "Unknown"
        assert detail.skill_name == "Unknown"
        assert detail.skill_category == "Unknown"

    def test_no_ratings(self, members, skills):
        assert build_history([], members, skills) == []
