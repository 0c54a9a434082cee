"""Dashboard service combining the store with the aggregation engine."""

from __future__ import annotations

from datetime import datetime

from skill_tracker.config import DashboardConfig, dashboard_config
from skill_tracker.exceptions import NotFoundError
from skill_tracker.schemas.dashboard import (
    DashboardSummary,
    SkillComparison,
    SkillMatrix,
    SkillTrendReport,
    WeeklyBucket,
)
from skill_tracker.services import trends
from skill_tracker.services.aggregation import build_history, build_matrix
from skill_tracker.services.store import SkillStore
from skill_tracker.services.weeks import utcnow


class DashboardService:
    """
    Read-side views for the dashboard.

    Loads raw records from the store and hands them to the pure functions
    in ``aggregation`` and ``trends``.
    """

    def __init__(self, store: SkillStore, config: DashboardConfig | None = None) -> None:
        """
        Initialize the dashboard service.

        Args:
            store: Entity store bound to the request session
            config: Dashboard configuration (defaults to the loaded config file)
        """
        self.store = store
        self.config = config or dashboard_config

    def team_skill_matrix(self, week_of: datetime | None = None) -> SkillMatrix:
        """
        Build the skill matrix for the week containing ``week_of``.

        Args:
            week_of: Any timestamp inside the wanted week (default: now)

        Returns:
            Dense member x skill matrix
        """
        target = week_of or utcnow()
        return build_matrix(
            target,
            self.store.list_team_members(),
            self.store.list_skills(),
            self.store.ratings_for_week(target),
        )

    def historical_ratings(
        self, team_member_id: int | None = None, skill_id: int | None = None
    ) -> list[WeeklyBucket]:
        """Week-ordered rating buckets, optionally filtered by member and skill."""
        return build_history(
            self.store.list_skill_ratings(team_member_id=team_member_id, skill_id=skill_id),
            self.store.list_team_members(),
            self.store.list_skills(),
            member_id=team_member_id,
            skill_id=skill_id,
            placeholder=self.config.unknown_placeholder,
        )

    def summary(self, week_of: datetime | None = None) -> DashboardSummary:
        """
        Headline numbers: team average, most improved skill and skill gap.

        The average and the gap describe the week of ``week_of``; the most
        improved skill compares the two most recent weeks on record.
        """
        matrix = self.team_skill_matrix(week_of)
        return DashboardSummary(
            week_of=matrix.week_of,
            week_start=matrix.week_start,
            member_count=len(matrix.team_members),
            skill_count=len(matrix.skills),
            team_average=trends.team_average(matrix),
            most_improved_skill=trends.find_most_improved_skill(self.historical_ratings()),
            skill_gap=trends.find_skill_gap(
                matrix,
                threshold=self.config.skill_gap_threshold,
                below_basic_level=self.config.below_basic_level,
            ),
        )

    def skill_comparison(self, team_member_id: int | None = None) -> list[SkillComparison]:
        """
        Per-skill average in the latest and previous week.

        Raises:
            NotFoundError: If ``team_member_id`` is given and does not exist
        """
        if team_member_id is not None and not self.store.get_team_member(team_member_id):
            raise NotFoundError(f"Team member {team_member_id} not found")
        return trends.compare_skill_weeks(
            self.historical_ratings(team_member_id=team_member_id),
            self.store.list_skills(),
            member_id=team_member_id,
        )

    def skill_trends(self, skill_id: int) -> SkillTrendReport:
        """
        Per-member history and trend direction for one skill.

        Raises:
            NotFoundError: If the skill does not exist
        """
        skill = self.store.get_skill(skill_id)
        if not skill:
            raise NotFoundError(f"Skill {skill_id} not found")
        return trends.skill_trends(self.historical_ratings(skill_id=skill_id), skill)
