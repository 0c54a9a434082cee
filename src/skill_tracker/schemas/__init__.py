"""Pydantic schemas package."""

from skill_tracker.schemas.dashboard import (
    DashboardSummary,
    HistoryPoint,
    MatrixCell,
    MatrixMember,
    MatrixSkill,
    MemberSkillTrend,
    MostImprovedSkill,
    SkillComparison,
    SkillGap,
    SkillMatrix,
    SkillTrendReport,
    TrendDirection,
    WeeklyBucket,
)
from skill_tracker.schemas.imports import ImportKind, ImportRequest, ImportResult, ImportRowError
from skill_tracker.schemas.skill import Skill, SkillBase, SkillCreate
from skill_tracker.schemas.skill_rating import (
    RatingDetail,
    SkillLevel,
    SkillLevelOption,
    SkillRating,
    SkillRatingCreate,
    SkillRatingLevelUpdate,
    WeeklyRatingResult,
)
from skill_tracker.schemas.team_member import TeamMember, TeamMemberBase, TeamMemberCreate

__all__ = [
    "DashboardSummary",
    "HistoryPoint",
    "ImportKind",
    "ImportRequest",
    "ImportResult",
    "ImportRowError",
    "MatrixCell",
    "MatrixMember",
    "MatrixSkill",
    "MemberSkillTrend",
    "MostImprovedSkill",
    "RatingDetail",
    "Skill",
    "SkillBase",
    "SkillComparison",
    "SkillCreate",
    "SkillGap",
    "SkillLevel",
    "SkillLevelOption",
    "SkillMatrix",
    "SkillRating",
    "SkillRatingCreate",
    "SkillRatingLevelUpdate",
    "SkillTrendReport",
    "TeamMember",
    "TeamMemberBase",
    "TeamMemberCreate",
    "TrendDirection",
    "WeeklyBucket",
    "WeeklyRatingResult",
]
