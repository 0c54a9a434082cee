"""Dashboard Pydantic schemas (matrix, history, trends)."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel

from skill_tracker.schemas.skill_rating import RatingDetail


class TrendDirection(str, Enum):
    """Direction of the last week-over-week change."""

    IMPROVING = "improving"
    DECLINING = "declining"
    SAME = "same"


class MatrixSkill(BaseModel):
    """Skill column header in the matrix."""

    id: int
    name: str
    category: str


class MatrixCell(BaseModel):
    """One member's level for one skill in the target week."""

    skill_id: int
    skill_name: str
    level: int
    rating_id: int | None = None
    rated: bool = False


class MatrixMember(BaseModel):
    """Matrix row for one team member."""

    team_member_id: int
    team_member_name: str
    role: str
    department: str
    email: str
    skills: list[MatrixCell]


class SkillMatrix(BaseModel):
    """Dense member x skill grid for one week."""

    week_of: datetime
    week_start: date
    skills: list[MatrixSkill]
    team_members: list[MatrixMember]


class WeeklyBucket(BaseModel):
    """Ratings that fall into one week bucket."""

    week_of: str  # ISO date of the bucket's Sunday
    ratings: list[RatingDetail]


class MostImprovedSkill(BaseModel):
    """Skill with the largest level gain between the last two weeks."""

    name: str
    improvement: int


class SkillGap(BaseModel):
    """Skill with the lowest average level among rated members."""

    name: str
    category: str
    average: float
    below_basic_count: int


class SkillComparison(BaseModel):
    """Average level of a skill in the latest and previous week."""

    skill_id: int
    name: str
    current: float
    previous: float


class HistoryPoint(BaseModel):
    """A member's level for one skill in one week."""

    week: str
    level: int
    level_name: str


class MemberSkillTrend(BaseModel):
    """Ordered history and trend of one member for one skill."""

    team_member_id: int
    team_member_name: str
    history: list[HistoryPoint]
    trend: TrendDirection


class SkillTrendReport(BaseModel):
    """Per-member trends for one skill."""

    skill_id: int
    skill_name: str
    members: list[MemberSkillTrend]


class DashboardSummary(BaseModel):
    """Headline numbers for the dashboard cards."""

    week_of: datetime
    week_start: date
    member_count: int
    skill_count: int
    team_average: float
    most_improved_skill: MostImprovedSkill | None
    skill_gap: SkillGap | None
