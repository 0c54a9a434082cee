"""Trend, improvement and skill gap analysis over aggregated views."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from skill_tracker.models.skill import Skill
from skill_tracker.schemas.dashboard import (
    HistoryPoint,
    MemberSkillTrend,
    MostImprovedSkill,
    SkillComparison,
    SkillGap,
    SkillMatrix,
    SkillTrendReport,
    TrendDirection,
    WeeklyBucket,
)
from skill_tracker.schemas.skill_rating import SKILL_LEVEL_LABELS, RatingDetail

DEFAULT_GAP_THRESHOLD = 1.5


def classify_trend(levels: Sequence[int]) -> TrendDirection:
    """
    Classify the last transition of a chronologically ordered level history.

    Args:
        levels: Levels in ascending week order

    Returns:
        IMPROVING, DECLINING, or SAME (also for fewer than two entries)

    Examples:
        >>> classify_trend([1, 2])
        <TrendDirection.IMPROVING: 'improving'>
        >>> classify_trend([2])
        <TrendDirection.SAME: 'same'>
    """
    if len(levels) < 2:
        return TrendDirection.SAME
    previous, last = levels[-2], levels[-1]
    if last > previous:
        return TrendDirection.IMPROVING
    if last < previous:
        return TrendDirection.DECLINING
    return TrendDirection.SAME


def find_most_improved_skill(buckets: Sequence[WeeklyBucket]) -> MostImprovedSkill | None:
    """
    Find the skill with the largest level gain between the two latest weeks.

    For every rating in the latest bucket the same member/skill rating is
    looked up in the previous bucket. Each skill keeps its best gain across
    members. Ties go to the alphabetically first skill name.

    Args:
        buckets: Week buckets in ascending order

    Returns:
        The most improved skill, or None with fewer than two buckets or when
        no skill improved
    """
    if len(buckets) < 2:
        return None
    previous_bucket, latest_bucket = buckets[-2], buckets[-1]

    previous_levels: dict[tuple[int, int], int] = {}
    for rating in previous_bucket.ratings:
        previous_levels.setdefault((rating.team_member_id, rating.skill_id), rating.level)

    best_by_skill: dict[str, int] = {}
    for rating in latest_bucket.ratings:
        previous = previous_levels.get((rating.team_member_id, rating.skill_id))
        if previous is None:
            continue
        improvement = rating.level - previous
        if rating.skill_name not in best_by_skill or improvement > best_by_skill[rating.skill_name]:
            best_by_skill[rating.skill_name] = improvement

    if not best_by_skill:
        return None
    name, improvement = min(best_by_skill.items(), key=lambda item: (-item[1], item[0]))
    if improvement <= 0:
        return None
    return MostImprovedSkill(name=name, improvement=improvement)


def find_skill_gap(
    matrix: SkillMatrix,
    threshold: float = DEFAULT_GAP_THRESHOLD,
    below_basic_level: int = 1,
) -> SkillGap | None:
    """
    Find the weakest skill of the team for the matrix week.

    Only cells backed by a stored rating count; the matrix's level-0
    defaults for unrated pairs are left out of the average. Skills nobody
    rated are skipped.

    Args:
        matrix: Skill matrix for the week
        threshold: Averages at or above this are not reported as a gap
        below_basic_level: Levels under this count as "below basic"

    Returns:
        The lowest-average skill if its average is below ``threshold``
    """
    candidates: list[SkillGap] = []
    for skill in matrix.skills:
        levels = [
            cell.level
            for member in matrix.team_members
            for cell in member.skills
            if cell.skill_id == skill.id and cell.rated
        ]
        if not levels:
            continue
        candidates.append(
            SkillGap(
                name=skill.name,
                category=skill.category,
                average=sum(levels) / len(levels),
                below_basic_count=sum(1 for level in levels if level < below_basic_level),
            )
        )

    if not candidates:
        return None
    lowest = min(candidates, key=lambda gap: (gap.average, gap.name))
    return lowest if lowest.average < threshold else None


def team_average(matrix: SkillMatrix) -> float:
    """Average level across every matrix cell, rounded to one decimal."""
    levels = [cell.level for member in matrix.team_members for cell in member.skills]
    if not levels:
        return 0.0
    return round(sum(levels) / len(levels), 1)


def _average_level(ratings: Iterable[RatingDetail]) -> float:
    levels = [r.level for r in ratings]
    if not levels:
        return 0.0
    return round(sum(levels) / len(levels), 1)


def compare_skill_weeks(
    buckets: Sequence[WeeklyBucket],
    skills: Iterable[Skill],
    member_id: int | None = None,
) -> list[SkillComparison]:
    """
    Compare each skill's average level in the latest and the previous week.

    Args:
        buckets: Week buckets in ascending order
        skills: Skills to report, in output order
        member_id: Restrict the averages to one member

    Returns:
        One comparison per skill; missing weeks or ratings average to 0.0
    """
    latest = buckets[-1] if buckets else None
    previous = buckets[-2] if len(buckets) > 1 else None

    def _ratings_for(bucket: WeeklyBucket | None, skill_id: int) -> list[RatingDetail]:
        if bucket is None:
            return []
        return [
            r
            for r in bucket.ratings
            if r.skill_id == skill_id and (member_id is None or r.team_member_id == member_id)
        ]

    return [
        SkillComparison(
            skill_id=skill.id,
            name=skill.name,
            current=_average_level(_ratings_for(latest, skill.id)),
            previous=_average_level(_ratings_for(previous, skill.id)),
        )
        for skill in skills
    ]


def member_skill_history(
    buckets: Sequence[WeeklyBucket], member_id: int, skill_id: int
) -> list[HistoryPoint]:
    """
    Ordered level history of one member for one skill.

    Weeks without a rating for the pair are left out.
    """
    history: list[HistoryPoint] = []
    for bucket in buckets:
        rating = next(
            (r for r in bucket.ratings if r.team_member_id == member_id and r.skill_id == skill_id),
            None,
        )
        if rating is None:
            continue
        history.append(
            HistoryPoint(
                week=bucket.week_of,
                level=rating.level,
                level_name=SKILL_LEVEL_LABELS.get(rating.level, str(rating.level)),
            )
        )
    return history


def skill_trends(buckets: Sequence[WeeklyBucket], skill: Skill) -> SkillTrendReport:
    """
    Per-member history and trend direction for one skill.

    Members appear in order of first appearance in the history.
    """
    names: dict[int, str] = {}
    for bucket in buckets:
        for rating in bucket.ratings:
            if rating.skill_id == skill.id:
                names.setdefault(rating.team_member_id, rating.team_member_name)

    members: list[MemberSkillTrend] = []
    for member_id, member_name in names.items():
        history = member_skill_history(buckets, member_id, skill.id)
        members.append(
            MemberSkillTrend(
                team_member_id=member_id,
                team_member_name=member_name,
                history=history,
                trend=classify_trend([point.level for point in history]),
            )
        )
    return SkillTrendReport(skill_id=skill.id, skill_name=skill.name, members=members)
