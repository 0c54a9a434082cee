"""Weekly skill matrix and historical series aggregation.

Pure functions over already-loaded records. Nothing here touches the
database; callers pass in the members, skills and ratings to aggregate.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, time

from skill_tracker.models.skill import Skill
from skill_tracker.models.skill_rating import SkillRating
from skill_tracker.models.team_member import TeamMember
from skill_tracker.schemas.dashboard import (
    MatrixCell,
    MatrixMember,
    MatrixSkill,
    SkillMatrix,
    WeeklyBucket,
)
from skill_tracker.schemas.skill_rating import RatingDetail, SkillLevel
from skill_tracker.services.weeks import to_naive_utc, week_bounds, week_key, week_start

UNKNOWN_PLACEHOLDER = "Unknown"


def ratings_in_week(ratings: Iterable[SkillRating], target_week: datetime | date) -> list[SkillRating]:
    """
    Select the ratings whose ``week_of`` falls inside the target week.

    Args:
        ratings: Ratings to scan
        target_week: Any timestamp inside the wanted week

    Returns:
        Ratings with ``start <= week_of < start + 7 days``
    """
    start, end = week_bounds(target_week)
    return [r for r in ratings if start <= to_naive_utc(r.week_of) < end]


def build_matrix(
    target_week: datetime | date,
    members: Sequence[TeamMember],
    skills: Sequence[Skill],
    ratings: Iterable[SkillRating],
) -> SkillMatrix:
    """
    Build the dense member x skill matrix for one week.

    Every member gets one cell per skill. Pairs without a rating in the
    week default to level 0 (Unknown) with ``rated=False``. When the week
    holds several ratings for the same pair, the most recently written one
    (highest id) wins.

    Args:
        target_week: Any timestamp inside the wanted week
        members: Team members, one matrix row each
        skills: Skills, one column each
        ratings: Ratings to pick from (any weeks)

    Returns:
        SkillMatrix for the week
    """
    if not isinstance(target_week, datetime):
        target_week = datetime.combine(target_week, time.min)
    week_ratings = sorted(ratings_in_week(ratings, target_week), key=lambda r: r.id or 0)
    latest: dict[tuple[int, int], SkillRating] = {}
    for rating in week_ratings:
        latest[(rating.team_member_id, rating.skill_id)] = rating

    rows: list[MatrixMember] = []
    for member in members:
        cells: list[MatrixCell] = []
        for skill in skills:
            rating = latest.get((member.id, skill.id))
            cells.append(
                MatrixCell(
                    skill_id=skill.id,
                    skill_name=skill.name,
                    level=rating.level if rating else int(SkillLevel.UNKNOWN),
                    rating_id=rating.id if rating else None,
                    rated=rating is not None,
                )
            )
        rows.append(
            MatrixMember(
                team_member_id=member.id,
                team_member_name=member.name,
                role=member.role,
                department=member.department,
                email=member.email,
                skills=cells,
            )
        )

    return SkillMatrix(
        week_of=target_week,
        week_start=week_start(target_week),
        skills=[MatrixSkill(id=s.id, name=s.name, category=s.category) for s in skills],
        team_members=rows,
    )


def rating_detail(
    rating: SkillRating,
    members_by_id: Mapping[int, TeamMember],
    skills_by_id: Mapping[int, Skill],
    placeholder: str = UNKNOWN_PLACEHOLDER,
) -> RatingDetail:
    """
    Enrich a rating with member and skill names.

    Dangling references fall back to ``placeholder`` instead of failing.
    """
    member = members_by_id.get(rating.team_member_id)
    skill = skills_by_id.get(rating.skill_id)
    return RatingDetail(
        id=rating.id,
        team_member_id=rating.team_member_id,
        team_member_name=member.name if member else placeholder,
        skill_id=rating.skill_id,
        skill_name=skill.name if skill else placeholder,
        skill_category=skill.category if skill else placeholder,
        level=rating.level,
        week_of=rating.week_of,
    )


def build_history(
    ratings: Iterable[SkillRating],
    members: Iterable[TeamMember],
    skills: Iterable[Skill],
    member_id: int | None = None,
    skill_id: int | None = None,
    placeholder: str = UNKNOWN_PLACEHOLDER,
) -> list[WeeklyBucket]:
    """
    Group ratings into chronologically ordered week buckets.

    Args:
        ratings: All ratings
        members: Members used to resolve names
        skills: Skills used to resolve names and categories
        member_id: Keep only this member's ratings
        skill_id: Keep only this skill's ratings
        placeholder: Name used when a reference cannot be resolved

    Returns:
        Buckets sorted ascending by week key, ratings enriched with names
    """
    members_by_id = {m.id: m for m in members}
    skills_by_id = {s.id: s for s in skills}

    by_week: dict[str, list[SkillRating]] = defaultdict(list)
    for rating in ratings:
        if member_id is not None and rating.team_member_id != member_id:
            continue
        if skill_id is not None and rating.skill_id != skill_id:
            continue
        by_week[week_key(rating.week_of)].append(rating)

    return [
        WeeklyBucket(
            week_of=key,
            ratings=[rating_detail(r, members_by_id, skills_by_id, placeholder) for r in by_week[key]],
        )
        for key in sorted(by_week)
    ]
