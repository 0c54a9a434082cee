"""Entity store for team members, skills and skill ratings."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from skill_tracker.config import dashboard_config
from skill_tracker.exceptions import DuplicateError, InvalidLevelError, NotFoundError
from skill_tracker.models.skill import Skill
from skill_tracker.models.skill_rating import SkillRating
from skill_tracker.models.team_member import TeamMember
from skill_tracker.schemas.skill import SkillCreate
from skill_tracker.schemas.skill_rating import MAX_LEVEL, MIN_LEVEL, RatingDetail, SkillRatingCreate
from skill_tracker.schemas.team_member import TeamMemberCreate
from skill_tracker.services.aggregation import rating_detail
from skill_tracker.services.weeks import to_naive_utc, week_bounds

logger = logging.getLogger(__name__)


def _check_level(level: int) -> None:
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise InvalidLevelError(f"Level must be between {MIN_LEVEL} and {MAX_LEVEL}, got {level}")


class SkillStore:
    """
    Persistence operations for the three entity kinds.

    Every mutating call commits its own transaction. Deleting a member or a
    skill removes its ratings through the ORM cascade in the same commit.
    """

    def __init__(self, db: Session) -> None:
        """
        Initialize the store.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    # ------------------------------------------------------------ team members

    def list_team_members(self) -> list[TeamMember]:
        """Return all team members ordered by id."""
        return self.db.query(TeamMember).order_by(TeamMember.id).all()

    def get_team_member(self, member_id: int) -> TeamMember | None:
        """Return a team member by id, or None."""
        return self.db.query(TeamMember).filter(TeamMember.id == member_id).first()

    def find_team_member_by_name(self, name: str) -> TeamMember | None:
        """Return the first team member whose name matches case-insensitively."""
        return (
            self.db.query(TeamMember)
            .filter(func.lower(TeamMember.name) == name.strip().lower())
            .order_by(TeamMember.id)
            .first()
        )

    def create_team_member(self, data: TeamMemberCreate) -> TeamMember:
        """
        Create a team member.

        Args:
            data: Validated member fields

        Returns:
            The persisted TeamMember

        Raises:
            DuplicateError: If the email is already registered
        """
        existing = (
            self.db.query(TeamMember)
            .filter(func.lower(TeamMember.email) == data.email.lower())
            .first()
        )
        if existing:
            raise DuplicateError(f"Team member with email '{data.email}' already exists")

        member = TeamMember(**data.model_dump())
        self.db.add(member)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateError(f"Team member with email '{data.email}' already exists") from e
        self.db.refresh(member)
        logger.info("Created team member %s (%s)", member.id, member.email)
        return member

    def delete_team_member(self, member_id: int) -> bool:
        """
        Delete a team member and all of its ratings.

        Returns:
            True if the member existed
        """
        member = self.get_team_member(member_id)
        if not member:
            return False
        self.db.delete(member)
        self.db.commit()
        logger.info("Deleted team member %s", member_id)
        return True

    # ------------------------------------------------------------------ skills

    def list_skills(self) -> list[Skill]:
        """Return all skills ordered by id."""
        return self.db.query(Skill).order_by(Skill.id).all()

    def get_skill(self, skill_id: int) -> Skill | None:
        """Return a skill by id, or None."""
        return self.db.query(Skill).filter(Skill.id == skill_id).first()

    def find_skill_by_name(self, name: str) -> Skill | None:
        """Return the skill whose name matches case-insensitively."""
        return self.db.query(Skill).filter(func.lower(Skill.name) == name.strip().lower()).first()

    def create_skill(self, data: SkillCreate) -> Skill:
        """
        Create a skill.

        Args:
            data: Validated skill fields

        Returns:
            The persisted Skill

        Raises:
            DuplicateError: If a skill with the same name (any case) exists
        """
        if self.find_skill_by_name(data.name):
            raise DuplicateError(f"Skill '{data.name}' already exists")

        skill = Skill(**data.model_dump())
        self.db.add(skill)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateError(f"Skill '{data.name}' already exists") from e
        self.db.refresh(skill)
        logger.info("Created skill %s (%s)", skill.id, skill.name)
        return skill

    def delete_skill(self, skill_id: int) -> bool:
        """
        Delete a skill and all of its ratings.

        Returns:
            True if the skill existed
        """
        skill = self.get_skill(skill_id)
        if not skill:
            return False
        self.db.delete(skill)
        self.db.commit()
        logger.info("Deleted skill %s", skill_id)
        return True

    # ----------------------------------------------------------------- ratings

    def list_skill_ratings(
        self, team_member_id: int | None = None, skill_id: int | None = None
    ) -> list[SkillRating]:
        """
        Return ratings, optionally filtered by member and/or skill.

        Args:
            team_member_id: Keep only this member's ratings
            skill_id: Keep only this skill's ratings

        Returns:
            Ratings ordered by id
        """
        query = self.db.query(SkillRating)
        if team_member_id is not None:
            query = query.filter(SkillRating.team_member_id == team_member_id)
        if skill_id is not None:
            query = query.filter(SkillRating.skill_id == skill_id)
        return query.order_by(SkillRating.id).all()

    def get_skill_rating(self, rating_id: int) -> SkillRating | None:
        """Return a rating by id, or None."""
        return self.db.query(SkillRating).filter(SkillRating.id == rating_id).first()

    def ratings_for_week(self, week_of: datetime) -> list[SkillRating]:
        """Return the ratings whose week_of falls in the week containing ``week_of``."""
        start, end = week_bounds(week_of)
        return (
            self.db.query(SkillRating)
            .filter(SkillRating.week_of >= start, SkillRating.week_of < end)
            .order_by(SkillRating.id)
            .all()
        )

    def _require_references(self, team_member_id: int, skill_id: int) -> None:
        if not self.get_team_member(team_member_id):
            raise NotFoundError(f"Team member {team_member_id} not found")
        if not self.get_skill(skill_id):
            raise NotFoundError(f"Skill {skill_id} not found")

    def create_skill_rating(self, data: SkillRatingCreate) -> SkillRating:
        """
        Insert a rating.

        Ratings for a member/skill/week that already has one are not
        rejected; use ``record_weekly_rating`` for create-or-update.

        Args:
            data: Validated rating fields

        Returns:
            The persisted SkillRating

        Raises:
            NotFoundError: If the member or the skill does not exist
            InvalidLevelError: If the level is outside 0-3
        """
        _check_level(data.level)
        self._require_references(data.team_member_id, data.skill_id)

        rating = SkillRating(
            team_member_id=data.team_member_id,
            skill_id=data.skill_id,
            level=data.level,
            week_of=to_naive_utc(data.week_of),
        )
        self.db.add(rating)
        self.db.commit()
        self.db.refresh(rating)
        return rating

    def update_skill_rating_level(self, rating_id: int, level: int) -> SkillRating | None:
        """
        Change the level of an existing rating.

        Returns:
            The updated rating, or None if it does not exist

        Raises:
            InvalidLevelError: If the level is outside 0-3
        """
        _check_level(level)
        rating = self.get_skill_rating(rating_id)
        if not rating:
            return None
        rating.level = level
        self.db.commit()
        self.db.refresh(rating)
        return rating

    def find_weekly_rating(
        self, team_member_id: int, skill_id: int, week_of: datetime
    ) -> SkillRating | None:
        """Return the latest rating of a member/skill inside the week of ``week_of``."""
        start, end = week_bounds(week_of)
        return (
            self.db.query(SkillRating)
            .filter(
                SkillRating.team_member_id == team_member_id,
                SkillRating.skill_id == skill_id,
                SkillRating.week_of >= start,
                SkillRating.week_of < end,
            )
            .order_by(SkillRating.id.desc())
            .first()
        )

    def record_weekly_rating(self, data: SkillRatingCreate) -> tuple[SkillRating, bool]:
        """
        Create or update the rating of a member/skill for one week.

        Args:
            data: Validated rating fields

        Returns:
            Tuple of (rating, created)

        Raises:
            NotFoundError: If the member or the skill does not exist
            InvalidLevelError: If the level is outside 0-3
        """
        _check_level(data.level)
        self._require_references(data.team_member_id, data.skill_id)

        existing = self.find_weekly_rating(data.team_member_id, data.skill_id, data.week_of)
        if existing:
            existing.level = data.level
            self.db.commit()
            self.db.refresh(existing)
            return existing, False
        return self.create_skill_rating(data), True

    def skill_ratings_with_details(self) -> list[RatingDetail]:
        """Return every rating enriched with member and skill names."""
        members_by_id = {m.id: m for m in self.list_team_members()}
        skills_by_id = {s.id: s for s in self.list_skills()}
        return [
            rating_detail(r, members_by_id, skills_by_id, dashboard_config.unknown_placeholder)
            for r in self.list_skill_ratings()
        ]
