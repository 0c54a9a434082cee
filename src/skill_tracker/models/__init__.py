"""Database models package."""

from skill_tracker.models.skill import Skill
from skill_tracker.models.skill_rating import SkillRating
from skill_tracker.models.team_member import TeamMember

__all__ = ["TeamMember", "Skill", "SkillRating"]
