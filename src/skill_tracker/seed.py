"""Demo data for a fresh database."""

from __future__ import annotations

import logging
from datetime import timedelta

from skill_tracker.schemas.skill import SkillCreate
from skill_tracker.schemas.skill_rating import SkillRatingCreate
from skill_tracker.schemas.team_member import TeamMemberCreate
from skill_tracker.services.store import SkillStore
from skill_tracker.services.weeks import utcnow

logger = logging.getLogger(__name__)

DEMO_MEMBERS: list[dict[str, str]] = [
    {"name": "Alex Johnson", "role": "Frontend Developer", "department": "Engineering", "email": "alex@example.com"},
    {"name": "Jamie Williams", "role": "Backend Developer", "department": "Engineering", "email": "jamie@example.com"},
    {"name": "Sam Rodriguez", "role": "DevOps Engineer", "department": "Operations", "email": "sam@example.com"},
]

DEMO_SKILLS: list[dict[str, str]] = [
    {"name": "React.js", "category": "Frontend Development", "description": "JavaScript library for building user interfaces"},
    {"name": "Next.js", "category": "Frontend Development", "description": "React framework for production"},
    {"name": "Tailwind CSS", "category": "Frontend Development", "description": "Utility-first CSS framework"},
    {"name": "Node.js", "category": "Backend Development", "description": "JavaScript runtime for server-side development"},
    {"name": "Docker", "category": "DevOps", "description": "Platform for developing, shipping, and running applications in containers"},
]

# Levels per member, in DEMO_SKILLS order
CURRENT_LEVELS: list[list[int]] = [
    [3, 2, 3, 1, 0],
    [1, 1, 0, 3, 2],
    [1, 0, 0, 2, 3],
]
PREVIOUS_LEVELS: list[list[int]] = [
    [2, 1, 3, 0, 0],
    [0, 0, 0, 3, 1],
    [0, 0, 0, 2, 2],
]


def seed_demo_data(store: SkillStore) -> bool:
    """
    Load demo members, skills and two weeks of ratings.

    Does nothing when team members already exist.

    Args:
        store: Entity store to write to

    Returns:
        True if the demo data was written
    """
    if store.list_team_members():
        logger.info("Database already has team members, skipping demo data")
        return False

    members = [store.create_team_member(TeamMemberCreate(**m)) for m in DEMO_MEMBERS]
    skills = [store.create_skill(SkillCreate(**s)) for s in DEMO_SKILLS]

    now = utcnow()
    for week_of, table in ((now - timedelta(days=7), PREVIOUS_LEVELS), (now, CURRENT_LEVELS)):
        for member, levels in zip(members, table):
            for skill, level in zip(skills, levels):
                store.create_skill_rating(
                    SkillRatingCreate(team_member_id=member.id, skill_id=skill.id, level=level, week_of=week_of)
                )

    logger.info("Seeded %d team members and %d skills", len(members), len(skills))
    return True
