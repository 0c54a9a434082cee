"""SkillRating database model."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from skill_tracker.database import Base


class SkillRating(Base):
    """
    SkillRating model recording one member's level in one skill for a week.

    Several ratings for the same member, skill and week are not prevented
    here; the store's weekly upsert is the path that avoids them.

    Attributes:
        id: Primary key
        team_member_id: Foreign key to team_members table
        skill_id: Foreign key to skills table
        level: 0=Unknown, 1=Basic Knowledge, 2=Hands-on Experience, 3=Expert
        week_of: Point in time identifying the rated week (naive UTC)
        created_at: Timestamp when record was created
    """

    __tablename__ = "skill_ratings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    team_member_id = Column(
        Integer, ForeignKey("team_members.id", ondelete="CASCADE"), nullable=False, index=True
    )
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True)
    level = Column(Integer, nullable=False, default=0)
    week_of = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    team_member = relationship("TeamMember", back_populates="ratings")
    skill = relationship("Skill", back_populates="ratings")

    __table_args__ = (CheckConstraint("level >= 0 AND level <= 3", name="_skill_level_range"),)

    def __repr__(self) -> str:
        """String representation of SkillRating."""
        return (
            f"<SkillRating(id={self.id}, team_member_id={self.team_member_id}, "
            f"skill_id={self.skill_id}, level={self.level}, week_of='{self.week_of}')>"
        )
