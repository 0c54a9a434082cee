"""Skill database model."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from skill_tracker.database import Base


class Skill(Base):
    """
    Skill model representing an entry in the skill catalog.

    Attributes:
        id: Primary key
        name: Skill name (unique)
        category: Skill category used for grouping (e.g. Frontend Development)
        description: Optional free-text description
        created_at: Timestamp when record was created
        ratings: Ratings of this skill (deleted with the skill)
    """

    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True, index=True)
    category = Column(String, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    ratings = relationship("SkillRating", back_populates="skill", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        """String representation of Skill."""
        return f"<Skill(id={self.id}, name='{self.name}', category='{self.category}')>"
