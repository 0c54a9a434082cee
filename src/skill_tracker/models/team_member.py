"""TeamMember database model."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from skill_tracker.database import Base


class TeamMember(Base):
    """
    TeamMember model representing a person whose skills are tracked.

    Attributes:
        id: Primary key
        name: Full name
        role: Job role (e.g. Frontend Developer)
        department: Department name
        email: Email address (unique)
        created_at: Timestamp when record was created
        ratings: Skill ratings for this member (deleted with the member)
    """

    __tablename__ = "team_members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, index=True)
    role = Column(String, nullable=False)
    department = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    ratings = relationship(
        "SkillRating", back_populates="team_member", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        """String representation of TeamMember."""
        return f"<TeamMember(id={self.id}, name='{self.name}', email='{self.email}')>"
