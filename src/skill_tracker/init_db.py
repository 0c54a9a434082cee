"""Database initialization script."""

import argparse
from pathlib import Path

from skill_tracker.config import settings
from skill_tracker.database import Base, SessionLocal, engine
from skill_tracker.models import Skill, SkillRating, TeamMember  # noqa: F401
from skill_tracker.seed import seed_demo_data
from skill_tracker.services.store import SkillStore


def init_database(seed: bool = False):
    """
    Initialize the database by creating all tables.

    This function creates all tables defined in the models if they don't exist.
    It's safe to run multiple times as it won't recreate existing tables.

    Args:
        seed: Also load the demo team, skills and two weeks of ratings
    """
    Path(settings.data_root).mkdir(parents=True, exist_ok=True)
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Database tables created successfully!")
    print(f"Tables created: {', '.join(Base.metadata.tables.keys())}")

    if seed:
        db = SessionLocal()
        try:
            if seed_demo_data(SkillStore(db)):
                print("Demo data loaded.")
            else:
                print("Team members already exist, demo data skipped.")
        finally:
            db.close()


def main():
    parser = argparse.ArgumentParser(description="Create the skill tracker database.")
    parser.add_argument("--seed", action="store_true", help="load demo data into an empty database")
    args = parser.parse_args()
    init_database(seed=args.seed)


if __name__ == "__main__":
    main()
