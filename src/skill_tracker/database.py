"""Database engine, session factory and SQLite connection setup."""

import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from skill_tracker.config import settings

# Settings.derive_paths always fills database_url from data_root
assert settings.database_url is not None, "database_url must be set in Settings"
DATABASE_URL: str = settings.database_url


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """
    Turn on foreign key enforcement for every SQLite connection.

    SQLite ignores REFERENCES and ON DELETE CASCADE unless the pragma is
    set per connection, so ratings could otherwise point at missing
    members or skills.
    """
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},  # Needed for SQLite
    echo=False,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Yield a request-scoped session for the entity store.

    Yields:
        Session: SQLAlchemy database session, closed after the request
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
