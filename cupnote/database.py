"""
Database schema and connection management.

Uses SQLite with SQLAlchemy to keep computed Match Scores next to the
tasting record id they belong to.
"""

from datetime import datetime
from pathlib import Path
from sqlalchemy import create_engine, Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class MatchScoreRecord(Base):
    """Stored Match Score for one tasting record."""

    __tablename__ = "match_scores"

    record_id = Column(String, primary_key=True)  # tasting record id
    level = Column(String, nullable=False)  # level1, level2
    score = Column(Integer, nullable=False)
    flavor_score = Column(Integer, nullable=False)
    sensory_score = Column(Integer, nullable=True)  # NULL for level1
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
