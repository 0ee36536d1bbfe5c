from pathlib import Path
from typing import List, Optional, Tuple

from .database import MatchScoreRecord, get_session, init_database
from .match_score import Level, MatchScore


def _to_match_score(row: MatchScoreRecord) -> MatchScore:
    return MatchScore(
        level=Level(row.level),
        score=row.score,
        flavor_score=row.flavor_score,
        sensory_score=row.sensory_score,
    )


def save_match_score(db_path: Path, record_id: str, match_score: MatchScore) -> str:
    """Insert or update the score for a record. Returns new / updated / no-change."""
    init_database(db_path)
    session = get_session(db_path)
    try:
        row = session.get(MatchScoreRecord, record_id)
        if row is None:
            session.add(MatchScoreRecord(
                record_id=record_id,
                level=match_score.level.value,
                score=match_score.score,
                flavor_score=match_score.flavor_score,
                sensory_score=match_score.sensory_score,
            ))
            session.commit()
            return "new"

        if _to_match_score(row) == match_score:
            return "no-change"

        row.level = match_score.level.value
        row.score = match_score.score
        row.flavor_score = match_score.flavor_score
        row.sensory_score = match_score.sensory_score
        session.commit()
        return "updated"
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def load_match_score(db_path: Path, record_id: str) -> Optional[MatchScore]:
    if not db_path.exists():
        return None
    session = get_session(db_path)
    try:
        row = session.get(MatchScoreRecord, record_id)
        return _to_match_score(row) if row is not None else None
    finally:
        session.close()


def list_match_scores(db_path: Path) -> List[Tuple[str, MatchScore]]:
    if not db_path.exists():
        return []
    session = get_session(db_path)
    try:
        rows = session.query(MatchScoreRecord).order_by(MatchScoreRecord.created_at, MatchScoreRecord.record_id).all()
        return [(row.record_id, _to_match_score(row)) for row in rows]
    finally:
        session.close()
