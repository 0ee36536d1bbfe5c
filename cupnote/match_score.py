"""
Match Score Aggregation (Level 1 / Level 2).

Responsibilities:
- Turn a completed tasting record into one 0-100 Match Score.
- Choose the level: flavor-only (Level 1) or flavor + sensory (Level 2).
- Render grades and a human-readable breakdown.

Non-Responsibilities:
- No persistence of the result.
- No UI flow.

Invariant:
Without a roaster note there is nothing to compare against and the result is
None; otherwise every score field is an integer in [0, 100].
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .config import DEFAULT_CONFIG, PROFILE_STRATEGY, ScoringConfig
from .dictionaries import english_terms
from .logger import get_logger
from .normalize import clamp_score
from .note_matching import SENSORY, match_note_terms


class Level(str, Enum):
    LEVEL1 = "level1"
    LEVEL2 = "level2"


LEVEL_LABELS = {
    Level.LEVEL1: "flavor only",
    Level.LEVEL2: "flavor + sensory",
}


@dataclass(frozen=True)
class MatchScore:
    level: Level
    score: int
    flavor_score: int
    sensory_score: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "score": self.score,
            "details": {
                "flavor_score": self.flavor_score,
                "sensory_score": self.sensory_score,
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchScore":
        details = data.get("details", {})
        return cls(
            level=Level(data["level"]),
            score=int(data["score"]),
            flavor_score=int(details.get("flavor_score", 0)),
            sensory_score=details.get("sensory_score"),
        )


SCORE_GRADES = {
    "EXCELLENT": {"min": 90, "max": 100, "label": "Excellent", "emoji": "🎯"},
    "VERY_GOOD": {"min": 80, "max": 89, "label": "Very good", "emoji": "✨"},
    "GOOD": {"min": 70, "max": 79, "label": "Good", "emoji": "👍"},
    "FAIR": {"min": 60, "max": 69, "label": "Fair", "emoji": "🤔"},
    "POOR": {"min": 0, "max": 59, "label": "Needs work", "emoji": "😅"},
}


# Sensory scoring strategies


class SensoryScorer:
    """Scores a record's sensory expressions against the roaster note (0-100)."""

    measured = True

    def score(self, sensory_expressions: Mapping[str, Any], roaster_notes: str) -> int:
        raise NotImplementedError


class PlaceholderSensoryScorer(SensoryScorer):
    """
    Constant sensory score.

    Level 2 records shipped with a fixed sensory score while a real
    comparison was pending. Kept as an explicit strategy so callers can tell
    the value is not measured (see `measured`).
    """

    measured = False

    def __init__(self, value: int = DEFAULT_CONFIG.placeholder_sensory_score):
        self.value = value

    def score(self, sensory_expressions: Mapping[str, Any], roaster_notes: str) -> int:
        return self.value


class ProfileSensoryScorer(SensoryScorer):
    """Matches the flattened sensory expressions against the note's sensory keywords."""

    def __init__(self, threshold: float = DEFAULT_CONFIG.match_threshold):
        self.threshold = threshold

    def score(self, sensory_expressions: Mapping[str, Any], roaster_notes: str) -> int:
        terms = flatten_expressions(sensory_expressions)
        return match_note_terms(terms, roaster_notes, SENSORY, self.threshold).score


def sensory_scorer_for(config: ScoringConfig) -> SensoryScorer:
    if config.sensory_strategy == PROFILE_STRATEGY:
        return ProfileSensoryScorer(config.match_threshold)
    return PlaceholderSensoryScorer(config.placeholder_sensory_score)


def flatten_expressions(sensory_expressions: Optional[Mapping[str, Any]]) -> List[str]:
    """All non-empty string descriptors, category order preserved."""
    if not isinstance(sensory_expressions, Mapping):
        return []

    terms: List[str] = []
    for values in sensory_expressions.values():
        if not isinstance(values, (list, tuple)):
            continue
        terms.extend(v for v in values if isinstance(v, str) and v.strip())
    return terms


def has_sensory_expressions(sensory_expressions: Optional[Mapping[str, Any]]) -> bool:
    return bool(flatten_expressions(sensory_expressions))


def determine_match_score_level(tasting_data: Mapping[str, Any]) -> Level:
    if has_sensory_expressions(tasting_data.get("sensory_expressions")):
        return Level.LEVEL2
    return Level.LEVEL1


def calculate_flavor_match(selected_flavors, roaster_notes: Optional[str]) -> int:
    """
    Percentage of selected flavors found in the roaster note.

    Each flavor is looked up in the Korean -> English synonym table (falling
    back to the flavor itself) and counts as found if any of its terms occurs
    in the note, case-insensitively. Every selection counts toward the total;
    a blank or non-string entry is simply never found.
    """
    total = len(selected_flavors or [])
    flavors = [f for f in selected_flavors or [] if isinstance(f, str) and f.strip()]
    if not flavors or not roaster_notes:
        return 0

    roaster_text = roaster_notes.lower()
    matched = sum(
        1 for flavor in flavors
        if any(term.lower() in roaster_text for term in english_terms(flavor))
    )
    return clamp_score(matched / total * 100)


def calculate_match_score(
    tasting_data: Mapping[str, Any],
    config: ScoringConfig = DEFAULT_CONFIG,
    sensory_scorer: Optional[SensoryScorer] = None,
) -> Optional[MatchScore]:
    """
    Compute the Match Score for a completed tasting record.

    Args:
        tasting_data: {selected_flavors, sensory_expressions, roaster_notes}
        config: Level 2 weighting and sensory strategy
        sensory_scorer: Overrides the strategy picked from config

    Returns:
        MatchScore, or None when the record has no roaster note
    """
    roaster_notes = tasting_data.get("roaster_notes")
    if not isinstance(roaster_notes, str) or not roaster_notes.strip():
        get_logger().debug("No roaster note, match score not computable")
        return None

    level = determine_match_score_level(tasting_data)
    flavor_score = calculate_flavor_match(tasting_data.get("selected_flavors"), roaster_notes)

    if level == Level.LEVEL1:
        result = MatchScore(Level.LEVEL1, flavor_score, flavor_score, None)
    else:
        scorer = sensory_scorer or sensory_scorer_for(config)
        sensory_score = clamp_score(
            scorer.score(tasting_data.get("sensory_expressions") or {}, roaster_notes)
        )
        score = clamp_score(
            flavor_score * config.level2_flavor_weight
            + sensory_score * config.level2_sensory_weight
        )
        result = MatchScore(Level.LEVEL2, score, flavor_score, sensory_score)

    get_logger().debug(
        "Match score computed",
        level=result.level.value,
        score=result.score,
        flavor_score=result.flavor_score,
        sensory_score=result.sensory_score,
    )
    return result


def get_score_grade(score: Optional[int]) -> Optional[Dict[str, Any]]:
    if score is None:
        return None

    for key, grade in SCORE_GRADES.items():
        if grade["min"] <= score <= grade["max"]:
            return {"key": key, **grade}
    return {"key": "POOR", **SCORE_GRADES["POOR"]}


def generate_match_score_text(
    match_score: Optional[MatchScore],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> str:
    if match_score is None:
        return "Match score could not be calculated."

    grade = get_score_grade(match_score.score)
    lines = [
        f"{grade['emoji']} {match_score.score} points ({grade['label']})",
        "",
        f"Flavor match: {match_score.flavor_score} points",
    ]

    if match_score.level == Level.LEVEL1:
        lines.append("* Add sensory expressions for a more precise match.")
    else:
        fw = config.level2_flavor_weight
        sw = config.level2_sensory_weight
        lines.append(f"Sensory match: {match_score.sensory_score} points")
        lines.append(
            f"Final score: ({match_score.flavor_score} × {fw}) + "
            f"({match_score.sensory_score} × {sw}) = {match_score.score} points"
        )

    return "\n".join(lines)


def describe_level(level: Level) -> str:
    return LEVEL_LABELS[level]