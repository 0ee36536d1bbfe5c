"""
Numeric Sensory Match Calculator.

Responsibilities:
- Compare a user's flavor list and 1-5 (or configured) attribute ratings
  against the roaster's, producing one 0-100 score.
- Report per-attribute signed differences and matched flavors.

Non-Responsibilities:
- No free-text parsing of roaster notes.
- No persistence.

Invariant:
All returned scores are integers in [0, 100]. Missing attributes are
skipped, never treated as a mismatch.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .config import DEFAULT_CONFIG, ScoringConfig
from .dictionaries import NUMERIC_ATTRIBUTES
from .normalize import clamp_score, normalize_tokens


@dataclass(frozen=True)
class DetailedMatch:
    total_score: int
    flavor_score: int
    sensory_score: int
    flavor_matches: List[str] = field(default_factory=list)
    sensory_differences: Dict[str, float] = field(default_factory=dict)


def flavor_f1(user_flavors, roaster_flavors) -> Tuple[float, List[str]]:
    """
    F1 of the two flavor lists on a 0-100 scale.

    Returns:
        (score, matched user flavors in user order)
    """
    user = normalize_tokens(user_flavors)
    roaster = normalize_tokens(roaster_flavors)
    if not roaster:
        return 0.0, []

    roaster_set = set(roaster)
    matches = [f for f in user if f in roaster_set]

    precision = len(matches) / max(len(user), 1)
    recall = len(matches) / len(roaster)
    if precision + recall == 0:
        return 0.0, matches

    return (2 * precision * recall / (precision + recall)) * 100, matches


def sensory_similarity(
    user: Mapping[str, Any],
    roaster: Mapping[str, Any],
    scale: Tuple[int, int] = (1, 5),
    attributes=NUMERIC_ATTRIBUTES,
) -> Tuple[float, Dict[str, float]]:
    """
    Average of 1 - |u - r| / (max - min) across attributes, on a 0-100 scale.

    Args:
        user: attribute -> rating
        roaster: attribute -> rating
        scale: (min, max) of the rating scale
        attributes: Attribute names to compare

    Returns:
        (score, attribute -> signed difference u - r)
    """
    low, high = scale
    span = high - low
    total = 0.0
    compared = 0
    differences: Dict[str, float] = {}

    for attr in attributes:
        u = _rating(user.get(attr))
        r = _rating(roaster.get(attr))
        if u is None or r is None:
            continue
        differences[attr] = u - r
        gap = min(abs(u - r), span)
        total += 1 - gap / span
        compared += 1

    if compared == 0:
        return 0.0, differences
    return (total / compared) * 100, differences


def _rating(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def calculate_detailed_match(
    selections: Mapping[str, Any],
    roaster_notes: Mapping[str, Any],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> DetailedMatch:
    """
    Score user selections against roaster notes with the numeric weighting
    (flavor 40% / sensory 60% by default).

    Args:
        selections: {flavors, acidity, sweetness, body, aftertaste}
        roaster_notes: same shape as selections
        config: Weights and rating scale

    Returns:
        DetailedMatch with rounded component scores
    """
    flavor, matches = flavor_f1(selections.get("flavors"), roaster_notes.get("flavors"))
    sensory, differences = sensory_similarity(selections, roaster_notes, config.sensory_scale)

    total = flavor * config.numeric_flavor_weight + sensory * config.numeric_sensory_weight

    return DetailedMatch(
        total_score=clamp_score(total),
        flavor_score=clamp_score(flavor),
        sensory_score=clamp_score(sensory),
        flavor_matches=matches,
        sensory_differences=differences,
    )


def calculate_match_score(
    selections: Mapping[str, Any],
    roaster_notes: Mapping[str, Any],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> int:
    return calculate_detailed_match(selections, roaster_notes, config).total_score
