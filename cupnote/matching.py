"""
Composite Scoring and Best-Match Assignment.

Responsibilities:
- Blend the similarity signals for one keyword/selection pair into a
  MatchResult with a classified match type and explanation.
- Greedily assign user selections to keywords, each selection at most once.

Non-Responsibilities:
- No dictionary lookups or roaster-note keyword extraction.
- No 0-100 score aggregation.

Invariant:
Given identical inputs, this module must always return the same matches,
in the same order, with the same explanations.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from .normalize import clamp_unit, normalize_token, round_half_up
from .similarity import context_bonus, phonetic_similarity, string_similarity, substring_match

DEFAULT_THRESHOLD = 0.6

SUBSTRING_EXACT_CUTOFF = 0.7
SUBSTRING_CONFIDENCE = 0.9
CONTEXTUAL_CUTOFF = 0.1

STRING_WEIGHT = 0.5
PHONETIC_WEIGHT = 0.3
CONTEXT_WEIGHT = 0.2


class MatchType(str, Enum):
    EXACT = "exact"
    FUZZY = "fuzzy"
    PHONETIC = "phonetic"
    CONTEXTUAL = "contextual"


EXPLANATIONS = {
    MatchType.FUZZY: "fuzzy match",
    MatchType.PHONETIC: "phonetic similarity",
    MatchType.CONTEXTUAL: "contextual match",
}


@dataclass(frozen=True)
class MatchResult:
    """Why a user selection was credited against a keyword."""

    keyword: str
    user_selection: str
    similarity: float
    confidence: float
    match_type: MatchType
    explanation: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["match_type"] = self.match_type.value
        return data


def _classify(string_sim: float, phonetic_sim: float, context: float) -> MatchType:
    # Priority order: context evidence outranks the phonetic label
    if context > CONTEXTUAL_CUTOFF:
        return MatchType.CONTEXTUAL
    if phonetic_sim > string_sim:
        return MatchType.PHONETIC
    return MatchType.FUZZY


def score(keyword: str, selection: str, note: str = "") -> MatchResult:
    """
    Score one keyword/selection pair.

    Decision order, first qualifying branch wins:
        1. case-insensitive equality -> exact, 1.0 / 1.0
        2. substring score > 0.7     -> exact, substring score / 0.9
        3. blend 0.5 * edit + 0.3 * phonetic + 0.2 * context,
           classified contextual / phonetic / fuzzy

    Args:
        keyword: Taxonomy-side token (e.g. a roaster-note flavor word)
        selection: What the user picked
        note: Raw roaster note used for the context bonus

    Returns:
        MatchResult with similarity and confidence in [0, 1]
    """
    if normalize_token(keyword) == normalize_token(selection):
        return MatchResult(keyword, selection, 1.0, 1.0, MatchType.EXACT, "exact match")

    substring_score = substring_match(keyword, selection)
    if substring_score > SUBSTRING_EXACT_CUTOFF:
        return MatchResult(
            keyword,
            selection,
            substring_score,
            SUBSTRING_CONFIDENCE,
            MatchType.EXACT,
            "substring match",
        )

    string_sim = string_similarity(keyword, selection)
    phonetic_sim = phonetic_similarity(keyword, selection)
    context = context_bonus(keyword, selection, note) if note else 0.0

    similarity = clamp_unit(
        string_sim * STRING_WEIGHT
        + phonetic_sim * PHONETIC_WEIGHT
        + context * CONTEXT_WEIGHT
    )
    match_type = _classify(string_sim, phonetic_sim, context)
    confidence = clamp_unit(similarity + context * 0.5)

    return MatchResult(
        keyword,
        selection,
        similarity,
        confidence,
        match_type,
        EXPLANATIONS[match_type],
    )


def find_best_matches(
    keywords: Sequence[str],
    selections: Sequence[str],
    note: str = "",
    threshold: float = DEFAULT_THRESHOLD,
) -> List[MatchResult]:
    """
    Greedy keyword -> selection assignment.

    Keywords are processed in input order; each takes the highest-scoring
    unused selection at or above threshold (first one wins a tie). A claimed
    selection is never offered to a later keyword. Keywords without a match
    are omitted.

    This is not a maximum-weight bipartite matching: earlier keywords have
    first claim on the best-fitting selection.

    Returns:
        MatchResults sorted by similarity, highest first
    """
    results: List[MatchResult] = []
    used = set()

    for keyword in keywords:
        best: Optional[MatchResult] = None

        for selection in selections:
            if selection in used:
                continue
            candidate = score(keyword, selection, note)
            if candidate.similarity < threshold:
                continue
            if best is None or candidate.similarity > best.similarity:
                best = candidate

        if best is not None:
            results.append(best)
            used.add(best.user_selection)

    return sorted(results, key=lambda r: r.similarity, reverse=True)


def format_matches(results: Sequence[MatchResult]) -> str:
    """One line per match: 'selection → keyword (pct%, explanation)'."""
    if not results:
        return "no matches"

    return "\n".join(
        f"{r.user_selection} → {r.keyword} ({round_half_up(r.similarity * 100)}%, {r.explanation})"
        for r in results
    )
