"""
Roaster-Note Profile Matching.

Responsibilities:
- Extract known flavor / sensory keywords from a free-text roaster note.
- Credit user terms against those keywords by dictionary tier first, then by
  fuzzy assignment for whatever is left.
- Blend flavor and sensory results into one note-based score and message.

Non-Responsibilities:
- No Level 1 / Level 2 decision (see match_score).
- No similarity math of its own (see similarity, matching).

Invariant:
A user term is credited against at most one keyword per call.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from .config import DEFAULT_CONFIG, ScoringConfig
from .dictionaries import FLAVOR_PROFILES, SENSORY_PROFILES, TermProfile
from .matching import MatchResult, find_best_matches
from .normalize import clamp_score, normalize_token, normalize_tokens

NEUTRAL_SCORE = 50
FUZZY_CREDIT = 0.5
MIN_CONTRIBUTION = -0.3
MAX_CONTRIBUTION = 1.2

TIER_POINTS = (
    ("primary", 1.0),
    ("related", 0.8),
    ("similar", 0.6),
)
OPPOSITE_POINTS = -0.3

FLAVOR_INTENSITY = {1: 0.8, 2: 0.9, 3: 1.0, 4: 1.1, 5: 1.2}

FLAVOR = "flavor"
SENSORY = "sensory"


@dataclass(frozen=True)
class TermCredit:
    """How one keyword was credited: by dictionary tier or by fuzzy match."""

    keyword: str
    user_term: str
    tier: str
    points: float
    confidence: float
    fuzzy: Optional[MatchResult] = None


@dataclass(frozen=True)
class NoteMatch:
    score: int
    matched: List[str] = field(default_factory=list)
    details: List[TermCredit] = field(default_factory=list)


@dataclass(frozen=True)
class NoteMatchScore:
    final_score: int
    flavor_score: int
    sensory_score: int
    confidence: float
    message: str
    matched_flavors: List[str]
    matched_sensory: List[str]
    roaster_note: str


def _flavor_intensity(intensity: int) -> float:
    return FLAVOR_INTENSITY.get(intensity, 1.0)


def _sensory_intensity(intensity: int) -> float:
    return 0.9 + intensity / 10


KINDS: Dict[str, dict] = {
    FLAVOR: {
        "profiles": FLAVOR_PROFILES,
        "intensity": _flavor_intensity,
        "bonus_rate": 2.0,
        "bonus_cap": 15.0,
    },
    SENSORY: {
        "profiles": SENSORY_PROFILES,
        "intensity": _sensory_intensity,
        "bonus_rate": 1.5,
        "bonus_cap": 10.0,
    },
}


def extract_keywords(note: str, profiles: Mapping[str, TermProfile]) -> List[str]:
    """
    Profile keys whose key or any primary term appears in the note,
    ordered by profile confidence (highest first, ties in dictionary order).
    """
    if not note or not note.strip():
        return []

    lowered = note.lower()
    found = [
        keyword
        for keyword, profile in profiles.items()
        if keyword in lowered or any(p.lower() in lowered for p in profile.primary)
    ]
    return sorted(found, key=lambda k: profiles[k].confidence, reverse=True)


def extract_flavor_keywords(note: str) -> List[str]:
    return extract_keywords(note, FLAVOR_PROFILES)


def extract_sensory_keywords(note: str) -> List[str]:
    return extract_keywords(note, SENSORY_PROFILES)


def _claim_by_tier(profile: TermProfile, available: List[str]):
    for tier, points in TIER_POINTS:
        vocabulary = {normalize_token(t) for t in getattr(profile, tier)}
        for term in available:
            if term in vocabulary:
                return term, tier, points

    opposites = {normalize_token(t) for t in profile.opposite}
    for term in available:
        if term in opposites:
            return term, "opposite", OPPOSITE_POINTS
    return None


def match_note_terms(
    user_terms: Sequence[str],
    note: str,
    kind: str = FLAVOR,
    threshold: float = DEFAULT_CONFIG.match_threshold,
) -> NoteMatch:
    """
    Score user terms against the keywords a roaster note mentions.

    Each keyword first claims an unused user term from its primary, related
    or similar vocabulary (1.0 / 0.8 / 0.6); a term from the opposite
    vocabulary costs 0.3. Keywords left over go through find_best_matches and
    earn half their fuzzy similarity. Contributions are scaled by keyword
    intensity and confidence, averaged, and topped up with a small bonus for
    the number of terms the user chose.

    Args:
        user_terms: Terms the user selected
        note: Raw roaster note
        kind: "flavor" or "sensory"
        threshold: Minimum fuzzy similarity for the fallback assignment

    Returns:
        NoteMatch; score is NEUTRAL_SCORE when the note offers nothing to compare
    """
    settings = KINDS[kind]
    profiles: Mapping[str, TermProfile] = settings["profiles"]
    intensity_of: Callable[[int], float] = settings["intensity"]

    keywords = extract_keywords(note, profiles)
    if not keywords:
        return NoteMatch(NEUTRAL_SCORE)

    available = normalize_tokens(user_terms)
    credits: Dict[str, TermCredit] = {}

    # Tier vocabulary claims terms before fuzzy assignment runs. The web client
    # assigned fuzzily first and graded by tier afterwards, so scores can differ.
    for keyword in keywords:
        profile = profiles[keyword]
        claimed = _claim_by_tier(profile, available)
        if claimed is None:
            continue
        term, tier, points = claimed
        available.remove(term)
        credits[keyword] = TermCredit(keyword, term, tier, points, profile.confidence)

    leftover = [k for k in keywords if k not in credits]
    for result in find_best_matches(leftover, available, note, threshold):
        credits[result.keyword] = TermCredit(
            result.keyword,
            result.user_selection,
            result.match_type.value,
            result.similarity * FUZZY_CREDIT,
            result.confidence,
            fuzzy=result,
        )

    details = [credits[k] for k in keywords if k in credits]
    if not details:
        base = float(NEUTRAL_SCORE)
    else:
        total = 0.0
        for credit in details:
            profile = profiles[credit.keyword]
            points = credit.points * intensity_of(profile.intensity) * profile.confidence
            total += max(MIN_CONTRIBUTION, min(MAX_CONTRIBUTION, points))
        base = max(0.0, min(100.0, total / len(details) * 100))

    bonus = min(settings["bonus_cap"], len(user_terms or []) * settings["bonus_rate"])
    matched = [c.user_term for c in details if c.points > 0]

    return NoteMatch(clamp_score(base + bonus), matched, details)


def generate_score_message(score: int, matched_count: int, confidence: float) -> str:
    level = "high" if confidence >= 0.8 else "moderate" if confidence >= 0.6 else "low"

    if score >= 90:
        return f"🎯 Near-perfect match! {matched_count} notes line up, with {level} confidence."
    if score >= 80:
        return f"⭐ Great match! You picked up {matched_count} of the roaster's notes."
    if score >= 70:
        return f"👍 Good match! {matched_count} notes in common."
    if score >= 60:
        return f"🤔 Fair match. {matched_count} notes in common."
    if score >= 50:
        return "🎨 A different angle! You found something the roaster didn't describe."
    return "🌟 A new discovery! Your cup tells its own story."


def calculate_note_match_score(
    user_flavors: Sequence[str],
    user_expressions: Sequence[str],
    roaster_note: str,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> NoteMatchScore:
    """Blend flavor and sensory note matching with the note weighting (70/30)."""
    flavor = match_note_terms(user_flavors, roaster_note, FLAVOR, config.match_threshold)
    sensory = match_note_terms(user_expressions, roaster_note, SENSORY, config.match_threshold)

    final = clamp_score(
        flavor.score * config.note_flavor_weight + sensory.score * config.note_sensory_weight
    )

    details = flavor.details + sensory.details
    confidence = sum(d.confidence for d in details) / len(details) if details else 0.5
    matched_count = len(flavor.matched) + len(sensory.matched)

    return NoteMatchScore(
        final_score=final,
        flavor_score=flavor.score,
        sensory_score=sensory.score,
        confidence=confidence,
        message=generate_score_message(final, matched_count, confidence),
        matched_flavors=flavor.matched,
        matched_sensory=sensory.matched,
        roaster_note=roaster_note or "",
    )
