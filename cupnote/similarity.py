"""
Similarity Signals for the Match Score engine.

Responsibilities:
- Edit-distance similarity (Levenshtein, normalized to 0-1).
- Phonetic similarity over Hangul jamo sequences.
- Symmetric substring containment scoring.
- Co-occurrence bonus from the raw roaster note.

Non-Responsibilities:
- No weighting between signals.
- No match classification or assignment.

Invariant:
Every function is pure and returns a value in [0, 1] for any string input,
including empty strings.
"""

import re
from typing import List

from .hangul import to_jamo
from .normalize import normalize_text, normalize_token

SENTENCE_SPLIT = re.compile(r"[.!?]")

SAME_SENTENCE_BONUS = 0.2
PROXIMITY_BONUS = 0.15
PROXIMITY_WINDOW = 2
MAX_CONTEXT_BONUS = 0.3


def levenshtein_distance(a: str, b: str) -> int:
    """
    Minimum number of single-character insertions, deletions or
    substitutions turning a into b.
    """
    rows = len(a) + 1
    cols = len(b) + 1
    table: List[List[int]] = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            table[i][j] = min(
                table[i - 1][j] + 1,         # deletion
                table[i][j - 1] + 1,         # insertion
                table[i - 1][j - 1] + cost,  # substitution
            )

    return table[rows - 1][cols - 1]


def string_similarity(a: str, b: str) -> float:
    """
    Edit-distance similarity: 1 - distance / max(len(a), len(b)).

    Returns 0.0 when either side is empty and 1.0 for identical strings.
    Comparison is case-insensitive and ignores surrounding whitespace.
    """
    a = normalize_token(a)
    b = normalize_token(b)
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0

    distance = levenshtein_distance(a, b)
    return 1.0 - distance / max(len(a), len(b))


def phonetic_similarity(a: str, b: str) -> float:
    """
    Edit-distance similarity over the jamo spelling of both strings.

    Two Korean words that sound alike but use different syllable blocks
    (e.g. 카라멜 / 캐러멜) share most of their jamo and score higher here than
    on raw characters. Non-Hangul characters pass through unchanged.
    """
    return string_similarity(to_jamo(normalize_token(a)), to_jamo(normalize_token(b)))


def substring_match(target: str, query: str) -> float:
    """
    Containment score between target and query.

    target contains query -> min(1, len(query)/len(target) + 0.5)
    query contains target -> min(1, len(target)/len(query) + 0.3)
    otherwise             -> 0
    """
    target = normalize_token(target)
    query = normalize_token(query)
    if not target or not query:
        return 0.0

    if query in target:
        return min(1.0, len(query) / len(target) + 0.5)
    if target in query:
        return min(1.0, len(target) / len(query) + 0.3)
    return 0.0


def context_bonus(keyword: str, selection: str, note: str) -> float:
    """
    Bonus for keyword and selection appearing together in the roaster note.

    - +0.2 for every sentence (split on . ! ?) containing both.
    - +0.15 * (3 - d) / 3 when the first whitespace tokens containing each
      are at most 2 tokens apart (d = index distance).

    The total is capped at 0.3. Missing note or tokens contribute nothing.
    """
    keyword = normalize_token(keyword)
    selection = normalize_token(selection)
    if not keyword or not selection or not note or not note.strip():
        return 0.0

    lowered = normalize_text(note)
    bonus = 0.0

    for sentence in SENTENCE_SPLIT.split(lowered):
        if keyword in sentence and selection in sentence:
            bonus += SAME_SENTENCE_BONUS

    words = lowered.split()
    keyword_index = _first_index_containing(words, keyword)
    selection_index = _first_index_containing(words, selection)
    if keyword_index is not None and selection_index is not None:
        distance = abs(keyword_index - selection_index)
        if distance <= PROXIMITY_WINDOW:
            bonus += PROXIMITY_BONUS * (PROXIMITY_WINDOW + 1 - distance) / (PROXIMITY_WINDOW + 1)

    return min(MAX_CONTEXT_BONUS, bonus)


def _first_index_containing(words: List[str], needle: str):
    for index, word in enumerate(words):
        if needle in word:
            return index
    return None
