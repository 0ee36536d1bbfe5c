"""
Hangul syllable decomposition.

Responsibilities:
- Split a precomposed Hangul syllable (U+AC00..U+D7A3) into its
  initial / medial / final jamo using block arithmetic.
- Flatten a whole string into a jamo sequence for phonetic comparison.

Non-Responsibilities:
- No similarity scoring.
- No normalization of compatibility or conjoining jamo input.

Invariant:
Decomposition is total: every character yields 1-3 strings, never an error.
"""

from typing import List

HANGUL_BASE = 0xAC00
HANGUL_LAST = 0xD7A3
MEDIALS_PER_INITIAL = 588  # 21 medials * 28 finals
FINALS_PER_MEDIAL = 28

INITIALS = (
    "ㄱ", "ㄲ", "ㄴ", "ㄷ", "ㄸ", "ㄹ", "ㅁ", "ㅂ", "ㅃ", "ㅅ",
    "ㅆ", "ㅇ", "ㅈ", "ㅉ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)

MEDIALS = (
    "ㅏ", "ㅐ", "ㅑ", "ㅒ", "ㅓ", "ㅔ", "ㅕ", "ㅖ", "ㅗ", "ㅘ", "ㅙ",
    "ㅚ", "ㅛ", "ㅜ", "ㅝ", "ㅞ", "ㅟ", "ㅠ", "ㅡ", "ㅢ", "ㅣ",
)

# Index 0 means "no final consonant". Cluster finals are spelled out as
# their two component consonants so they compare like the separate letters.
FINALS = (
    "", "ㄱ", "ㄲ", "ㄱㅅ", "ㄴ", "ㄴㅈ", "ㄴㅎ", "ㄷ", "ㄹ", "ㄹㄱ",
    "ㄹㅁ", "ㄹㅂ", "ㄹㅅ", "ㄹㅌ", "ㄹㅍ", "ㄹㅎ", "ㅁ", "ㅂ", "ㅂㅅ", "ㅅ",
    "ㅆ", "ㅇ", "ㅈ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)


def is_hangul_syllable(ch: str) -> bool:
    return len(ch) == 1 and HANGUL_BASE <= ord(ch) <= HANGUL_LAST


def decompose_hangul(ch: str) -> List[str]:
    """
    Decompose a single character into jamo.

    Args:
        ch: One character

    Returns:
        [initial, medial] or [initial, medial, final] for a Hangul syllable;
        [ch] unchanged for anything else.
    """
    if not is_hangul_syllable(ch):
        return [ch]

    code = ord(ch) - HANGUL_BASE
    initial = code // MEDIALS_PER_INITIAL
    medial = (code % MEDIALS_PER_INITIAL) // FINALS_PER_MEDIAL
    final = code % FINALS_PER_MEDIAL

    parts = [INITIALS[initial], MEDIALS[medial], FINALS[final]]
    return [p for p in parts if p]


def to_jamo(text: str) -> str:
    """Flatten every character of text into one jamo string."""
    return "".join(part for ch in text for part in decompose_hangul(ch))
