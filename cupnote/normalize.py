import math
from typing import List


def normalize_token(s: str) -> str:
    return s.strip().lower()


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def normalize_tokens(tokens) -> List[str]:
    # Drops blanks so an empty chip in the UI never counts as a selection
    return [normalize_token(t) for t in tokens or [] if isinstance(t, str) and t.strip()]


def round_half_up(value: float) -> int:
    # Half-up like the web client's Math.round; builtin round() is banker's rounding
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))
