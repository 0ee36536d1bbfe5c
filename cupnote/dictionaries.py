"""
Fixed flavor / sensory dictionaries.

Loaded once from package data into read-only mappings. Nothing at runtime
extends or mutates them.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

DATA_PATH = Path(__file__).parent / "data" / "dictionaries.json"

SENSORY_CATEGORIES = ("acidity", "sweetness", "bitterness", "body", "aroma", "finish")
NUMERIC_ATTRIBUTES = ("acidity", "sweetness", "body", "aftertaste")


@dataclass(frozen=True)
class TermProfile:
    """Tiered vocabulary for one roaster-note keyword."""

    keyword: str
    primary: Tuple[str, ...]
    related: Tuple[str, ...]
    similar: Tuple[str, ...]
    opposite: Tuple[str, ...]
    intensity: int
    categories: Tuple[str, ...]
    confidence: float


def _load_raw(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _freeze_synonyms(raw: Dict[str, Any]) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({term: tuple(values) for term, values in raw.items()})


def _freeze_profiles(raw: Dict[str, Any]) -> Mapping[str, TermProfile]:
    profiles = {}
    for keyword, entry in raw.items():
        profiles[keyword] = TermProfile(
            keyword=keyword,
            primary=tuple(entry.get("primary", ())),
            related=tuple(entry.get("related", ())),
            similar=tuple(entry.get("similar", ())),
            opposite=tuple(entry.get("opposite", ())),
            intensity=int(entry.get("intensity", 3)),
            categories=tuple(entry.get("categories", ())),
            confidence=float(entry.get("confidence", 1.0)),
        )
    return MappingProxyType(profiles)


_raw = _load_raw(DATA_PATH)

# Korean flavor term -> English terms a roaster is likely to write
FLAVOR_SYNONYMS: Mapping[str, Tuple[str, ...]] = _freeze_synonyms(_raw["flavor_synonyms"])
FLAVOR_PROFILES: Mapping[str, TermProfile] = _freeze_profiles(_raw["flavor_profiles"])
SENSORY_PROFILES: Mapping[str, TermProfile] = _freeze_profiles(_raw["sensory_profiles"])


def english_terms(flavor: str) -> Tuple[str, ...]:
    """Synonyms for a selected flavor, falling back to the flavor itself."""
    key = flavor.strip()
    return FLAVOR_SYNONYMS.get(key, (key,))
