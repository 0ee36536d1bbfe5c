"""
Scoring configuration.

The web client used different flavor/sensory weightings depending on the
entry point (50/50 for Level 2, 40/60 for numeric attributes, 70/30 for
roaster-note profile matching). Each is kept as its own named setting so a
caller chooses one explicitly instead of inheriting whichever call site ran.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Dict, Mapping, Optional, Tuple

PLACEHOLDER_STRATEGY = "placeholder"
PROFILE_STRATEGY = "profile"
SENSORY_STRATEGIES = (PLACEHOLDER_STRATEGY, PROFILE_STRATEGY)

ENV_PREFIX = "CUPNOTE_"


class ConfigError(ValueError):
    """Raised when scoring settings are out of range or inconsistent."""
    pass


@dataclass(frozen=True)
class ScoringConfig:
    level2_flavor_weight: float = 0.5
    level2_sensory_weight: float = 0.5
    numeric_flavor_weight: float = 0.4
    numeric_sensory_weight: float = 0.6
    note_flavor_weight: float = 0.7
    note_sensory_weight: float = 0.3
    match_threshold: float = 0.6
    placeholder_sensory_score: int = 75
    sensory_scale_min: int = 1
    sensory_scale_max: int = 5
    sensory_strategy: str = PLACEHOLDER_STRATEGY

    def __post_init__(self):
        self.validate()

    @property
    def sensory_scale(self) -> Tuple[int, int]:
        return (self.sensory_scale_min, self.sensory_scale_max)

    def validate(self) -> None:
        pairs = {
            "level2": (self.level2_flavor_weight, self.level2_sensory_weight),
            "numeric": (self.numeric_flavor_weight, self.numeric_sensory_weight),
            "note": (self.note_flavor_weight, self.note_sensory_weight),
        }
        for name, (flavor, sensory) in pairs.items():
            if flavor < 0 or sensory < 0:
                raise ConfigError(f"{name} weights must be non-negative")
            if abs(flavor + sensory - 1.0) > 1e-6:
                raise ConfigError(f"{name} weights must sum to 1.0 (got {flavor} + {sensory})")

        if not 0.0 <= self.match_threshold <= 1.0:
            raise ConfigError(f"match_threshold must be within [0, 1] (got {self.match_threshold})")
        if not 0 <= self.placeholder_sensory_score <= 100:
            raise ConfigError("placeholder_sensory_score must be within [0, 100]")
        if self.sensory_scale_max <= self.sensory_scale_min:
            raise ConfigError("sensory_scale_max must be greater than sensory_scale_min")
        if self.sensory_strategy not in SENSORY_STRATEGIES:
            raise ConfigError(
                f"sensory_strategy must be one of {', '.join(SENSORY_STRATEGIES)} "
                f"(got {self.sensory_strategy!r})"
            )

    def with_overrides(self, **overrides) -> "ScoringConfig":
        return replace(self, **overrides)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ScoringConfig":
        """
        Build settings from CUPNOTE_* variables, e.g. CUPNOTE_MATCH_THRESHOLD=0.7.

        Args:
            environ: Mapping to read from (default: os.environ)

        Raises:
            ConfigError: If a value cannot be parsed or fails validation
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, object] = {}

        for field in fields(cls):
            raw = environ.get(ENV_PREFIX + field.name.upper())
            if raw is None or raw.strip() == "":
                continue
            try:
                if field.type in (float, "float"):
                    values[field.name] = float(raw)
                elif field.type in (int, "int"):
                    values[field.name] = int(raw)
                else:
                    values[field.name] = raw.strip().lower()
            except ValueError as e:
                raise ConfigError(f"Invalid value for {ENV_PREFIX}{field.name.upper()}: {raw!r}") from e

        return cls(**values)


DEFAULT_CONFIG = ScoringConfig()
