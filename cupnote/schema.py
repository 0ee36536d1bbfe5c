from typing import Any, Dict, List

from .dictionaries import NUMERIC_ATTRIBUTES

OPTIONAL_STR_FIELDS = ["id", "roaster_notes"]
MAX_SELECTIONS = 50


def _is_str_list(v: Any) -> bool:
    return isinstance(v, list) and all(isinstance(x, str) for x in v)


def validate_tasting_data(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Checks the shape of a tasting record before it reaches the engine;
    the engine itself never rejects input.
    """
    errors: List[str] = []

    if not isinstance(data, dict):
        return ["Tasting record must be a JSON object"]

    if "selected_flavors" not in data:
        errors.append("Missing required field: selected_flavors")
    elif not _is_str_list(data["selected_flavors"]):
        errors.append("Field 'selected_flavors' must be a list of strings")
    elif len(data["selected_flavors"]) > MAX_SELECTIONS:
        errors.append(f"Field 'selected_flavors' exceeds {MAX_SELECTIONS} entries")

    for f in OPTIONAL_STR_FIELDS:
        if f in data and data[f] is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    expressions = data.get("sensory_expressions")
    if expressions is not None:
        if not isinstance(expressions, dict):
            errors.append("Field 'sensory_expressions' must be an object of category -> list")
        else:
            for category, values in expressions.items():
                if not _is_str_list(values):
                    errors.append(f"Sensory category '{category}' must be a list of strings")

    return errors


def validate_sensory_selections(data: Dict[str, Any], scale=(1, 5)) -> List[str]:
    """Validate the {flavors, acidity, sweetness, body, aftertaste} shape."""
    errors: List[str] = []

    if not isinstance(data, dict):
        return ["Sensory selections must be a JSON object"]

    if "flavors" in data and not _is_str_list(data["flavors"]):
        errors.append("Field 'flavors' must be a list of strings")

    low, high = scale
    for attr in NUMERIC_ATTRIBUTES:
        if attr not in data:
            continue
        value = data[attr]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            errors.append(f"Field '{attr}' must be a number")
        elif not low <= value <= high:
            errors.append(f"Field '{attr}' must be within {low}-{high}")

    return errors
