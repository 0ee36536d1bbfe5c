"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
from pathlib import Path
from typing import Dict, Any

from cupnote.logger import reset_logger


@pytest.fixture(autouse=True)
def fresh_logger():
    """Drop the session logger so each test builds its own handlers."""
    yield
    reset_logger()


@pytest.fixture
def level1_tasting() -> Dict[str, Any]:
    """Tasting record with flavors only."""
    return {
        "id": "tasting-001",
        "selected_flavors": ["딸기", "초콜릿"],
        "sensory_expressions": {},
        "roaster_notes": "Strawberry jam, dark chocolate and a long finish.",
    }


@pytest.fixture
def level2_tasting() -> Dict[str, Any]:
    """Tasting record with flavors and sensory expressions."""
    return {
        "id": "tasting-002",
        "selected_flavors": ["딸기"],
        "sensory_expressions": {
            "acidity": ["밝은"],
            "body": [],
        },
        "roaster_notes": "Juicy strawberry.",
    }


@pytest.fixture
def invalid_tasting() -> Dict[str, Any]:
    """Tasting record with the wrong shapes."""
    return {
        "id": 42,
        "selected_flavors": "딸기",
        "sensory_expressions": ["bright"],
    }


@pytest.fixture
def identical_selections() -> Dict[str, Any]:
    """Numeric selections; the roaster side is identical."""
    return {
        "flavors": ["chocolate", "caramel", "nutty"],
        "acidity": 3,
        "sweetness": 4,
        "body": 3,
        "aftertaste": 4,
    }


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON payload to a temporary file and return its path."""
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def temp_db(tmp_path) -> Path:
    """Path for a temporary SQLite store (not yet created)."""
    return tmp_path / "data" / "cupnote.db"
