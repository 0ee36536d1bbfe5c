"""
Tests for the numeric sensory match calculator.
"""

import pytest
from cupnote.config import DEFAULT_CONFIG
from cupnote.match_calculator import (
    calculate_detailed_match,
    calculate_match_score,
    flavor_f1,
    sensory_similarity,
)


class TestFlavorF1:
    """Test flavor list F1."""

    def test_identical_lists(self):
        score, matches = flavor_f1(["chocolate", "caramel"], ["chocolate", "caramel"])
        assert score == pytest.approx(100.0)
        assert matches == ["chocolate", "caramel"]

    def test_partial_overlap(self):
        """P = 1/2, R = 1/3 -> F1 = 0.4."""
        score, matches = flavor_f1(["chocolate", "berry"], ["chocolate", "caramel", "nutty"])
        assert score == pytest.approx(40.0)
        assert matches == ["chocolate"]

    def test_empty_roaster_list(self):
        score, matches = flavor_f1(["chocolate"], [])
        assert score == 0.0
        assert matches == []

    def test_empty_user_list(self):
        score, _ = flavor_f1([], ["chocolate"])
        assert score == 0.0

    def test_case_insensitive(self):
        score, matches = flavor_f1(["Chocolate "], ["chocolate"])
        assert score == pytest.approx(100.0)
        assert matches == ["chocolate"]


class TestSensorySimilarity:
    """Test attribute distance scoring."""

    def test_identical(self, identical_selections):
        score, diffs = sensory_similarity(identical_selections, dict(identical_selections))
        assert score == pytest.approx(100.0)
        assert all(d == 0 for d in diffs.values())

    def test_one_attribute_off_by_two(self, identical_selections):
        roaster = dict(identical_selections, acidity=5)
        score, diffs = sensory_similarity(identical_selections, roaster)
        assert score == pytest.approx(87.5)
        assert diffs["acidity"] == -2

    def test_missing_attributes_skipped(self):
        score, diffs = sensory_similarity({"acidity": 3}, {"acidity": 3, "body": 1})
        assert score == pytest.approx(100.0)
        assert list(diffs) == ["acidity"]

    def test_nothing_comparable(self):
        score, diffs = sensory_similarity({"acidity": "high"}, {"acidity": 3})
        assert score == 0.0
        assert diffs == {}

    def test_gap_clamped_to_scale(self):
        score, _ = sensory_similarity({"body": 0}, {"body": 5})
        assert score == 0.0

    def test_custom_scale(self):
        score, _ = sensory_similarity({"body": 1}, {"body": 6}, scale=(1, 11))
        assert score == pytest.approx(50.0)


class TestCalculateMatch:
    """Test the weighted total."""

    def test_identical_is_100(self, identical_selections):
        assert calculate_match_score(identical_selections, dict(identical_selections)) == 100

    def test_no_roaster_flavors(self, identical_selections):
        roaster = dict(identical_selections, flavors=[])
        detail = calculate_detailed_match(dict(identical_selections, flavors=["chocolate"]), roaster)
        assert detail.flavor_score == 0
        assert detail.sensory_score == 100
        assert detail.total_score == 60

    def test_sensory_rounds_half_up(self, identical_selections):
        roaster = dict(identical_selections, acidity=5)
        detail = calculate_detailed_match(identical_selections, roaster)
        assert detail.sensory_score == 88
        assert detail.total_score == 93  # 40 + 52.5

    def test_detail_fields(self, identical_selections):
        user = dict(identical_selections, acidity=5)
        detail = calculate_detailed_match(user, identical_selections)
        assert detail.flavor_matches == ["chocolate", "caramel", "nutty"]
        assert detail.sensory_differences["acidity"] == 2

    def test_weights_from_config(self, identical_selections):
        config = DEFAULT_CONFIG.with_overrides(numeric_flavor_weight=1.0, numeric_sensory_weight=0.0)
        roaster = dict(identical_selections, acidity=1, body=1)
        assert calculate_match_score(identical_selections, roaster, config) == 100
