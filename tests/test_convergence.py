"""
Convergence Tests

Stopping Rules:
---------------
- Below min_rounds (6): never stop
- At or above max_rounds (15): always stop
- Otherwise: top >= 0.6 and (top - second) >= 0.2, both inclusive

Also covers ranking tie-breaks, the remaining-rounds estimate, and progress text.

Run:
----
    pytest tests/test_convergence.py -v
"""

import pytest

from discovery.models.config import DiscoveryConfig
from discovery.stages.convergence import (
    estimate_remaining_rounds,
    progress_message,
    second_best,
    should_stop,
    top_styles,
)


class TestShouldStop:

    def test_boundary_values_stop(self):
        assert should_stop({"modern": 0.6, "minimalist": 0.4}, 6) is True

    def test_just_below_confidence_does_not_stop(self):
        assert should_stop({"modern": 0.59, "minimalist": 0.3}, 6) is False

    def test_small_gap_does_not_stop(self):
        assert should_stop({"modern": 1.0, "minimalist": 0.85}, 8) is False

    @pytest.mark.parametrize("rounds", [0, 1, 5])
    def test_never_before_min_rounds(self, rounds):
        assert should_stop({"modern": 1.0}, rounds) is False

    @pytest.mark.parametrize("rounds", [15, 16, 40])
    def test_always_at_max_rounds(self, rounds):
        assert should_stop({"modern": 0.5, "bohemian": 0.5}, rounds) is True

    def test_empty_distribution_never_stops(self):
        assert should_stop({}, 15) is False

    def test_single_style_counts_second_as_zero(self):
        assert should_stop({"modern": 1.0}, 6) is True

    def test_custom_thresholds(self):
        config = DiscoveryConfig(min_rounds=2, max_rounds=4, confidence_threshold=0.9)
        assert should_stop({"modern": 0.8, "bohemian": 0.1}, 3, config) is False
        assert should_stop({"modern": 0.8, "bohemian": 0.1}, 4, config) is True


class TestRanking:

    def test_top_styles_descending(self):
        assert top_styles({"a": 0.2, "b": 1.0, "c": 0.5}) == ["b", "c"]

    def test_ties_ordered_by_style_id(self):
        assert top_styles({"scandinavian": 0.5, "bohemian": 0.5, "modern": 1.0}, 3) == [
            "modern",
            "bohemian",
            "scandinavian",
        ]

    def test_second_best(self):
        assert second_best({"modern": 1.0, "minimalist": 0.5}) == "minimalist"

    def test_second_best_missing(self):
        assert second_best({"modern": 1.0}) is None
        assert second_best({}) is None
        assert second_best({"modern": 1.0, "bohemian": 0.0}) is None


class TestEstimateRemainingRounds:

    def test_unknown_before_three_rounds(self):
        assert estimate_remaining_rounds(2, {"modern": 1.0}) is None

    def test_default_without_scores(self):
        assert estimate_remaining_rounds(3, {}) == 10

    @pytest.mark.parametrize(
        "top,expected",
        [(0.9, 4), (0.7, 4), (0.6, 6), (0.5, 6), (0.3, 8)],
    )
    def test_bands(self, top, expected):
        assert estimate_remaining_rounds(4, {"modern": top}) == expected

    def test_never_negative(self):
        assert estimate_remaining_rounds(12, {"modern": 1.0}) == 0


class TestProgressMessage:

    def test_unknown_estimate(self):
        assert progress_message(2, None) == "Round 2"

    def test_almost_there(self):
        assert progress_message(8, 0) == "Round 8 - Almost there!"

    def test_singular_round(self):
        assert progress_message(7, 1) == "Round 7 - About 1 more round"

    def test_few_rounds(self):
        assert progress_message(5, 3) == "Round 5 - About 3 more rounds"

    def test_range(self):
        assert progress_message(4, 6) == "Round 4 - About 4-8 more rounds"
        assert progress_message(4, 4) == "Round 4 - About 2-6 more rounds"
