"""
Unit tests for numeric helpers
"""

import pytest

from src.utils.rounding import clamp, round_half_away


class TestRoundHalfAway:
    @pytest.mark.parametrize("value,expected", [
        (2.5, 3),
        (0.5, 1),
        (-2.5, -3),
        (2.49, 2),
        (67.0, 67),
        (0, 0),
    ])
    def test_rounding(self, value, expected):
        assert round_half_away(value) == expected


class TestClamp:
    def test_clamp(self):
        assert clamp(-5, 0, 100) == 0
        assert clamp(105, 0, 100) == 100
        assert clamp(42, 0, 100) == 42
