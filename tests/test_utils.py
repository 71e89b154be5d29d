import pytest

from zetacore.utils import round_div_ties_away_from_zero


class TestRoundDiv:
    """Tests for round_div_ties_away_from_zero"""

    def test_main(self):
        """Nearest integer, halves away from zero"""
        assert round_div_ties_away_from_zero(7, 2) == 4
        assert round_div_ties_away_from_zero(-7, 2) == -4
        assert round_div_ties_away_from_zero(5, 3) == 2
        assert round_div_ties_away_from_zero(-4, 3) == -1
        assert round_div_ties_away_from_zero(0, 5) == 0

    def test_bad_divisor(self):
        """The divisor must be positive"""
        with pytest.raises(ValueError):
            round_div_ties_away_from_zero(1, 0)
