import operator

import pytest

from zetacore import Ibig, Rational, Ubig
from zetacore.bigint import LIMB_BITS


class TestUbig:
    """Tests for Ubig"""

    def test_limbs(self):
        """Limbs are 64-bit, least significant first, with no leading zero limbs"""
        assert Ubig(0).limbs == ()
        assert Ubig(5).limbs == (5,)
        assert Ubig(2**64 + 5).limbs == (5, 1)
        assert Ubig(2**128).limbs == (0, 0, 1)

    def test_from_limbs(self):
        """from_limbs inverts limbs and strips high zero limbs"""
        for n in (0, 1, 2**63, 2**64 - 1, 2**64, 3**100):
            u = Ubig(n)
            assert Ubig.from_limbs(u.limbs) == u
            assert int(Ubig.from_limbs(u.limbs)) == n

        assert Ubig.from_limbs([7, 0, 0]).limbs == (7,)

    def test_from_limbs_range(self):
        """Limbs must fit in a word"""
        with pytest.raises(ValueError):
            Ubig.from_limbs([2**LIMB_BITS])

        with pytest.raises(ValueError):
            Ubig.from_limbs([-1])

    def test_negative(self):
        """Unsigned means unsigned"""
        with pytest.raises(ValueError):
            Ubig(-1)

    def test_identities(self):
        """zero() and one()"""
        assert Ubig.zero() == 0
        assert not Ubig.zero()
        assert Ubig.one() == 1

    def test_ordering(self):
        """Ordering follows the integer value, across limb counts"""
        values = [Ubig(n) for n in (2**70, 3, 2**64, 0, 2**64 - 1, 2**70 + 1)]
        assert [int(u) for u in sorted(values)] == sorted(int(u) for u in values)
        assert Ubig(2**64) > Ubig(2**64 - 1)
        assert Ubig(3) < 4
        assert Ubig(3) <= Ubig(3)

    def test_eq_hash(self):
        """Equal to the same int, hashed like it"""
        assert Ubig(12) == 12
        assert Ubig(12) != Ubig(13)
        assert hash(Ubig(2**80)) == hash(2**80)
        assert Ubig(3) != "3"

    def test_add_mul(self):
        """+ and * follow the integer value and stay unsigned"""
        big = 2**64 - 1
        assert Ubig(big) + Ubig(1) == 2**64
        assert (Ubig(big) + 1).limbs == (0, 1)
        assert 1 + Ubig(2) == Ubig(3)
        assert Ubig(2**40) * Ubig(2**40) == 2**80
        assert 3 * Ubig(5) == 15
        assert isinstance(Ubig(2) * 3, Ubig)
        with pytest.raises(ValueError):
            _ = Ubig(2) + -3
        with pytest.raises(TypeError):
            _ = Ubig(2) + 1.5

    def test_index(self):
        """Usable wherever an int is expected"""
        assert operator.index(Ubig(2**65)) == 2**65
        assert Rational(Ubig(6), Ubig(4)) == Rational(3, 2)
        assert Ubig(9).bit_length() == 4
        assert Ubig(2**64).bit_length() == 65
        assert Ubig(0).bit_length() == 0

    def test_repr(self):
        """repr and str"""
        assert repr(Ubig(42)) == "Ubig(42)"
        assert str(Ubig(2**64)) == str(2**64)

    def test_factor(self):
        """Ubig opts into unique factorization"""
        assert Ubig(360).factor() == [2, 2, 2, 3, 3, 5]


class TestIbig:
    """Tests for Ibig"""

    def test_sign_magnitude(self):
        """Sign is kept apart from the magnitude limbs"""
        i = Ibig(-(2**64 + 5))
        assert not i.sign
        assert i.limbs == (5, 1)
        assert abs(i) == Ubig(2**64 + 5)
        assert int(i) == -(2**64 + 5)

    def test_zero_sign(self):
        """Zero is always non-negative"""
        assert Ibig(0).sign
        assert Ibig.from_limbs([], sign=False).sign
        assert Ibig.from_limbs([0, 0], sign=False) == Ibig.zero()

    def test_from_limbs(self):
        """from_limbs with a sign"""
        assert Ibig.from_limbs([5, 1], sign=False) == -(2**64 + 5)

    def test_ordering(self):
        """Ordering across signs and limb counts"""
        ns = [-(2**70), -3, 0, 2, 2**64, -(2**64)]
        assert [int(i) for i in sorted(Ibig(n) for n in ns)] == sorted(ns)
        assert Ibig(-1) < Ubig(0)
        assert Ibig(5) > 4

    def test_eq_hash(self):
        """Equality with Ibig, Ubig and int"""
        assert Ibig(7) == Ubig(7)
        assert Ubig(7) == Ibig(7)
        assert Ibig(-7) == -7
        assert Ibig(-7) != Ibig(7)
        assert hash(Ibig(-7)) == hash(-7)
        assert Ibig(7) != "7"
        assert Ibig(7).__eq__("7") is NotImplemented
        assert Ubig(7).__eq__("7") is NotImplemented

    def test_add_mul(self):
        """+ and * follow the signed integer value"""
        assert Ibig(-5) + Ibig(5) == 0
        assert (Ibig(-5) + Ibig(5)).sign
        assert Ibig(-3) * Ibig(-4) == Ibig(12)
        assert Ubig(3) + Ibig(-10) == Ibig(-7)
        assert isinstance(Ubig(3) * Ibig(-1), Ibig)
        assert -2 * Ibig(2**64) == -(2**65)
        assert (Ibig(-(2**64)) + 0).limbs == (0, 1)

    def test_identities(self):
        """zero() and one()"""
        assert Ibig.zero() == 0
        assert Ibig.one() == 1
