import operator

from dataclasses import dataclass
from typing import ClassVar, Iterable, Optional, Union

from sympy import factorint

from zetacore.algebra import AlgebraicObject, Field, UniqueFactorization, gcd
from zetacore.bigint import Ibig, Ubig
from zetacore.errors import DivisionByZero, InvalidInput, ZeroDenominatorError

OTHER_OP_TYPES = Union[int, Ubig, Ibig]
_OTHER_OP_TYPES = (int, Ubig, Ibig)  # mypyc-friendly for isinstance
OP_TYPES = Union["Rational", OTHER_OP_TYPES]


# TODO: Once Py3.9 support has been dropped, add slots=True
@dataclass(frozen=True)
class RationalFactorization:
    """
    Prime decomposition of a non-zero rational:

        x = (+/-1) * p1^e1 * p2^e2 * ... * pk^ek

    - sign is True for a positive value.
    - primes holds (p, e) pairs sorted by p; e > 0 for primes of the numerator,
      e < 0 for primes of the denominator (they never share a prime once reduced).
    """
    sign: bool
    primes: tuple[tuple[int, int], ...]

    def prod(self) -> "Rational":
        """Recreate the number from its factors"""
        result = Rational.one() if self.sign else -Rational.one()
        for p, e in self.primes:
            result = result * Rational(p) ** e

        return result


class Rational(Field, UniqueFactorization, AlgebraicObject):
    """
    Exact rational number in canonical form.

    The sign is kept apart from the magnitudes:
        value = (+1 if sign else -1) * numerator / denominator

    Invariants (hold after every construction):
      - denominator >= 1
      - gcd(numerator, denominator) == 1
      - zero is numerator=0, denominator=1, sign=True

    Every operation returns a new value; instances are never mutated after __init__.
    """

    __slots__ = ("numerator", "denominator", "sign")

    numerator: int
    denominator: int
    sign: bool

    NAME: ClassVar[str] = "Rational"
    NOTATION: ClassVar[str] = "Q"

    def __init__(self, n: int = 0, d: int = 1) -> None:
        """
        Initialize a Rational as n/d.

        Args:
            n: The numerator, any integer (or object supporting __index__).
            d: The denominator, any non-zero integer. Defaults to 1.

        Raises:
            ZeroDenominatorError: If d is zero.
        """
        n0, d0 = operator.index(n), operator.index(d)
        if d0 == 0:
            raise ZeroDenominatorError(f"Denominators cannot be zero (got {n0}/0)")

        self.numerator = -n0 if n0 < 0 else n0
        self.denominator = -d0 if d0 < 0 else d0
        self.sign = (n0 >= 0) == (d0 >= 0)
        self._reduce()

    # region constructors / conversions
    @classmethod
    def _make(cls, numerator: int, denominator: int, sign: bool) -> "Rational":
        """Build a canonical value from magnitudes that are already known to be valid (denominator > 0)."""
        r = cls.__new__(cls)
        r.numerator = numerator
        r.denominator = denominator
        r.sign = sign
        r._reduce()
        return r

    @classmethod
    def _from_obj(cls, n: OP_TYPES) -> "Rational":
        """Convert a random object to a Rational"""
        if isinstance(n, _OTHER_OP_TYPES):
            return cls(n, 1)

        if isinstance(n, Rational):
            return n

        return NotImplemented

    def _reduce(self) -> None:
        """Bring self into canonical form. Only ever called while constructing."""
        if self.numerator == 0:
            self.denominator = 1
            self.sign = True
            return

        g = gcd(self.numerator, self.denominator)
        if g != 1:
            self.numerator //= g
            self.denominator //= g

    @classmethod
    def zero(cls) -> "Rational":
        return cls(0, 1)

    @classmethod
    def one(cls) -> "Rational":
        return cls(1, 1)
    # endregion

    @property
    def signed_numerator(self) -> int:
        """The numerator with the sign folded in."""
        return self.numerator if self.sign else -self.numerator

    @property
    def is_integer(self) -> bool:
        return self.denominator == 1

    def __add__(self, other: OP_TYPES) -> "Rational":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, Rational):
            return NotImplemented

        g = gcd(self.denominator, other.denominator)
        lhs = self.numerator * (other.denominator // g)
        rhs = other.numerator * (self.denominator // g)

        if self.sign == other.sign:
            n, s = lhs + rhs, self.sign
        elif abs(self) >= abs(other):
            n, s = lhs - rhs, self.sign
        else:
            n, s = rhs - lhs, other.sign

        return self._make(n, self.denominator * (other.denominator // g), s)

    def __radd__(self, other: OTHER_OP_TYPES) -> "Rational":
        return self.__add__(other)

    def __sub__(self, other: OP_TYPES) -> "Rational":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, Rational):
            return NotImplemented

        # Subtraction goes through the signed addition path on purpose
        return self + other * -self.one()

    def __rsub__(self, other: OTHER_OP_TYPES) -> "Rational":
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other).__sub__(self)

        return NotImplemented

    def __neg__(self) -> "Rational":
        # _make forces zero back to sign=True, so -0 == 0
        return self._make(self.numerator, self.denominator, not self.sign)

    def __pos__(self) -> "Rational":
        return self._make(self.numerator, self.denominator, self.sign)

    def __abs__(self) -> "Rational":
        return self._make(self.numerator, self.denominator, True)

    def __mul__(self, other: OP_TYPES) -> "Rational":
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, Rational):
            return NotImplemented

        return self._make(self.numerator * other.numerator,
                          self.denominator * other.denominator,
                          self.sign == other.sign)

    def __rmul__(self, other: OTHER_OP_TYPES) -> "Rational":
        return self.__mul__(other)

    def __truediv__(self, other: OP_TYPES) -> "Rational":
        """
        Exact division.

        Raises:
            DivisionByZero: If other is zero.
        """
        if isinstance(other, _OTHER_OP_TYPES):
            other = self._from_obj(other)

        if not isinstance(other, Rational):
            return NotImplemented

        if not other:
            raise DivisionByZero(f"Cannot divide {self!r} by zero")

        return self._make(self.numerator * other.denominator,
                          self.denominator * other.numerator,
                          self.sign == other.sign)

    def __rtruediv__(self, other: OTHER_OP_TYPES) -> "Rational":
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other).__truediv__(self)

        return NotImplemented

    def __divmod__(self, other: OP_TYPES) -> tuple["Rational", "Rational"]:
        """In a field every division is exact, so the remainder is always zero."""
        return self / other, self.zero()

    def reciprocal(self) -> "Rational":
        """
        Multiplicative inverse.

        Raises:
            DivisionByZero: If self is zero.
        """
        if not self:
            raise DivisionByZero("Zero has no reciprocal")

        return self._make(self.denominator, self.numerator, self.sign)

    def __pow__(self, exp: int) -> "Rational":
        e = operator.index(exp)
        base = self
        if e < 0:
            base = self.reciprocal()
            e = -e

        result = self.one()
        while e:
            if e & 1:
                result = result * base

            e >>= 1
            if e:
                base = base * base

        return result

    # region ordering
    def _cmp(self, other: "Rational") -> int:
        """
        Three-way compare by cross multiplication.

        Common factors of the numerators and of the denominators are divided out first,
        which keeps the cross terms as small as possible.
        """
        g1 = gcd(self.numerator, other.numerator)
        if g1 == 0:
            # Both are zero
            return 0

        g2 = gcd(self.denominator, other.denominator)
        a = (self.numerator // g1) * (other.denominator // g2)
        b = (other.numerator // g1) * (self.denominator // g2)

        if self.sign and other.sign:
            return (a > b) - (a < b)
        if not self.sign and not other.sign:
            return (b > a) - (b < a)
        return 1 if self.sign else -1

    def _coerce(self, other: object) -> Optional["Rational"]:
        if isinstance(other, Rational):
            return other
        if isinstance(other, _OTHER_OP_TYPES):
            return self._from_obj(other)
        return None

    def __lt__(self, other: OP_TYPES) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._cmp(o) < 0

    def __le__(self, other: OP_TYPES) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._cmp(o) <= 0

    def __gt__(self, other: OP_TYPES) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._cmp(o) > 0

    def __ge__(self, other: OP_TYPES) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._cmp(o) >= 0
    # endregion

    def __eq__(self, other: object) -> bool:
        o = self._coerce(other)
        if o is None:
            return False

        return (self.numerator, self.denominator, self.sign) == (o.numerator, o.denominator, o.sign)

    def __hash__(self) -> int:
        if self.denominator == 1:
            # Keep hash(Rational(n)) == hash(n) since they compare equal
            return hash(self.signed_numerator)

        return hash((self.signed_numerator, self.denominator))

    def __bool__(self) -> bool:
        return self.numerator != 0

    def __float__(self) -> float:
        f = self.numerator / self.denominator
        return f if self.sign else -f

    def __repr__(self) -> str:
        sign = "" if self.sign else "-"
        if self.denominator == 1:
            return f"{sign}{self.numerator}"
        return f"{sign}{self.numerator}/{self.denominator}"

    def factor(self) -> RationalFactorization:
        """
        Factor into signed prime powers, with negative exponents for the denominator.

        Returns:
            RationalFactorization: The factorization.

        Raises:
            InvalidInput: If self is zero.
        """
        if not self:
            raise InvalidInput("Zero has no prime factorization")

        primes = dict(factorint(self.numerator))
        for p, e in factorint(self.denominator).items():
            primes[p] = -e

        return RationalFactorization(sign=self.sign,
                                     primes=tuple(sorted((int(p), int(e)) for p, e in primes.items())))


def rational(value: Union[str, OP_TYPES], den: Optional[int] = None) -> Rational:
    """
    Convenience constructor.

    Accepts rational(n), rational(n, d), or the literal string forms "n" and "n; d".

    Raises:
        ValueError: If the string is not of the form "numerator[; denominator]".
        ZeroDenominatorError: If the denominator is zero.
    """
    if isinstance(value, str):
        if den is not None:
            raise TypeError("rational() takes no denominator argument with a string literal")

        parts = value.split(";")
        if len(parts) > 2:
            raise ValueError(f"Expected 'numerator[; denominator]', got {value!r}")

        return Rational(int(parts[0]), int(parts[1]) if len(parts) == 2 else 1)

    if isinstance(value, Rational):
        if den is None:
            return value
        if den == 0:
            raise ZeroDenominatorError(f"Denominators cannot be zero (got {value!r}/0)")
        return value / den

    return Rational(value, 1 if den is None else den)


def rsum(x: Iterable[OP_TYPES], start: Union[OP_TYPES, None] = None) -> Rational:
    """Fold with + starting from zero, like the builtin sum"""
    total = Rational.zero() if start is None else Rational._from_obj(start)
    for sub_x in x:
        total = total + sub_x

    return total


def rprod(x: Iterable[OP_TYPES], start: Union[OP_TYPES, None] = None) -> Rational:
    """Fold with * starting from one, like math.prod"""
    total = Rational.one() if start is None else Rational._from_obj(start)
    for sub_x in x:
        total = total * sub_x

    return total
