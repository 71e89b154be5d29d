"""
Algebraic capabilities a numeric type can opt into.

Each capability is an independent abstract base class, so a type implements exactly the
subset it supports and generic code asks for the minimal set it needs:

    AdditiveIdentity          zero() + x == x
    MultiplicativeIdentity    one() * x == x
    PrincipalIdealDomain      gcd-based normalization is well defined
    Field                     division, failing with DivisionByZero on zero()
    UniqueFactorization       decomposition into prime components
"""
import math
from abc import ABC, abstractmethod
from typing import Any, ClassVar


def gcd(a: int, b: int) -> int:
    """
    Greatest common divisor of two non-negative magnitudes.

    gcd(0, 0) is defined as 0, and gcd(a, 0) == a.

    Raises:
        ValueError: If either argument is negative.
    """
    if a < 0 or b < 0:
        raise ValueError(f"gcd is defined over magnitudes, got {a=} {b=}")

    return math.gcd(a, b)


class AlgebraicObject(ABC):
    """A named algebraic structure, e.g. NAME="Rational", NOTATION="Q"."""
    __slots__ = ()

    NAME: ClassVar[str]
    NOTATION: ClassVar[str]


class AdditiveIdentity(ABC):
    __slots__ = ()

    @classmethod
    @abstractmethod
    def zero(cls) -> Any:
        """The additive identity."""


class MultiplicativeIdentity(ABC):
    __slots__ = ()

    @classmethod
    @abstractmethod
    def one(cls) -> Any:
        """The multiplicative identity."""


class PrincipalIdealDomain(ABC):
    __slots__ = ()

    @abstractmethod
    def gcd(self, other: Any) -> Any:
        """A greatest common divisor of self and other, normalized."""


class Field(PrincipalIdealDomain, AdditiveIdentity, MultiplicativeIdentity):
    """
    A field is trivially a PID: every non-zero element is a unit.

    Implementations must raise DivisionByZero when dividing by zero().
    """
    __slots__ = ()

    @abstractmethod
    def reciprocal(self) -> Any:
        """The multiplicative inverse."""

    @abstractmethod
    def __truediv__(self, other: Any) -> Any:
        ...

    def gcd(self, other: Any) -> Any:
        """In a field any non-zero element generates the whole ring, so gcd is zero or one."""
        if not self and not other:
            return self.zero()

        return self.one()


class UniqueFactorization(ABC):
    __slots__ = ()

    @abstractmethod
    def factor(self) -> Any:
        """Decompose into irreducible (prime) components."""


def is_field(obj: Any) -> bool:
    return isinstance(obj, Field)


def is_pid(obj: Any) -> bool:
    return isinstance(obj, PrincipalIdealDomain)


def has_unique_factorization(obj: Any) -> bool:
    return isinstance(obj, UniqueFactorization)


def check_additive_identity(x: AdditiveIdentity) -> bool:
    """True iff zero() + x == x and x + zero() == x."""
    z = type(x).zero()
    return z + x == x and x + z == x


def check_multiplicative_identity(x: MultiplicativeIdentity) -> bool:
    """True iff one() * x == x and x * one() == x."""
    o = type(x).one()
    return o * x == x and x * o == x
