"""
Arbitrary-precision integers stored as limb sequences.

A limb is one 64-bit word. Limbs are kept little-endian (least significant limb first) in a
flat tuple with no most-significant zero limbs, so zero is the empty tuple:

    Ubig(2**64 + 5).limbs == (5, 1)

These types are operands and results for the algorithms in this package. Only + and * are
overloaded, computed through Python's int; both types convert to and from int losslessly
via int() / operator.index().
"""
import operator

from functools import total_ordering
from typing import Iterable, Union

from zetacore.algebra import AdditiveIdentity, MultiplicativeIdentity, UniqueFactorization

LIMB_BITS = 64
LIMB_MASK = (1 << LIMB_BITS) - 1


def _to_limbs(n: int) -> tuple[int, ...]:
    limbs: list[int] = []
    while n:
        limbs.append(n & LIMB_MASK)
        n >>= LIMB_BITS

    return tuple(limbs)


def _limbs_to_int(limbs: Iterable[int]) -> int:
    n = 0
    for limb in reversed(tuple(limbs)):
        n = (n << LIMB_BITS) | limb

    return n


def _normalize_limbs(limbs: Iterable[int]) -> tuple[int, ...]:
    """Validate raw limbs and strip most-significant zero limbs."""
    out = [operator.index(limb) for limb in limbs]
    for limb in out:
        if limb < 0 or limb > LIMB_MASK:
            raise ValueError(f"Limb out of range for {LIMB_BITS}-bit words: {limb}")

    while out and out[-1] == 0:
        out.pop()

    return tuple(out)


def _cmp_limbs(a: tuple[int, ...], b: tuple[int, ...]) -> int:
    """Compare two canonical magnitudes without converting them back to int."""
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1

    for x, y in zip(reversed(a), reversed(b)):
        if x != y:
            return -1 if x < y else 1

    return 0


@total_ordering
class Ubig(AdditiveIdentity, MultiplicativeIdentity, UniqueFactorization):
    """Unsigned big integer."""

    __slots__ = ("limbs",)

    limbs: tuple[int, ...]

    def __init__(self, n: int = 0) -> None:
        """
        Raises:
            ValueError: If n is negative.
        """
        n = operator.index(n)
        if n < 0:
            raise ValueError(f"Ubig cannot hold a negative value (got {n})")

        self.limbs = _to_limbs(n)

    @classmethod
    def from_limbs(cls, limbs: Iterable[int]) -> "Ubig":
        """Build from little-endian 64-bit limbs."""
        u = cls.__new__(cls)
        u.limbs = _normalize_limbs(limbs)
        return u

    @classmethod
    def _from_obj(cls, n: Union["Ubig", int]) -> "Ubig":
        if isinstance(n, Ubig):
            return n

        return cls(n)

    @classmethod
    def zero(cls) -> "Ubig":
        return cls(0)

    @classmethod
    def one(cls) -> "Ubig":
        return cls(1)

    def bit_length(self) -> int:
        if not self.limbs:
            return 0

        return (len(self.limbs) - 1) * LIMB_BITS + self.limbs[-1].bit_length()

    def __int__(self) -> int:
        return _limbs_to_int(self.limbs)

    def __index__(self) -> int:
        return _limbs_to_int(self.limbs)

    def __bool__(self) -> bool:
        return bool(self.limbs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Ubig):
            return self.limbs == other.limbs
        if isinstance(other, int):
            return int(self) == other
        return NotImplemented

    def __lt__(self, other: Union["Ubig", int]) -> bool:
        if isinstance(other, Ubig):
            return _cmp_limbs(self.limbs, other.limbs) < 0
        if isinstance(other, int):
            return int(self) < other
        return NotImplemented

    def __add__(self, other: Union["Ubig", int]) -> "Ubig":
        if not isinstance(other, (Ubig, int)):
            return NotImplemented

        return Ubig(int(self) + int(other))

    def __radd__(self, other: int) -> "Ubig":
        return self.__add__(other)

    def __mul__(self, other: Union["Ubig", int]) -> "Ubig":
        if not isinstance(other, (Ubig, int)):
            return NotImplemented

        return Ubig(int(self) * int(other))

    def __rmul__(self, other: int) -> "Ubig":
        return self.__mul__(other)

    def __hash__(self) -> int:
        return hash(int(self))

    def __repr__(self) -> str:
        return f"Ubig({int(self)})"

    def __str__(self) -> str:
        return str(int(self))

    def factor(self) -> list["Ubig"]:
        """Prime factors with multiplicity, ascending. See QuadraticSieve."""
        from zetacore.factorization import QuadraticSieve

        return QuadraticSieve(self).compute()


@total_ordering
class Ibig(AdditiveIdentity, MultiplicativeIdentity):
    """
    Signed big integer in sign-magnitude form.

    The magnitude is a Ubig; sign is True for non-negative values and zero is always
    non-negative.
    """

    __slots__ = ("magnitude", "sign")

    magnitude: Ubig
    sign: bool

    def __init__(self, n: int = 0) -> None:
        n = operator.index(n)
        self.magnitude = Ubig(-n if n < 0 else n)
        self.sign = n >= 0

    @classmethod
    def from_limbs(cls, limbs: Iterable[int], sign: bool = True) -> "Ibig":
        """Build from little-endian 64-bit magnitude limbs and a sign."""
        i = cls.__new__(cls)
        i.magnitude = Ubig.from_limbs(limbs)
        i.sign = sign or not i.magnitude
        return i

    @classmethod
    def zero(cls) -> "Ibig":
        return cls(0)

    @classmethod
    def one(cls) -> "Ibig":
        return cls(1)

    @property
    def limbs(self) -> tuple[int, ...]:
        """Magnitude limbs; the sign is not encoded in them."""
        return self.magnitude.limbs

    def __int__(self) -> int:
        m = int(self.magnitude)
        return m if self.sign else -m

    def __index__(self) -> int:
        return self.__int__()

    def __abs__(self) -> Ubig:
        return self.magnitude

    def __bool__(self) -> bool:
        return bool(self.magnitude)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Ibig):
            return self.sign == other.sign and self.magnitude == other.magnitude
        if isinstance(other, (Ubig, int)):
            return int(self) == int(other)
        return NotImplemented

    def __lt__(self, other: Union["Ibig", Ubig, int]) -> bool:
        if isinstance(other, Ibig):
            if self.sign != other.sign:
                return other.sign
            c = _cmp_limbs(self.limbs, other.limbs)
            return c < 0 if self.sign else c > 0
        if isinstance(other, (Ubig, int)):
            return int(self) < int(other)
        return NotImplemented

    def __add__(self, other: Union["Ibig", Ubig, int]) -> "Ibig":
        if not isinstance(other, (Ibig, Ubig, int)):
            return NotImplemented

        return Ibig(int(self) + int(other))

    def __radd__(self, other: Union[Ubig, int]) -> "Ibig":
        return self.__add__(other)

    def __mul__(self, other: Union["Ibig", Ubig, int]) -> "Ibig":
        if not isinstance(other, (Ibig, Ubig, int)):
            return NotImplemented

        return Ibig(int(self) * int(other))

    def __rmul__(self, other: Union[Ubig, int]) -> "Ibig":
        return self.__mul__(other)

    def __hash__(self) -> int:
        return hash(int(self))

    def __repr__(self) -> str:
        return f"Ibig({int(self)})"

    def __str__(self) -> str:
        return str(int(self))
