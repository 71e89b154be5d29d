"""
Integer factorization as an Algorithm.

QuadraticSieve(n).compute() returns the prime factors of n with multiplicity, ascending, as
Ubig values. The pipeline is:

  1. trial division by the primes below trial_bound,
  2. sympy.isprime / sympy.perfect_power on what is left,
  3. the quadratic sieve to split a composite cofactor into two parts, enlarging the factor
     base when a round of sieving finds no useful congruence of squares,
  4. Pollard-Brent rho when the sieve still gives up,

then recursing on the parts until everything is prime.
"""
import logging
import math
import operator
import random

from math import gcd, isqrt
from typing import Iterator, Optional, Union

from sympy import isprime, perfect_power, primerange
from sympy.ntheory import sqrt_mod

from zetacore.algorithm import Algorithm, Complexity
from zetacore.bigint import Ubig
from zetacore.errors import InvalidInput

logger = logging.getLogger(__name__)

TRIAL_DIVISION_BOUND = 1000
MAX_SIEVE_ATTEMPTS = 4
MIN_FACTOR_BASE_BOUND = 100
SIEVE_BLOCK_MULTIPLIER = 40
MAX_SIEVE_BLOCKS = 40
EXTRA_RELATIONS = 10


def pollard_brent(n: int, rng: Optional[random.Random] = None) -> int:
    """
    Find a non-trivial divisor of the composite n with Brent's variant of Pollard rho.

    Never returns for prime n; callers must check primality first.
    """
    if n % 2 == 0:
        return 2
    if n % 3 == 0:
        return 3

    rng = rng or random.Random()
    while True:
        y, c, m = rng.randrange(1, n), rng.randrange(1, n), 128
        g, r, q = 1, 1, 1
        x = ys = y
        while g == 1:
            x = y
            for _ in range(r):
                y = (y * y + c) % n
            k = 0
            while k < r and g == 1:
                ys = y
                for _ in range(min(m, r - k)):
                    y = (y * y + c) % n
                    q = (q * abs(x - y)) % n
                g = gcd(q, n)
                k += m
            r <<= 1

        if g == n:
            # Batched gcd overshot; back-track one step at a time
            g = 1
            while g == 1:
                ys = (ys * ys + c) % n
                g = gcd(abs(x - ys), n)

        if g != n:
            return g

        logger.debug("Pollard-Brent cycle failed for c=%d, retrying", c)


def _factor_base_bound(n: int) -> int:
    """Pomerance's heuristic B = L(n)^(1/2), L(n) = exp(sqrt(ln n ln ln n))."""
    ln = math.log(n)
    return max(MIN_FACTOR_BASE_BOUND, int(math.exp(0.5 * math.sqrt(ln * math.log(ln)))))


def _gf2_dependencies(vectors: list[int], width: int) -> Iterator[int]:
    """
    Gaussian elimination over GF(2) on bitmask rows.

    Yields bitmasks over the row indices; each selects a set of rows that XOR to zero.
    """
    rows = list(vectors)
    combos = [1 << i for i in range(len(rows))]
    is_pivot = [False] * len(rows)

    for col in range(width):
        bit = 1 << col
        piv = next((i for i, r in enumerate(rows) if not is_pivot[i] and r & bit), None)
        if piv is None:
            continue

        is_pivot[piv] = True
        for i in range(len(rows)):
            if i != piv and rows[i] & bit:
                rows[i] ^= rows[piv]
                combos[i] ^= combos[piv]

    for i, r in enumerate(rows):
        if r == 0:
            yield combos[i]


class QuadraticSieve(Algorithm[Ubig]):
    """
    Factor one unsigned integer.

    Sub-exponential in practice, but classified conservatively as EXPONENTIAL since no
    polynomial-time general factoring algorithm is known.
    """

    COMPLEXITY = Complexity.EXPONENTIAL

    def __init__(self,
                 n: Union[Ubig, int],
                 *,
                 trial_bound: int = TRIAL_DIVISION_BOUND,
                 sieve_attempts: int = MAX_SIEVE_ATTEMPTS,
                 seed: Optional[int] = None) -> None:
        """
        Args:
            n: The number to factor.
            trial_bound: Primes below this are removed by trial division before sieving.
            sieve_attempts: Rounds of sieving (each with a 1.5x larger factor base) before
                falling back to Pollard-Brent.
            seed: Seed for the Pollard-Brent random walk, for reproducible runs.

        Raises:
            InvalidInput: If n is a negative int.
        """
        super().__init__()
        if not isinstance(n, Ubig):
            n = operator.index(n)
            if n < 0:
                raise InvalidInput(f"Cannot factor a negative number as unsigned (got {n})")
            n = Ubig(n)

        self.n = n
        self.trial_bound = max(2, trial_bound)
        self.sieve_attempts = sieve_attempts
        self._rng = random.Random(seed)

    def _compute(self) -> list[Ubig]:
        """
        Raises:
            InvalidInput: If n is zero.
        """
        n = int(self.n)
        if n == 0:
            raise InvalidInput("Zero has no prime factorization")

        factors: list[int] = []
        n = self._trial_divide(n, factors)

        stack = [n] if n > 1 else []
        while stack:
            m = stack.pop()
            if isprime(m):
                factors.append(m)
                continue

            pp = perfect_power(m)
            if pp:
                b, e = pp
                stack.extend([int(b)] * int(e))
                continue

            d = self._find_divisor(m)
            logger.debug("Split %d = %d * %d", m, d, m // d)
            stack.extend([d, m // d])

        return [Ubig(p) for p in sorted(factors)]

    def _trial_divide(self, n: int, factors: list[int]) -> int:
        for p in primerange(2, self.trial_bound):
            if p * p > n:
                break

            while n % p == 0:
                factors.append(int(p))
                n //= p

        return n

    def _find_divisor(self, n: int) -> int:
        """Non-trivial divisor of a composite n that is not a perfect power."""
        bound = _factor_base_bound(n)
        for attempt in range(self.sieve_attempts):
            d = self._sieve(n, bound)
            if d is not None:
                return d

            logger.debug("Sieve attempt %d with B=%d found no factor of %d", attempt + 1, bound, n)
            bound = bound * 3 // 2

        logger.warning("Quadratic sieve gave up on %d, falling back to Pollard-Brent", n)
        return pollard_brent(n, self._rng)

    def _sieve(self, n: int, bound: int) -> Optional[int]:
        """
        One round of the quadratic sieve with factor-base bound `bound`.

        Returns:
            Optional[int]: A non-trivial divisor of n, or None if this round failed.
        """
        # Factor base: primes p with (n|p) = 1, with the roots of x^2 = n (mod p)
        base: list[int] = []
        roots: list[tuple[int, ...]] = []
        for p in primerange(2, bound + 1):
            p = int(p)
            if n % p == 0:
                return p

            if p == 2:
                base.append(2)
                roots.append((1,))
                continue

            r = sqrt_mod(n, p)
            if r is None:
                continue

            base.append(p)
            roots.append((int(r), p - int(r)))

        needed = len(base) + EXTRA_RELATIONS
        logger.debug("Factor base for %d: B=%d, %d primes, need %d relations", n, bound, len(base), needed)

        block = max(1000, SIEVE_BLOCK_MULTIPLIER * bound)
        logs = [math.log2(p) for p in base]
        slack = math.log2(base[-1]) + 2

        relations: list[tuple[int, list[int]]] = []
        start = isqrt(n) + 1
        for _ in range(MAX_SIEVE_BLOCKS):
            acc = [0.0] * block
            for p, logp, rs in zip(base, logs, roots):
                for r in rs:
                    for pos in range((r - start) % p, block, p):
                        acc[pos] += logp

            for i, s in enumerate(acc):
                x = start + i
                q = x * x - n
                if s < math.log2(q) - slack:
                    continue

                exps = [0] * len(base)
                for j, p in enumerate(base):
                    while q % p == 0:
                        q //= p
                        exps[j] += 1

                if q == 1:
                    relations.append((x, exps))
                    if len(relations) >= needed:
                        break

            if len(relations) >= needed:
                break
            start += block

        logger.debug("Collected %d smooth relations", len(relations))
        if len(relations) < needed:
            return None

        vectors = [sum(1 << j for j, e in enumerate(exps) if e & 1) for _, exps in relations]
        for mask in _gf2_dependencies(vectors, len(base)):
            a = 1
            total = [0] * len(base)
            for i, (x, exps) in enumerate(relations):
                if (mask >> i) & 1:
                    a = (a * x) % n
                    for j, e in enumerate(exps):
                        total[j] += e

            b = 1
            for p, e in zip(base, total):
                b = (b * pow(p, e // 2, n)) % n

            g = gcd(a - b, n)
            if 1 < g < n:
                return g

        return None
