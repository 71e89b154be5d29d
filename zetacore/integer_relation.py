"""
Integer-relation detection by lattice basis reduction.

Given values x_1..x_n, find a non-zero integer vector c with sum(c_i * x_i) == 0 (or close
to it). The lattice spanned by the rows

    e_i || round(scale * x_i)        (e_i the i-th unit vector)

contains, for every relation c, the vector c || sum(c_i * round(scale * x_i)). When scale is
large, any combination whose last coordinate is not (nearly) zero is long, so after LLL the
short basis vectors are relations. A reduced row counts as a relation when

    |last coordinate| / scale <= tolerance

Choosing scale and tolerance:

  - scale too small: rounding scale * x_i throws away the digits that distinguish a true
    relation from a near miss, and the rounding noise can keep the last coordinate of a real
    relation above tolerance (false negatives).
  - scale too large for the accuracy of the inputs: float noise in x_i is blown up into the
    lattice, real relations stop being short, and the reduction may need many more
    iterations (numerical instability / false negatives). For exact inputs (ints and
    Rationals) a larger scale is harmless apart from cost.
  - tolerance too large admits spurious "relations" that are merely small combinations.

The defaults (scale=10**6, tolerance=1e-6) suit inputs known to about 6 significant digits.
"""
import logging
import operator

from typing import Iterable, Sequence, Union

from zetacore.algorithm import Algorithm, Complexity
from zetacore.errors import NoRelationFound
from zetacore.rational import Rational, rsum
from zetacore.utils import round_div_ties_away_from_zero

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 10**6
DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_ITERATIONS = 10_000
DEFAULT_DELTA = Rational(3, 4)
HALF = Rational(1, 2)

VALUE_TYPES = Union[int, float, Rational]


def _dot(u: Sequence[Union[int, Rational]], v: Sequence[Union[int, Rational]]) -> Rational:
    return rsum(a * b for a, b in zip(u, v))


def _nearest_int(x: Rational) -> int:
    return round_div_ties_away_from_zero(x.signed_numerator, x.denominator)


def _gram_schmidt(rows: list[list[int]]) -> tuple[list[list[Rational]], list[Rational]]:
    """
    Exact Gram-Schmidt orthogonalization.

    Returns:
        tuple: (mu, norms) where mu[i][j] is the projection coefficient of row i on the j-th
            orthogonal vector and norms[i] is the squared length of the i-th orthogonal vector.

    Raises:
        ValueError: If the rows are linearly dependent.
    """
    n = len(rows)
    ortho: list[list[Rational]] = []
    norms: list[Rational] = []
    mu = [[Rational.zero()] * n for _ in range(n)]

    for i, row in enumerate(rows):
        v = [Rational(x) for x in row]
        for j in range(i):
            mu[i][j] = _dot(row, ortho[j]) / norms[j]
            v = [a - mu[i][j] * b for a, b in zip(v, ortho[j])]

        nv = _dot(v, v)
        if not nv:
            raise ValueError("Basis vectors must be linearly independent")

        ortho.append(v)
        norms.append(nv)
        mu[i][i] = Rational.one()

    return mu, norms


def lll_reduce(basis: Iterable[Iterable[int]],
               delta: Rational = DEFAULT_DELTA,
               max_iterations: int = DEFAULT_MAX_ITERATIONS) -> list[list[int]]:
    """
    LLL-reduce a lattice basis given as integer row vectors.

    Arithmetic is exact (Rational Gram-Schmidt), so the result does not depend on floating
    point behaviour. Intended for the small dimensions of integer-relation problems.

    Args:
        basis: Linearly independent integer rows of equal length.
        delta: Lovasz parameter, 1/4 < delta <= 1.
        max_iterations: Budget of main-loop steps.

    Returns:
        list: The reduced rows.

    Raises:
        ValueError: On an empty or ragged basis, dependent rows, or delta out of range.
        NoRelationFound: If the iteration budget runs out.
    """
    rows = [[operator.index(x) for x in row] for row in basis]
    if not rows:
        raise ValueError("Cannot reduce an empty basis")
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise ValueError("All basis vectors must have the same length")

    delta = delta if isinstance(delta, Rational) else Rational(delta)
    if not Rational(1, 4) < delta <= 1:
        raise ValueError(f"delta must satisfy 1/4 < delta <= 1, got {delta}")

    mu, norms = _gram_schmidt(rows)

    k = 1
    steps = swaps = 0
    while k < len(rows):
        steps += 1
        if steps > max_iterations:
            raise NoRelationFound(f"LLL did not converge within {max_iterations} iterations")

        # Size reduction of row k against rows k-1..0; orthogonal vectors are unchanged
        for j in range(k - 1, -1, -1):
            if abs(mu[k][j]) > HALF:
                q = _nearest_int(mu[k][j])
                rows[k] = [a - q * b for a, b in zip(rows[k], rows[j])]
                for m in range(j + 1):
                    mu[k][m] = mu[k][m] - q * mu[j][m]

        # Lovasz condition
        if norms[k] >= (delta - mu[k][k - 1] ** 2) * norms[k - 1]:
            k += 1
        else:
            rows[k], rows[k - 1] = rows[k - 1], rows[k]
            mu, norms = _gram_schmidt(rows)
            swaps += 1
            k = max(k - 1, 1)

    logger.debug("LLL reduced a %dx%d basis in %d steps (%d swaps)", len(rows), width, steps, swaps)
    return rows


def _scale_value(x: VALUE_TYPES, scale: int) -> int:
    """round(scale * x), exact for ints and Rationals."""
    if isinstance(x, Rational):
        return round_div_ties_away_from_zero(x.signed_numerator * scale, x.denominator)
    if isinstance(x, float):
        return _scale_value(Rational(*x.as_integer_ratio()), scale)
    return operator.index(x) * scale


def find_integer_relation(values: Iterable[VALUE_TYPES],
                          *,
                          scale: int = DEFAULT_SCALE,
                          tolerance: float = DEFAULT_TOLERANCE,
                          max_iterations: int = DEFAULT_MAX_ITERATIONS) -> tuple[int, ...]:
    """
    Find a non-zero integer vector c with sum(c_i * x_i) within tolerance of zero.

    See the module docstring for how scale and tolerance trade false negatives against
    spurious relations.

    Returns:
        tuple: The shortest relation found, signed so its first non-zero entry is positive.

    Raises:
        ValueError: If fewer than two values are given or scale is not positive.
        NoRelationFound: If no reduced vector qualifies, or the reduction budget runs out.
    """
    vals = list(values)
    if len(vals) < 2:
        raise ValueError("An integer relation needs at least two values")

    scale = operator.index(scale)
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")

    n = len(vals)
    scaled = [_scale_value(x, scale) for x in vals]
    basis = [[1 if i == j else 0 for j in range(n)] + [scaled[i]] for i in range(n)]

    reduced = lll_reduce(basis, max_iterations=max_iterations)

    candidates = [row[:n] for row in reduced if any(row[:n]) and abs(row[n]) / scale <= tolerance]
    if not candidates:
        raise NoRelationFound(f"No integer relation among {n} values within tolerance {tolerance}")

    best = min(candidates, key=lambda c: sum(x * x for x in c))
    first = next(x for x in best if x)
    if first < 0:
        best = [-x for x in best]

    logger.debug("Found integer relation %s", best)
    return tuple(best)


class IntegerRelation(Algorithm[tuple[int, ...]]):
    """find_integer_relation() as a consume-once Algorithm with a one-element result."""

    COMPLEXITY = Complexity.POLYNOMIAL

    def __init__(self,
                 values: Iterable[VALUE_TYPES],
                 *,
                 scale: int = DEFAULT_SCALE,
                 tolerance: float = DEFAULT_TOLERANCE,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS) -> None:
        super().__init__()
        self.values = list(values)
        self.scale = scale
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    def _compute(self) -> list[tuple[int, ...]]:
        return [find_integer_relation(self.values,
                                      scale=self.scale,
                                      tolerance=self.tolerance,
                                      max_iterations=self.max_iterations)]
