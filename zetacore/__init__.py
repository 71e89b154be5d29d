import logging as _logging

from zetacore.algebra import (
    AdditiveIdentity,
    AlgebraicObject,
    Field,
    MultiplicativeIdentity,
    PrincipalIdealDomain,
    UniqueFactorization,
    gcd,
)
from zetacore.algorithm import Algorithm, Complexity, IdentityAlgorithm
from zetacore.bigint import Ibig, Ubig
from zetacore.errors import (
    AlgorithmConsumed,
    DivisionByZero,
    InvalidInput,
    NoRelationFound,
    ZeroDenominatorError,
    ZetaError,
)
from zetacore.factorization import QuadraticSieve
from zetacore.integer_relation import IntegerRelation, find_integer_relation, lll_reduce
from zetacore.rational import Rational, RationalFactorization, rational, rprod, rsum

# Silent unless the application configures logging
_logging.getLogger(__name__).addHandler(_logging.NullHandler())

__all__ = [
    "AdditiveIdentity",
    "AlgebraicObject",
    "Algorithm",
    "AlgorithmConsumed",
    "Complexity",
    "DivisionByZero",
    "Field",
    "IdentityAlgorithm",
    "Ibig",
    "IntegerRelation",
    "InvalidInput",
    "MultiplicativeIdentity",
    "NoRelationFound",
    "PrincipalIdealDomain",
    "QuadraticSieve",
    "Rational",
    "RationalFactorization",
    "Ubig",
    "UniqueFactorization",
    "ZeroDenominatorError",
    "ZetaError",
    "find_integer_relation",
    "gcd",
    "lll_reduce",
    "rational",
    "rprod",
    "rsum",
]
