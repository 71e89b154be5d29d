class ZetaError(Exception):
    """Base class for every condition raised by zetacore."""


class ZeroDenominatorError(ZetaError, ValueError):
    """
    A rational was constructed with a zero denominator.

    This is a contract violation by the caller, not a runtime condition to recover from.
    """


class DivisionByZero(ZetaError, ZeroDivisionError):
    """Division by the additive identity of a field."""


class InvalidInput(ZetaError, ValueError):
    """An algorithm was handed an input it has no defined answer for (e.g. factoring 0)."""


class NoRelationFound(ZetaError, ArithmeticError):
    """The integer-relation search ran out of tolerance or iteration budget."""


class AlgorithmConsumed(ZetaError, RuntimeError):
    """compute() was called on an algorithm instance that already ran."""
