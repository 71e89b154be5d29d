"""
The Algorithm contract.

An Algorithm instance is a problem description ("factor this n", "find a relation among
these values"). compute() consumes it exactly once and returns a list of results; a
single-result algorithm returns a one-element list, so callers treat every algorithm the
same way. Each algorithm class also carries a static Complexity tag for cost-aware
dispatch; it describes the design of the algorithm, not a particular input.
"""
import logging

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Generic, Iterable, TypeVar

from zetacore.errors import AlgorithmConsumed

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Complexity(Enum):
    POLYNOMIAL = "polynomial"
    SUBEXPONENTIAL = "subexponential"  # superpolynomial but subexponential
    EXPONENTIAL = "exponential"


class Algorithm(ABC, Generic[T]):
    """
    Base class for consume-once algorithms producing values of type T.

    Subclasses set COMPLEXITY and implement _compute().
    """

    COMPLEXITY: ClassVar[Complexity]

    def __init__(self) -> None:
        self._consumed = False

    @classmethod
    def complexity(cls) -> Complexity:
        return cls.COMPLEXITY

    @property
    def consumed(self) -> bool:
        return self._consumed

    def compute(self) -> list[T]:
        """
        Run the algorithm.

        The instance is marked consumed before any work starts, so it cannot be re-entered
        even when _compute() raises.

        Returns:
            list: The results, in the order the algorithm defines.

        Raises:
            AlgorithmConsumed: If compute() was already called on this instance.
        """
        if self._consumed:
            raise AlgorithmConsumed(f"{type(self).__name__} instance was already computed")

        self._consumed = True
        logger.debug("Running %s (%s)", type(self).__name__, self.complexity().value)
        return list(self._compute())

    @abstractmethod
    def _compute(self) -> Iterable[T]:
        ...


class IdentityAlgorithm(Algorithm[T]):
    """Returns its input unchanged. Useful as a no-op stage when composing algorithms."""

    COMPLEXITY = Complexity.POLYNOMIAL

    def __init__(self, value: T) -> None:
        super().__init__()
        self.value = value

    def _compute(self) -> Iterable[T]:
        return [self.value]
