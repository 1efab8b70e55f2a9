from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type

import numpy as np

from ShelfTSP.matrix import as_distance_matrix, is_square_non_negative
from ShelfTSP.utils.taxonomy import AlgorithmFamily, AlgorithmType

logger = logging.getLogger(__name__)


@dataclass
class AlgorithmResult:
    """Container capturing the outcome of running a distribution algorithm."""

    name: str
    path: List[int] | None
    cost: float | None
    elapsed: float
    status: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ParameterDescriptor:
    """Advisory description of one configuration slot of an algorithm."""

    name: str
    description: str
    values: str


class TimeLimitExpired(Exception):
    """Raised when an algorithm exceeds the allotted wall clock budget."""


def current_time() -> float:
    return time.perf_counter()


def remaining_budget(start_time: float, time_limit: float) -> float:
    return time_limit - (current_time() - start_time)


def enforce_time_budget(start_time: float, time_limit: Optional[float]) -> None:
    if time_limit is None:
        return
    if remaining_budget(start_time, time_limit) <= 0:
        raise TimeLimitExpired("Time budget exhausted")


def compute_cycle_cost(dist_matrix: np.ndarray, cycle: Sequence[int]) -> float:
    """Compute tour cost (including return leg)."""
    if len(cycle) == 0:
        return 0.0
    order = np.asarray(cycle, dtype=np.intp)
    return float(dist_matrix[order, np.roll(order, -1)].sum(dtype=np.float64))


class ParameterCursor:
    """Forward-only reader over an immutable sequence of configuration tokens."""

    def __init__(self, tokens: Iterable[Optional[str]] | None = None):
        self._tokens = tuple(tokens or ())
        self._position = 0

    def next(self) -> Optional[str]:
        if self._position >= len(self._tokens):
            return None
        token = self._tokens[self._position]
        self._position += 1
        return token

    @property
    def remaining(self) -> int:
        return len(self._tokens) - self._position


@dataclass(frozen=True)
class SolverSpec:
    """Metadata describing a solver implementation."""

    type: AlgorithmType
    cls: Type["BaseSolver"]


class BaseSolver:
    """Common interface for distribution algorithms.

    A solver is bound to one distance matrix for its whole lifetime and keeps a
    private float32 copy of it.
    """

    name: str
    type: AlgorithmType
    family: AlgorithmFamily

    def __init__(self, graph: Any):
        self.dist_matrix = as_distance_matrix(graph)
        if self.dist_matrix is not None and self.dist_matrix.ndim > 0:
            self.n = int(self.dist_matrix.shape[0])
        else:
            self.n = 0
        self.metadata: Dict[str, Any] = {}

    def accepts(self) -> bool:
        """Whether the bound matrix is a valid input for this algorithm."""
        return is_square_non_negative(self.dist_matrix)

    def available_parameters(self) -> List[ParameterDescriptor]:
        return []

    def apply_parameters(self, tokens: Iterable[Optional[str]] | None = None) -> None:
        """Consume one token per entry of :meth:`available_parameters`, in order.

        Missing or invalid tokens leave the corresponding default in place.
        """
        cursor = ParameterCursor(tokens)
        self._consume_parameters(cursor)
        if cursor.remaining:
            logger.debug("%s ignored %d extra parameter token(s)", self.name, cursor.remaining)

    def _consume_parameters(self, cursor: ParameterCursor) -> None:
        pass

    def _reject_token(self, parameter: str, token: str, reason: str = "unknown value") -> None:
        logger.warning(
            "Received %s for %r: %r. Using default value instead.", reason, parameter, token
        )

    def compute_cycle(self) -> List[int]:  # noqa: D401
        """Return a permutation of ``0..n-1`` describing a closed tour."""
        raise NotImplementedError

    def cycle_cost(self, cycle: Sequence[int]) -> float:
        return compute_cycle_cost(self.dist_matrix, cycle)

    def solve(self, time_limit: Optional[float] = None) -> AlgorithmResult:
        start_time = current_time()
        cycle = self.compute_cycle()
        return AlgorithmResult(
            name=self.name,
            path=cycle,
            cost=self.cycle_cost(cycle),
            elapsed=current_time() - start_time,
            status="complete",
            metadata={"family": self.family.value, **self.metadata},
        )


__all__ = [
    "AlgorithmResult",
    "AlgorithmFamily",
    "AlgorithmType",
    "BaseSolver",
    "ParameterCursor",
    "ParameterDescriptor",
    "SolverSpec",
    "TimeLimitExpired",
    "compute_cycle_cost",
    "current_time",
    "enforce_time_budget",
    "remaining_budget",
]
