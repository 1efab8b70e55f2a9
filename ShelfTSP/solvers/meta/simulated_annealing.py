from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ShelfTSP.solvers.base import (
    AlgorithmResult,
    BaseSolver,
    ParameterCursor,
    ParameterDescriptor,
    TimeLimitExpired,
    current_time,
    enforce_time_budget,
)
from ShelfTSP.utils.taxonomy import AlgorithmFamily, AlgorithmType

logger = logging.getLogger(__name__)

DEFAULT_SEED = 1
DEFAULT_INITIAL_TEMPERATURE = 1000.0
DEFAULT_COOLING_RATE = 0.9
DEFAULT_ITERATIONS_PER_LEVEL = 600.0
MIN_INITIAL_TEMPERATURE = 10.0
FINAL_TEMPERATURE = 1.0


@dataclass
class AnnealingState:
    """Progress of one annealing run."""

    current: np.ndarray
    current_cost: float
    best: np.ndarray
    best_cost: float
    initial_cost: float
    temperature: float
    levels: int = 0
    accepted: int = 0
    improved: int = 0

    def update_best(self) -> bool:
        if self.current_cost < self.best_cost:
            self.best = self.current.copy()
            self.best_cost = self.current_cost
            self.improved += 1
            return True
        return False


class SimulatedAnnealingSolver(BaseSolver):
    """Swap-neighbourhood simulated annealing from a shuffled tour.

    The random generator is seeded per instance, so two solvers built with the
    same matrix, parameters and seed return identical cycles.
    """

    name = "simulated_annealing"
    type = AlgorithmType.SIMULATED_ANNEALING
    family = AlgorithmFamily.METAHEURISTIC

    def __init__(
        self,
        graph,
        initial_temperature: float = DEFAULT_INITIAL_TEMPERATURE,
        cooling_rate: float = DEFAULT_COOLING_RATE,
        iterations_per_level: float = DEFAULT_ITERATIONS_PER_LEVEL,
        seed: int = DEFAULT_SEED,
    ):
        super().__init__(graph)
        self.initial_temperature = initial_temperature
        self.cooling_rate = cooling_rate
        self.iterations_per_level = iterations_per_level
        self.seed = seed

    def available_parameters(self) -> List[ParameterDescriptor]:
        params = super().available_parameters()
        params.append(
            ParameterDescriptor(
                name="Initial Temperature",
                description=(
                    "Controls how willing the search is to accept worse solutions. A high value "
                    "explores the solution space broadly but needs more iterations to converge; a "
                    "low value limits exploration and runs faster.\n"
                    "Default value: 1000. Must be at least 10. Recommended range: [500, 2000]"
                ),
                values="double",
            )
        )
        params.append(
            ParameterDescriptor(
                name="Cooling Rate",
                description=(
                    "Factor (between 0 and 1) applied to the temperature after each level. Values "
                    "close to 1 cool slowly and explore more; smaller values finish sooner but may "
                    "miss better solutions.\n"
                    "Default value: 0.9. Recommended range: [0.80, 0.99]"
                ),
                values="double",
            )
        )
        params.append(
            ParameterDescriptor(
                name="K",
                description=(
                    "Number of candidate moves evaluated at each temperature level. A high K "
                    "explores each level more deeply at the cost of running time.\n"
                    "Default value: 600. Recommended range: [200, 1000]"
                ),
                values="double",
            )
        )
        return params

    def _consume_parameters(self, cursor: ParameterCursor) -> None:
        super()._consume_parameters(cursor)
        self.initial_temperature = self._parse_parameter(
            cursor.next(), "Initial Temperature", DEFAULT_INITIAL_TEMPERATURE, lambda v: v >= MIN_INITIAL_TEMPERATURE
        )
        self.cooling_rate = self._parse_parameter(
            cursor.next(), "Cooling Rate", DEFAULT_COOLING_RATE, lambda v: 0.0 < v < 1.0
        )
        self.iterations_per_level = self._parse_parameter(
            cursor.next(), "K", DEFAULT_ITERATIONS_PER_LEVEL, lambda v: v > 0.0
        )

    def _parse_parameter(self, token: Optional[str], parameter: str, default: float, valid) -> float:
        if token is None:
            return default
        try:
            value = float(token)
        except ValueError:
            self._reject_token(parameter, token, "non-numeric value")
            return default
        if not math.isfinite(value) or not valid(value):
            self._reject_token(parameter, token, "invalid value")
            return default
        return value

    def initial_solution(self, rng: np.random.Generator) -> np.ndarray:
        return rng.permutation(self.n)

    def _random_neighbor(self, solution: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        neighbor = solution.copy()
        pos1 = rng.integers(self.n)
        pos2 = rng.integers(self.n)
        neighbor[pos1], neighbor[pos2] = neighbor[pos2], neighbor[pos1]
        return neighbor

    def _acceptance_probability(self, delta: float, temperature: float) -> float:
        return min(1.0, math.exp(-delta / (self.iterations_per_level * temperature)))

    def _anneal(self, start_time: float, time_limit: Optional[float]) -> tuple[AnnealingState, str]:
        rng = np.random.default_rng(self.seed)
        initial = self.initial_solution(rng)
        initial_cost = self.cycle_cost(initial)
        state = AnnealingState(
            current=initial,
            current_cost=initial_cost,
            best=initial.copy(),
            best_cost=initial_cost,
            initial_cost=initial_cost,
            temperature=self.initial_temperature,
        )
        if self.n <= 1:
            return state, "complete"

        moves_per_level = math.ceil(self.iterations_per_level)
        try:
            while state.temperature > FINAL_TEMPERATURE:
                enforce_time_budget(start_time, time_limit)
                for _ in range(moves_per_level):
                    neighbor = self._random_neighbor(state.current, rng)
                    neighbor_cost = self.cycle_cost(neighbor)
                    delta = neighbor_cost - state.current_cost
                    if delta < 0 or self._acceptance_probability(delta, state.temperature) > rng.random():
                        state.current = neighbor
                        state.current_cost = neighbor_cost
                        state.accepted += 1
                        state.update_best()
                state.temperature *= self.cooling_rate
                state.levels += 1
        except TimeLimitExpired:
            logger.debug("%s stopped after %d temperature levels", self.name, state.levels)
            return state, "timeout"
        return state, "complete"

    def _record(self, state: AnnealingState) -> None:
        self.metadata = {
            "initial_temperature": self.initial_temperature,
            "cooling_rate": self.cooling_rate,
            "iterations_per_level": self.iterations_per_level,
            "seed": self.seed,
            "initial_cost": state.initial_cost,
            "levels": state.levels,
            "accepted": state.accepted,
            "improved": state.improved,
        }

    def compute_cycle(self) -> List[int]:
        state, _ = self._anneal(current_time(), None)
        self._record(state)
        return [int(v) for v in state.best]

    def solve(self, time_limit: Optional[float] = None) -> AlgorithmResult:
        start_time = current_time()
        state, status = self._anneal(start_time, time_limit)
        self._record(state)
        return AlgorithmResult(
            name=self.name,
            path=[int(v) for v in state.best],
            cost=state.best_cost,
            elapsed=current_time() - start_time,
            status=status,
            metadata={"family": self.family.value, **self.metadata},
        )


__all__ = ["AnnealingState", "SimulatedAnnealingSolver"]
