from __future__ import annotations

from typing import List

import numpy as np

from ShelfTSP.solvers.base import BaseSolver, ParameterCursor, ParameterDescriptor
from ShelfTSP.utils.taxonomy import AlgorithmFamily, AlgorithmType

EXHAUSTIVE_START_PARAMETER = "Test All Starting Nodes"


class GreedySolver(BaseSolver):
    """Nearest-neighbour construction, optionally restarted from every vertex."""

    name = "greedy"
    type = AlgorithmType.GREEDY
    family = AlgorithmFamily.HEURISTIC

    def __init__(self, graph, exhaustive_start: bool = False):
        super().__init__(graph)
        self.exhaustive_start = exhaustive_start

    def available_parameters(self) -> List[ParameterDescriptor]:
        params = super().available_parameters()
        params.append(
            ParameterDescriptor(
                name=EXHAUSTIVE_START_PARAMETER,
                description=(
                    "If true, the tour is built n times, once from each starting node, and the "
                    "cheapest one is kept. Otherwise only node 0 is used as the start (default)."
                ),
                values="{true, false}",
            )
        )
        return params

    def _consume_parameters(self, cursor: ParameterCursor) -> None:
        super()._consume_parameters(cursor)
        self.exhaustive_start = False
        token = cursor.next()
        if token is None:
            return
        if token == "true":
            self.exhaustive_start = True
        elif token != "false":
            self._reject_token(EXHAUSTIVE_START_PARAMETER, token)

    def tour_from(self, start: int) -> List[int]:
        dist_matrix = self.dist_matrix
        visited = np.zeros(self.n, dtype=bool)
        visited[start] = True
        path = [start]
        current = start
        for _ in range(1, self.n):
            best_city = -1
            best_cost = np.inf
            for city in range(self.n):
                if not visited[city] and dist_matrix[current, city] < best_cost:
                    best_cost = dist_matrix[current, city]
                    best_city = city
            if best_city == -1:
                # Only reachable through infinite costs; fall back to index order.
                best_city = int(np.flatnonzero(~visited)[0])
            visited[best_city] = True
            path.append(best_city)
            current = best_city
        return path

    def compute_cycle(self) -> List[int]:
        self.metadata = {"exhaustive_start": self.exhaustive_start}
        if self.n == 0:
            return []
        if not self.exhaustive_start:
            self.metadata["best_start"] = 0
            return self.tour_from(0)

        best_path = self.tour_from(0)
        best_cost = self.cycle_cost(best_path)
        for start in range(1, self.n):
            path = self.tour_from(start)
            cost = self.cycle_cost(path)
            if cost < best_cost:
                best_cost = cost
                best_path = path
        self.metadata["best_start"] = best_path[0]
        return best_path


__all__ = ["GreedySolver"]
