from __future__ import annotations

from enum import Enum


class AlgorithmFamily(str, Enum):
    APPROXIMATION = "approximation"
    HEURISTIC = "heuristic"
    METAHEURISTIC = "metaheuristic"


class AlgorithmType(str, Enum):
    """Closed set of distribution algorithms offered by the engine."""

    GREEDY = "greedy"
    KRUSKAL_APPROX = "kruskal_approx"
    SIMULATED_ANNEALING = "simulated_annealing"


__all__ = ["AlgorithmFamily", "AlgorithmType"]
