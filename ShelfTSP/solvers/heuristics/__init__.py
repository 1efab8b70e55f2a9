from ShelfTSP.solvers.heuristics.greedy import GreedySolver

__all__ = ["GreedySolver"]
