from ShelfTSP.solvers.meta.simulated_annealing import SimulatedAnnealingSolver

__all__ = ["SimulatedAnnealingSolver"]
