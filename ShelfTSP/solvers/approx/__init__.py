from ShelfTSP.solvers.approx.kruskal_approx import DisjointSet, KruskalApproxSolver, ShortcutStrategy

__all__ = ["DisjointSet", "KruskalApproxSolver", "ShortcutStrategy"]
