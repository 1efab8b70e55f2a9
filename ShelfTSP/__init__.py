from ShelfTSP.core import ShelfTSP
from ShelfTSP.matrix import WeightedEdge, invert_values, to_edge_list, to_matrix
from ShelfTSP.solvers import (
    SOLVER_REGISTRY,
    SOLVER_SPECS,
    AlgorithmResult,
    BaseSolver,
    GreedySolver,
    KruskalApproxSolver,
    ParameterDescriptor,
    ShortcutStrategy,
    SimulatedAnnealingSolver,
    all_variants,
    common_variant_types,
    create_variant,
    usable_variants,
)
from ShelfTSP.utils.taxonomy import AlgorithmFamily, AlgorithmType

__all__ = [
    "ShelfTSP",
    "AlgorithmFamily",
    "AlgorithmResult",
    "AlgorithmType",
    "BaseSolver",
    "GreedySolver",
    "KruskalApproxSolver",
    "ParameterDescriptor",
    "SOLVER_REGISTRY",
    "SOLVER_SPECS",
    "ShortcutStrategy",
    "SimulatedAnnealingSolver",
    "WeightedEdge",
    "all_variants",
    "common_variant_types",
    "create_variant",
    "invert_values",
    "to_edge_list",
    "to_matrix",
    "usable_variants",
]
