from __future__ import annotations

from typing import Any, Iterable, List

from ShelfTSP.solvers.approx import KruskalApproxSolver, ShortcutStrategy
from ShelfTSP.solvers.base import AlgorithmResult, BaseSolver, ParameterDescriptor, SolverSpec
from ShelfTSP.solvers.heuristics import GreedySolver
from ShelfTSP.solvers.meta import SimulatedAnnealingSolver
from ShelfTSP.utils.taxonomy import AlgorithmType

SOLVER_SPECS: dict[AlgorithmType, SolverSpec] = {
    GreedySolver.type: SolverSpec(
        type=GreedySolver.type,
        cls=GreedySolver,
    ),
    KruskalApproxSolver.type: SolverSpec(
        type=KruskalApproxSolver.type,
        cls=KruskalApproxSolver,
    ),
    SimulatedAnnealingSolver.type: SolverSpec(
        type=SimulatedAnnealingSolver.type,
        cls=SimulatedAnnealingSolver,
    ),
}

SOLVER_REGISTRY: dict[AlgorithmType, type[BaseSolver]] = {tag: spec.cls for tag, spec in SOLVER_SPECS.items()}


def resolve_type(tag: AlgorithmType | str) -> AlgorithmType:
    try:
        return AlgorithmType(tag)
    except ValueError:
        raise KeyError(f"Unknown solver: {tag}") from None


def create_variant(tag: AlgorithmType | str, matrix: Any) -> BaseSolver:
    solver_cls = SOLVER_REGISTRY.get(resolve_type(tag))
    if solver_cls is None:
        raise KeyError(f"Unknown solver: {tag}")
    return solver_cls(matrix)


def all_variants(matrix: Any) -> List[BaseSolver]:
    return [create_variant(tag, matrix) for tag in AlgorithmType]


def usable_variants(matrix: Any) -> List[BaseSolver]:
    return [solver for solver in all_variants(matrix) if solver.accepts()]


def common_variant_types(matrices: Iterable[Any]) -> List[AlgorithmType]:
    """Algorithm types that accept every one of ``matrices``, in declaration order."""
    common: set[AlgorithmType] | None = None
    for matrix in matrices:
        usable = {solver.type for solver in usable_variants(matrix)}
        common = usable if common is None else common & usable
    if not common:
        return []
    return [tag for tag in AlgorithmType if tag in common]


__all__ = [
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
    "all_variants",
    "common_variant_types",
    "create_variant",
    "resolve_type",
    "usable_variants",
]
