from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np

from ShelfTSP.matrix import as_distance_matrix, invert_values
from ShelfTSP.solvers import (
    AlgorithmResult,
    ParameterDescriptor,
    common_variant_types,
    create_variant,
    resolve_type,
    usable_variants,
)
from ShelfTSP.utils.taxonomy import AlgorithmType

logger = logging.getLogger(__name__)


class ShelfTSP:
    """Entry point for distributing items: matrix -> usable algorithms -> cycle."""

    def __init__(self, affinity: bool = False):
        self.affinity = affinity

    def _to_distance_matrix(self, matrix: Any, affinity: Optional[bool] = None) -> Any:
        use_affinity = self.affinity if affinity is None else affinity
        if not use_affinity:
            return matrix
        dist_matrix = as_distance_matrix(matrix)
        if dist_matrix is None:
            return matrix
        return invert_values(dist_matrix)

    def available_types(self, matrix: Any, affinity: Optional[bool] = None) -> List[AlgorithmType]:
        dist_matrix = self._to_distance_matrix(matrix, affinity)
        return [solver.type for solver in usable_variants(dist_matrix)]

    def common_types(self, matrices: Iterable[Any], affinity: Optional[bool] = None) -> List[AlgorithmType]:
        return common_variant_types(self._to_distance_matrix(matrix, affinity) for matrix in matrices)

    def parameters_for(self, tag: AlgorithmType | str) -> List[ParameterDescriptor]:
        return create_variant(tag, np.zeros((0, 0), dtype=np.float32)).available_parameters()

    def solve(
        self,
        matrix: Any,
        tag: AlgorithmType | str,
        tokens: Sequence[Optional[str]] = (),
        affinity: Optional[bool] = None,
        time_limit: Optional[float] = None,
    ) -> AlgorithmResult:
        solver = create_variant(tag, self._to_distance_matrix(matrix, affinity))
        if not solver.accepts():
            logger.info("%s cannot be used with the given matrix", solver.name)
            return AlgorithmResult(
                name=solver.name,
                path=None,
                cost=None,
                elapsed=0.0,
                status="unavailable",
                metadata={},
            )
        solver.apply_parameters(tokens)
        result = solver.solve(time_limit=time_limit)
        logger.debug("%s finished with cost %.4f in %.3fs", result.name, result.cost, result.elapsed)
        return result

    def solve_many(
        self,
        matrices: Sequence[Any],
        tag: AlgorithmType | str,
        tokens: Sequence[Optional[str]] = (),
        affinity: Optional[bool] = None,
    ) -> List[AlgorithmResult]:
        """Distribute several shelves with one algorithm valid for all of them."""
        algorithm_type = resolve_type(tag)
        distance_matrices = [self._to_distance_matrix(matrix, affinity) for matrix in matrices]
        if algorithm_type not in common_variant_types(distance_matrices):
            raise ValueError(f"{algorithm_type.value} cannot be used with every given matrix.")
        results = []
        for dist_matrix in distance_matrices:
            solver = create_variant(algorithm_type, dist_matrix)
            solver.apply_parameters(tokens)
            results.append(solver.solve())
        return results


__all__ = ["ShelfTSP"]
