from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

import numpy as np

# Cost assigned to a zero affinity: large but finite so sums stay comparable.
ZERO_AFFINITY_COST = 1e9


@dataclass(frozen=True)
class WeightedEdge:
    u: int
    v: int
    weight: float


def as_distance_matrix(matrix: Any) -> Optional[np.ndarray]:
    """Return a private float32 copy of ``matrix``.

    ``None`` is a caller bug and raises ``ValueError``. Input that cannot form a
    rectangular array (ragged rows) yields ``None`` so that acceptance checks can
    report it without raising.
    """
    if matrix is None:
        raise ValueError("A distance matrix is required.")
    try:
        return np.array(matrix, dtype=np.float32)
    except (TypeError, ValueError):
        return None


def is_square_non_negative(dist_matrix: Optional[np.ndarray]) -> bool:
    if dist_matrix is None or dist_matrix.ndim != 2:
        return False
    n = dist_matrix.shape[0]
    if n <= 0 or dist_matrix.shape[1] != n:
        return False
    off_diagonal = ~np.eye(n, dtype=bool)
    # NaN compares False, so it is rejected here as well.
    return bool(np.all(dist_matrix[off_diagonal] >= 0))


def is_symmetric(dist_matrix: np.ndarray) -> bool:
    return bool(np.array_equal(dist_matrix, dist_matrix.T))


def satisfies_triangle_inequality(dist_matrix: np.ndarray) -> bool:
    """Check ``d[i, j] <= d[i, k] + d[k, j]`` for every triple of distinct vertices."""
    n = dist_matrix.shape[0]
    distinct_pairs = ~np.eye(n, dtype=bool)
    for k in range(n):
        via_k = dist_matrix[:, k][:, None] + dist_matrix[k, :][None, :]
        mask = distinct_pairs.copy()
        mask[k, :] = False
        mask[:, k] = False
        if np.any(dist_matrix[mask] > via_k[mask]):
            return False
    return True


def to_edge_list(matrix: Any) -> List[WeightedEdge]:
    """One directed edge per ordered pair ``(i, j)`` with ``i != j``, row-major."""
    dist_matrix = np.asarray(matrix, dtype=np.float32)
    edges: List[WeightedEdge] = []
    for i in range(dist_matrix.shape[0]):
        for j in range(dist_matrix.shape[1]):
            if i == j:
                continue
            edges.append(WeightedEdge(i, j, float(dist_matrix[i, j])))
    return edges


def to_matrix(edges: Iterable[WeightedEdge], n: int) -> np.ndarray:
    matrix = np.zeros((n, n), dtype=np.float32)
    for edge in edges:
        matrix[edge.u, edge.v] = edge.weight
    return matrix


def invert_values(matrix: Any) -> Any:
    """Turn an affinity matrix into a distance matrix, in place.

    Every non-zero value ``x`` becomes ``1 / x``; zeros (including the diagonal)
    become :data:`ZERO_AFFINITY_COST`. The same object is returned.

    ``matrix`` is either a floating-point ndarray or a mutable list of rows.
    Integer arrays cannot hold the inverted values and raise ``TypeError``;
    convert them first (e.g. with :func:`as_distance_matrix`).
    """
    if not isinstance(matrix, np.ndarray):
        for row in matrix:
            for j, value in enumerate(row):
                row[j] = 1.0 / value if value != 0 else ZERO_AFFINITY_COST
        return matrix
    if not np.issubdtype(matrix.dtype, np.floating):
        raise TypeError(f"Cannot invert a {matrix.dtype} matrix in place; a floating dtype is required.")
    zero = matrix == 0
    np.divide(1, matrix, out=matrix, where=~zero)
    matrix[zero] = ZERO_AFFINITY_COST
    return matrix


__all__ = [
    "WeightedEdge",
    "ZERO_AFFINITY_COST",
    "as_distance_matrix",
    "invert_values",
    "is_square_non_negative",
    "is_symmetric",
    "satisfies_triangle_inequality",
    "to_edge_list",
    "to_matrix",
]
