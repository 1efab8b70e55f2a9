from __future__ import annotations

import itertools

import numpy as np


def manhattan_matrix(n: int, seed: int) -> np.ndarray:
    """Metric matrix from integer grid points (exact in float32)."""
    rng = np.random.default_rng(seed)
    coords = rng.integers(0, 50, size=(n, 2))
    diff = coords[:, None, :] - coords[None, :, :]
    return np.abs(diff).sum(axis=-1).astype(np.float32)


def brute_force_optimum(matrix: np.ndarray) -> float:
    n = matrix.shape[0]
    best = float("inf")
    for rest in itertools.permutations(range(1, n)):
        tour = (0,) + rest
        cost = sum(float(matrix[tour[i], tour[(i + 1) % n]]) for i in range(n))
        best = min(best, cost)
    return best


def assert_permutation(cycle, n: int) -> None:
    assert len(cycle) == n
    assert sorted(int(v) for v in cycle) == list(range(n))
