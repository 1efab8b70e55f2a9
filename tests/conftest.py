"""Shared fixtures for the ShelfTSP test-suite.

Also puts the project root on sys.path so ``scripts.*`` and ``tests.*`` can be
imported.
"""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))


@pytest.fixture
def greedy_matrix() -> list[list[float]]:
    return [[0, 1, 2], [1, 0, 4], [1, 10, 0]]


@pytest.fixture
def triangle_violation_matrix() -> list[list[float]]:
    return [[0, 10, 1], [10, 0, 1], [1, 1, 0]]


@pytest.fixture
def metric_matrix() -> list[list[float]]:
    return [[0, 1, 2], [1, 0, 2], [2, 2, 0]]


@pytest.fixture
def shelf_matrix() -> list[list[float]]:
    return [[0, 1.2, 3.4], [1.2, 0, 2.1], [3.4, 2.1, 0]]


@pytest.fixture
def random_asymmetric_matrix() -> np.ndarray:
    rng = np.random.default_rng(7)
    matrix = rng.uniform(1.0, 20.0, size=(9, 9)).astype(np.float32)
    np.fill_diagonal(matrix, 0.0)
    return matrix
