import numpy as np
import pytest

from ShelfTSP.solvers import (
    SOLVER_REGISTRY,
    GreedySolver,
    KruskalApproxSolver,
    SimulatedAnnealingSolver,
    all_variants,
    common_variant_types,
    create_variant,
    usable_variants,
)
from ShelfTSP.utils.taxonomy import AlgorithmType
from tests.helpers import assert_permutation, manhattan_matrix


def test_create_variant_by_type_and_name(metric_matrix) -> None:
    assert isinstance(create_variant(AlgorithmType.GREEDY, metric_matrix), GreedySolver)
    assert isinstance(create_variant("kruskal_approx", metric_matrix), KruskalApproxSolver)
    assert isinstance(create_variant("simulated_annealing", metric_matrix), SimulatedAnnealingSolver)
    assert set(SOLVER_REGISTRY) == set(AlgorithmType)


def test_unknown_type_and_missing_matrix_are_fatal(metric_matrix) -> None:
    with pytest.raises(KeyError):
        create_variant("ant_colony", metric_matrix)
    with pytest.raises(ValueError):
        create_variant(AlgorithmType.GREEDY, None)


def test_all_variants_one_per_type(metric_matrix) -> None:
    variants = all_variants(metric_matrix)
    assert [solver.type for solver in variants] == list(AlgorithmType)
    assert all(solver.accepts() for solver in variants)


def test_usable_variants_filters_by_acceptance(triangle_violation_matrix) -> None:
    usable = usable_variants(triangle_violation_matrix)
    assert [solver.type for solver in usable] == [AlgorithmType.GREEDY, AlgorithmType.SIMULATED_ANNEALING]
    assert usable_variants([[0, -2], [1, 0]]) == []
    assert usable_variants([[0, 1], [1]]) == []
    assert usable_variants(np.zeros((0, 0), dtype=np.float32)) == []


def test_common_types_intersect_every_matrix(metric_matrix, triangle_violation_matrix) -> None:
    assert common_variant_types([metric_matrix]) == list(AlgorithmType)
    assert common_variant_types([metric_matrix, triangle_violation_matrix]) == [
        AlgorithmType.GREEDY,
        AlgorithmType.SIMULATED_ANNEALING,
    ]
    assert common_variant_types([metric_matrix, [[0, -1], [1, 0]]]) == []
    assert common_variant_types([]) == []


def test_parameter_descriptor_counts(metric_matrix) -> None:
    counts = {solver.type: len(solver.available_parameters()) for solver in all_variants(metric_matrix)}
    assert counts == {
        AlgorithmType.GREEDY: 1,
        AlgorithmType.KRUSKAL_APPROX: 1,
        AlgorithmType.SIMULATED_ANNEALING: 3,
    }


def test_extra_tokens_are_ignored(metric_matrix) -> None:
    solver = create_variant(AlgorithmType.GREEDY, metric_matrix)
    solver.apply_parameters(["true", "unused", None])
    assert solver.exhaustive_start is True


def test_cycle_cost_rotation_and_reversal() -> None:
    matrix = manhattan_matrix(6, seed=4)
    solver = create_variant(AlgorithmType.GREEDY, matrix)
    cycle = [3, 1, 5, 0, 2, 4]
    cost = solver.cycle_cost(cycle)
    for shift in range(6):
        assert solver.cycle_cost(cycle[shift:] + cycle[:shift]) == cost
    assert solver.cycle_cost(cycle[::-1]) == cost
    assert solver.cycle_cost([]) == 0.0


def test_cycle_cost_rotation_on_asymmetric(random_asymmetric_matrix) -> None:
    solver = create_variant(AlgorithmType.SIMULATED_ANNEALING, random_asymmetric_matrix)
    cycle = list(range(9))
    cost = solver.cycle_cost(cycle)
    expected = sum(float(random_asymmetric_matrix[i, (i + 1) % 9]) for i in range(9))
    assert cost == pytest.approx(expected)
    assert solver.cycle_cost(cycle[4:] + cycle[:4]) == pytest.approx(cost)


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_every_usable_variant_returns_permutation(seed) -> None:
    matrix = manhattan_matrix(7, seed=seed)
    for solver in usable_variants(matrix):
        solver.apply_parameters(["true"] if solver.type is AlgorithmType.GREEDY else ["20", "0.7", "50"])
        assert_permutation(solver.compute_cycle(), 7)
