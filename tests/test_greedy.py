import logging

import numpy as np

from ShelfTSP.solvers import GreedySolver
from tests.helpers import assert_permutation


def test_tour_from_zero_follows_nearest_neighbour(greedy_matrix) -> None:
    solver = GreedySolver(greedy_matrix)
    cycle = solver.compute_cycle()
    assert cycle == [0, 1, 2]
    assert solver.cycle_cost(cycle) == 6.0


def test_ties_prefer_lowest_index() -> None:
    solver = GreedySolver(np.ones((4, 4), dtype=np.float32))
    assert solver.tour_from(0) == [0, 1, 2, 3]
    assert solver.tour_from(2) == [2, 0, 1, 3]


def test_exhaustive_start_keeps_cheapest_tour() -> None:
    matrix = [[0, 1, 2], [1, 0, 10], [10, 1, 0]]
    solver = GreedySolver(matrix)
    assert solver.compute_cycle() == [0, 1, 2]
    assert solver.cycle_cost([0, 1, 2]) == 21.0

    solver.apply_parameters(["true"])
    cycle = solver.compute_cycle()
    # Starts 1 and 2 both reach cost 4; the lower start wins.
    assert cycle == [1, 0, 2]
    assert solver.cycle_cost(cycle) == 4.0
    assert solver.metadata["best_start"] == 1


def test_exhaustive_start_matches_best_single_start(random_asymmetric_matrix) -> None:
    solver = GreedySolver(random_asymmetric_matrix, exhaustive_start=True)
    cycle = solver.compute_cycle()
    assert_permutation(cycle, 9)

    costs = [solver.cycle_cost(solver.tour_from(start)) for start in range(9)]
    expected_start = costs.index(min(costs))
    assert cycle == solver.tour_from(expected_start)
    assert solver.cycle_cost(cycle) <= solver.cycle_cost(solver.tour_from(0))


def test_parameters_fall_back_to_default(caplog, greedy_matrix) -> None:
    solver = GreedySolver(greedy_matrix)
    params = solver.available_parameters()
    assert [p.name for p in params] == ["Test All Starting Nodes"]
    assert params[0].values == "{true, false}"

    solver.apply_parameters(["true"])
    assert solver.exhaustive_start is True

    with caplog.at_level(logging.WARNING):
        solver.apply_parameters(["maybe"])
    assert solver.exhaustive_start is False
    assert "Test All Starting Nodes" in caplog.text

    solver.apply_parameters(["true"])
    solver.apply_parameters([None])
    assert solver.exhaustive_start is False
    solver.apply_parameters([])
    assert solver.exhaustive_start is False


def test_degenerate_sizes() -> None:
    assert GreedySolver(np.zeros((0, 0), dtype=np.float32)).compute_cycle() == []
    assert GreedySolver([[0]]).compute_cycle() == [0]
    assert GreedySolver([[0, 3], [5, 0]]).compute_cycle() == [0, 1]
