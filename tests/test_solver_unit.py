import pytest

from lpmodeler import (
    Binary, Continuous, Problem, ScipySolver, SolutionStatusError, SolverParameters, Status, solve,
)
from lpmodeler.solver import _map_status


def test_parameters_to_options() -> None:
    params = SolverParameters()
    assert params.to_options() == {"disp": False, "presolve": True}
    params.time_limit = 30
    params.mip_rel_gap = 1e-6
    params.node_limit = 100
    params.verbose = True
    assert params.to_options() == {
        "disp": True,
        "presolve": True,
        "time_limit": 30.0,
        "mip_rel_gap": 1e-6,
        "node_limit": 100,
    }


def test_parameters_dict_round_trip() -> None:
    params = SolverParameters.from_dict({"time_limit": 5.0, "presolve": False, "unknown": 1})
    assert params.time_limit == 5.0
    assert params.presolve is False
    assert not hasattr(params, "unknown")
    assert SolverParameters.from_dict(params.to_dict()).to_dict() == params.to_dict()


@pytest.mark.parametrize(
    "code,has_point,expected",
    [
        (0, True, Status.OPTIMAL),
        (1, True, Status.SUB_OPTIMAL),
        (1, False, Status.NOT_SOLVED),
        (2, False, Status.INFEASIBLE),
        (3, False, Status.UNBOUNDED),
        (4, False, Status.NOT_SOLVED),
    ],
)
def test_status_mapping(code: int, has_point: bool, expected: Status) -> None:
    assert _map_status(code, has_point) is expected


def test_solve_knapsack(knapsack, abc) -> None:
    a, b, c = abc
    solution = ScipySolver().run(knapsack)
    assert solution.status is Status.OPTIMAL
    assert solution.problem is knapsack
    assert solution.eval() == pytest.approx(170.0)
    assert solution.get_int(a) <= solution.get_int(b)
    assert 500 * solution.get_int(a) + 1200 * solution.get_int(b) + 1500 * solution.get_int(c) <= 10000


def test_solve_continuous_lp() -> None:
    x = Continuous("x").with_lower_bound(0)
    y = Continuous("y").with_lower_bound(0)
    problem = Problem("lp", "minimize")
    problem += -3 * x - 5 * y
    problem += x + 2 * y <= 10
    problem += 3 * x + y <= 12
    solution = solve(problem)
    assert solution.is_optimal()
    assert solution.get_float(x) == pytest.approx(2.8, abs=1e-6)
    assert solution.get_float(y) == pytest.approx(3.6, abs=1e-6)
    assert solution.eval() == pytest.approx(-26.4, abs=1e-6)


def test_solve_binary_choice() -> None:
    pick = [Binary(f"pick{i}") for i in range(3)]
    problem = Problem("choose one", "maximize")
    problem += 1 * pick[0] + 3 * pick[1] + 2 * pick[2]
    problem += (pick[0] + pick[1] + pick[2]).equal(1)
    solution = ScipySolver(SolverParameters()).run(problem)
    assert [solution.get_bool(p) for p in pick] == [False, True, False]


def test_infeasible_problem() -> None:
    x = Continuous("x").with_lower_bound(0)
    problem = Problem("infeasible")
    problem += x
    problem += x >= 5
    problem += x <= 3
    solution = ScipySolver().run(problem)
    assert solution.status is Status.INFEASIBLE
    assert solution.values == {}
    with pytest.raises(SolutionStatusError):
        solution.get_float(x)
