import pytest

from lpmodeler import (
    Binary, Continuous, Integer, MissingValueError, Problem, Solution, SolutionStatusError, Status,
)


def test_typed_accessors() -> None:
    a, x, flag = Integer("a"), Continuous("x"), Binary("flag")
    solution = Solution(Status.OPTIMAL, {"a": 3.000001, "x": 2.5, "flag": 0.999999})
    assert solution.is_optimal() and solution.is_feasible()
    assert solution.get_int(a) == 3
    assert solution.get_float(x) == 2.5
    assert solution.get_bool(flag) is True
    assert solution.get_raw_value("x") == 2.5


def test_values_that_do_not_fit_the_type() -> None:
    a, flag = Integer("a"), Binary("flag")
    solution = Solution(Status.SUB_OPTIMAL, {"a": 2.5, "flag": 0.4})
    assert not solution.is_optimal() and solution.is_feasible()
    with pytest.raises(ValueError):
        solution.get_int(a)
    with pytest.raises(ValueError):
        solution.get_bool(flag)


def test_missing_value() -> None:
    solution = Solution(Status.OPTIMAL, {"a": 1.0})
    with pytest.raises(MissingValueError, match="No value for variable 'b'"):
        solution.get_int(Integer("b"))
    with pytest.raises(LookupError):
        solution.get_raw_value("b")


@pytest.mark.parametrize("status", [Status.INFEASIBLE, Status.UNBOUNDED, Status.NOT_SOLVED])
def test_values_require_a_usable_status(status) -> None:
    solution = Solution(status, {"a": 1.0})
    assert not solution.is_feasible()
    with pytest.raises(SolutionStatusError):
        solution.get_raw_value("a")


def test_eval_objective(knapsack) -> None:
    solution = Solution(Status.OPTIMAL, {"a": 5, "b": 6, "c": 0}, knapsack)
    assert solution.eval() == pytest.approx(170.0)
    assert Solution(Status.OPTIMAL, {"a": 5}).eval() is None
    assert Solution(Status.OPTIMAL, {}, Problem("empty")).eval() is None
    with pytest.raises(MissingValueError):
        Solution(Status.OPTIMAL, {"a": 5}, knapsack).eval()


def test_dict_round_trip(knapsack) -> None:
    solution = Solution(Status.OPTIMAL, {"a": 5.0, "b": 6.0})
    data = solution.to_dict()
    assert data == {"status": "optimal", "values": {"a": 5.0, "b": 6.0}}
    restored = Solution.from_dict(data, knapsack)
    assert restored.status is Status.OPTIMAL
    assert restored.values == solution.values
    assert restored.problem is knapsack


def test_text_summary(knapsack) -> None:
    solution = Solution(Status.OPTIMAL, {"a": 5.0, "b": 6.0, "c": 0.0}, knapsack)
    text = str(solution)
    assert "Status:          optimal" in text
    assert "Objective:       170" in text
    assert repr(solution) == "Solution(status='optimal', n_vars=3)"
