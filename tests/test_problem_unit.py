import pytest

from lpmodeler import Continuous, Integer, Problem, Sense, maximize, minimize


@pytest.mark.parametrize(
    "sense,expected",
    [("maximize", Sense.MAXIMIZE), ("MINIMIZE", Sense.MINIMIZE), (Sense.MAXIMIZE, Sense.MAXIMIZE)],
)
def test_sense_accepts_enum_or_string(sense, expected) -> None:
    assert Problem("p", sense).sense is expected


def test_invalid_sense() -> None:
    with pytest.raises(ValueError):
        Problem("p", "sideways")
    with pytest.raises(TypeError):
        Problem("p", 1)


def test_objective_constant_is_stripped(abc) -> None:
    a, b, _ = abc
    problem = Problem("p")
    problem += 3 * a + 2 * b + 12
    assert problem.objective.show() == "3 a + 2 b"


def test_objective_terms_accumulate(abc) -> None:
    a, b, c = abc
    problem = Problem("p", "maximize")
    problem += 10 * a
    problem += 20 * b + 5
    assert problem.objective.show() == "10 a + 20 b"
    problem.add_objective(c)
    assert problem.objective.to_lp_format() == "10 a + 20 b + c"


def test_iadd_dispatches_on_type(knapsack) -> None:
    assert len(knapsack.constraints) == 2
    assert knapsack.objective.show() == "10 a + 20 b"


def test_add_constraint_rejects_other_types(abc) -> None:
    a, _, _ = abc
    problem = Problem("p")
    with pytest.raises(TypeError):
        problem.add_constraint(a + 1)


def test_variables_in_first_occurrence_order() -> None:
    x, y, z = Continuous("x"), Continuous("y"), Continuous("z")
    problem = Problem("p")
    problem += y
    problem += z + x <= 4
    problem += x - y >= 0
    assert list(problem.variables()) == ["y", "z", "x"]
    assert problem.variables()["x"] == x


def test_variables_without_objective(abc) -> None:
    a, b, _ = abc
    problem = Problem("p")
    problem += b <= a
    assert list(problem.variables()) == ["b", "a"]


def test_minimize_and_maximize_helpers(abc) -> None:
    a, _, _ = abc
    assert minimize("low", a).sense is Sense.MINIMIZE
    high = maximize("high", 2 * a)
    assert high.is_maximize()
    assert high.objective.show() == "2 a"


def test_repr(knapsack) -> None:
    assert repr(knapsack) == "Problem(name='One Problem', sense=maximize, variables=3, constraints=2)"


def test_to_lp_format_and_write_lp(tmp_path, knapsack) -> None:
    path = tmp_path / "knapsack.lp"
    knapsack.write_lp(str(path))
    assert path.read_text(encoding="utf-8") == knapsack.to_lp_format()
    assert knapsack.to_lp_format().startswith("\\ One Problem\n")


def test_integer_variables_shared_by_name() -> None:
    a = Integer("a")
    problem = Problem("p")
    problem += a + Integer("a")
    assert problem.objective.show() == "2 a"
