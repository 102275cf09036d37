import logging

import pytest

from lpmodeler import Binary, Continuous, Integer, Problem
from lpmodeler.lp_format import (
    constraint_to_lp, expression_to_lp, normalize_signs, problem_to_lp, write_lp,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("a + -b", "a - b"),
        ("a - -b", "a + b"),
        ("a - +b", "a - b"),
        ("a + +b", "a + b"),
        ("a  +  b", "a + b"),
        ("a - - -b", "a - b"),
        ("2 a + b", "2 a + b"),
    ],
)
def test_normalize_signs(raw: str, expected: str) -> None:
    assert normalize_signs(raw) == expected


def test_expression_to_lp_does_not_touch_input(abc) -> None:
    a, b, _ = abc
    expr = 2 * (a + b)
    size = len(expr)
    assert expression_to_lp(expr) == "2 a + 2 b"
    assert len(expr) == size
    assert expr.show() == "2 a + b"


def test_constraint_to_lp(abc) -> None:
    a, b, c = abc
    assert constraint_to_lp((500 * a + 1200 * b + 1500 * c) <= 10000) == \
        "500 a + 1200 b + 1500 c <= 10000"
    assert constraint_to_lp(a <= b) == "a - b <= 0"


def test_problem_end_to_end(knapsack) -> None:
    assert problem_to_lp(knapsack) == (
        "\\ One Problem\n"
        "\n"
        "Maximize\n"
        "  obj: 10 a + 20 b\n"
        "\n"
        "Subject To\n"
        "  c1: 500 a + 1200 b + 1500 c <= 10000\n"
        "  c2: a - b <= 0\n"
        "\n"
        "Generals\n"
        "  a b c\n"
        "\n"
        "End\n"
    )


def test_bounds_generals_and_binaries() -> None:
    x = Continuous("x")
    y = Integer("y").with_lower_bound(0).with_upper_bound(10)
    z = Binary("z")
    w = Continuous("w").with_upper_bound(5)
    v = Integer("v").with_lower_bound(2)
    problem = Problem("p")
    problem += x + y + z + w + v

    assert problem_to_lp(problem) == (
        "\\ p\n"
        "\n"
        "Minimize\n"
        "  obj: x + y + z + w + v\n"
        "\n"
        "Bounds\n"
        "  x free\n"
        "  0 <= y <= 10\n"
        "  w <= 5\n"
        "  2 <= v\n"
        "\n"
        "Generals\n"
        "  y v\n"
        "\n"
        "Binary\n"
        "  z\n"
        "\n"
        "End\n"
    )


def test_unbounded_integer_gets_no_bound_line(abc) -> None:
    a, _, _ = abc
    problem = Problem("ints")
    problem += a
    text = problem_to_lp(problem)
    assert "Bounds" not in text
    assert "Generals\n  a\n" in text


def test_empty_problem() -> None:
    assert problem_to_lp(Problem("empty")) == "\\ empty\n\nEnd\n"


def test_problem_without_objective_has_no_objective_block(abc) -> None:
    a, b, _ = abc
    problem = Problem("feasibility", "maximize")
    problem += a <= b
    assert problem_to_lp(problem) == (
        "\\ feasibility\n"
        "\n"
        "Subject To\n"
        "  c1: a - b <= 0\n"
        "\n"
        "Generals\n"
        "  a b\n"
        "\n"
        "End\n"
    )


def test_write_lp(tmp_path, knapsack, caplog) -> None:
    caplog.set_level(logging.INFO, logger="lpmodeler.lp_format")
    path = tmp_path / "model.lp"
    write_lp(knapsack, str(path))
    assert path.read_text(encoding="utf-8") == problem_to_lp(knapsack)
    assert "Wrote LP model 'One Problem'" in caplog.text


def test_write_lp_propagates_io_errors(tmp_path, knapsack) -> None:
    with pytest.raises(OSError):
        write_lp(knapsack, str(tmp_path / "missing" / "model.lp"))
