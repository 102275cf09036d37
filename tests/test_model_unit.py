import numpy as np
import pytest
from scipy import sparse

from lpmodeler import (
    Binary, Continuous, Integer, NonLinearTermError, Problem, StandardForm, linear_terms,
)


def test_linear_terms_sums_repeated_variables(abc) -> None:
    a, b, _ = abc
    coefficients, constant = linear_terms(2 * a + 3 * b - a + 4)
    assert coefficients == {"a": 1.0, "b": 3.0}
    assert constant == 4.0


def test_linear_terms_handles_nested_subtraction(abc) -> None:
    a, b, c = abc
    coefficients, constant = linear_terms(10 - (a - 5) - (b + 7) + (2 * c - 1))
    assert coefficients == {"a": -1.0, "b": -1.0, "c": 2.0}
    assert constant == pytest.approx(7.0)


@pytest.mark.parametrize("build", [lambda a, b: a * b, lambda a, b: 3 * (a * b), lambda a, b: (a + 1) * b])
def test_linear_terms_rejects_products_of_variables(abc, build) -> None:
    a, b, _ = abc
    with pytest.raises(NonLinearTermError):
        linear_terms(build(a, b))


def test_standard_form_of_knapsack(knapsack) -> None:
    form = knapsack.to_standard_form()
    assert isinstance(form, StandardForm)
    assert (form.m, form.n) == (2, 3)
    assert form.names == ["a", "b", "c"]
    assert sparse.issparse(form.A) and form.A.format == "csr"
    np.testing.assert_allclose(form.A.toarray(), [[500, 1200, 1500], [1, -1, 0]])
    np.testing.assert_allclose(form.c, [-10, -20, 0])
    np.testing.assert_array_equal(form.AL, [-np.inf, -np.inf])
    np.testing.assert_allclose(form.AU, [10000, 0])
    np.testing.assert_array_equal(form.l, [0, 0, 0])
    np.testing.assert_array_equal(form.u, [np.inf, np.inf, np.inf])
    np.testing.assert_array_equal(form.integrality, [1, 1, 1])
    assert form.objective_value([5, 6, 0]) == pytest.approx(170.0)
    assert repr(form) == "<StandardForm m=2 n=3>"


def test_standard_form_bounds_and_senses() -> None:
    x = Continuous("x")
    y = Continuous("y").with_upper_bound(4)
    z = Binary("z")
    k = Integer("k").with_lower_bound(-3).with_upper_bound(3)
    problem = Problem("p")
    problem += x + y + z + k
    problem += (x + y).equal(2)
    problem += (z + k) >= 1

    form = StandardForm.from_problem(problem)
    np.testing.assert_array_equal(form.l, [-np.inf, 0, 0, -3])
    np.testing.assert_array_equal(form.u, [np.inf, 4, 1, 3])
    np.testing.assert_array_equal(form.integrality, [0, 0, 1, 1])
    np.testing.assert_allclose(form.AL, [2, 1])
    np.testing.assert_array_equal(form.AU, [2, np.inf])
    np.testing.assert_allclose(form.c, [1, 1, 1, 1])


def test_standard_form_without_constraints(abc) -> None:
    a, _, _ = abc
    problem = Problem("p")
    problem += a
    form = StandardForm.from_problem(problem)
    assert form.A.shape == (0, 1)
    assert form.AL.shape == (0,)
    A, AL, AU, l, u, c = form.to_arrays()
    assert c.dtype == np.float64


def test_standard_form_errors(abc) -> None:
    a, b, _ = abc
    with pytest.raises(ValueError, match="no variables"):
        StandardForm.from_problem(Problem("empty"))

    problem = Problem("p")
    problem += a <= b
    with pytest.raises(ValueError, match="no objective"):
        StandardForm.from_problem(problem)

    problem += a * b
    with pytest.raises(NonLinearTermError):
        StandardForm.from_problem(problem)
