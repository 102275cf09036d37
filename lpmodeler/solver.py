"""
Solver collaborator backed by scipy.optimize.milp (HiGHS)
"""
import logging
from typing import Optional

import numpy as np
from scipy.optimize import milp, Bounds, LinearConstraint

from .model import StandardForm
from .parameters import SolverParameters
from .solution import Solution, Status

logger = logging.getLogger(__name__)

# scipy.optimize.milp status codes
_MILP_OPTIMAL = 0
_MILP_LIMIT_REACHED = 1
_MILP_INFEASIBLE = 2
_MILP_UNBOUNDED = 3


def _map_status(code: int, has_point: bool) -> Status:
    if code == _MILP_OPTIMAL:
        return Status.OPTIMAL
    if code == _MILP_LIMIT_REACHED:
        return Status.SUB_OPTIMAL if has_point else Status.NOT_SOLVED
    if code == _MILP_INFEASIBLE:
        return Status.INFEASIBLE
    if code == _MILP_UNBOUNDED:
        return Status.UNBOUNDED
    return Status.NOT_SOLVED


class ScipySolver:
    """
    Solve problems with ``scipy.optimize.milp``.

    The problem is converted to its :class:`~lpmodeler.model.StandardForm`
    and handed to HiGHS through scipy:

        minimize    c'*x
        subject to  AL <= A*x <= AU
                    l <= x <= u

    Parameters
    ----------
    parameters : SolverParameters, optional
        Solver parameters. If None, default parameters are used.

    Examples
    --------
    >>> from lpmodeler import Problem, Integer, ScipySolver
    >>> a, b = Integer('a'), Integer('b')
    >>> problem = Problem('demo', 'maximize')
    >>> problem += 10*a + 20*b
    >>> problem += 500*a + 1200*b <= 10000
    >>> solution = ScipySolver().run(problem)
    >>> print(solution.status, solution.get_int(a), solution.get_int(b))
    """

    def __init__(self, parameters: Optional[SolverParameters] = None):
        self.parameters = parameters if parameters is not None else SolverParameters()

    def run(self, problem, parameters: Optional[SolverParameters] = None) -> Solution:
        """
        Solve ``problem``.

        Parameters
        ----------
        problem : Problem
            Problem to solve
        parameters : SolverParameters, optional
            Overrides the solver's parameters for this call

        Returns
        -------
        Solution
            Status and values, bound to ``problem``
        """
        if parameters is None:
            parameters = self.parameters

        form = StandardForm.from_problem(problem)
        logger.info("Solving '%s' with scipy.optimize.milp: %d constraints, %d variables",
                    problem.name, form.m, form.n)

        constraints = None
        if form.m > 0:
            constraints = LinearConstraint(form.A, form.AL, form.AU)

        result = milp(
            form.c,
            integrality=form.integrality,
            bounds=Bounds(form.l, form.u),
            constraints=constraints,
            options=parameters.to_options(),
        )

        has_point = result.x is not None
        status = _map_status(result.status, has_point)
        logger.info("Solver finished for '%s': %s (%s)", problem.name, status.value, result.message)

        values = {}
        if has_point and status in (Status.OPTIMAL, Status.SUB_OPTIMAL):
            x = np.asarray(result.x, dtype=np.float64)
            values = {name: float(value) for name, value in zip(form.names, x)}

        return Solution(status, values, problem)


def solve(problem, parameters: Optional[SolverParameters] = None) -> Solution:
    """
    Convenience function to solve a problem without creating a solver object.

    Parameters
    ----------
    problem : Problem
        Problem to solve
    parameters : SolverParameters, optional
        Solver parameters. If None, default parameters are used.

    Returns
    -------
    Solution
        Status and values, bound to ``problem``
    """
    return ScipySolver(parameters).run(problem)
