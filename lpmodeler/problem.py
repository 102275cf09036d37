"""
Linear problem container.

Example
-------
>>> from lpmodeler import Problem, Integer
>>> a, b, c = Integer('a'), Integer('b'), Integer('c')
>>> problem = Problem('One Problem', sense='maximize')
>>> problem += 10*a + 20*b
>>> problem += (500*a + 1200*b + 1500*c) <= 10000
>>> problem += a <= b
>>> print(problem.to_lp_format())
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Union

from .arena import ExpressionArena, ExpressionLike, ADD, as_expression
from .constraints import Constraint, split_constant_and_expr
from .simplify import simplify
from .variables import Variable

logger = logging.getLogger(__name__)


class Sense(Enum):
    """Optimization sense"""
    MINIMIZE = 'minimize'
    MAXIMIZE = 'maximize'


class Problem:
    """
    An objective and a list of constraints.

    The objective is stored simplified with its constant removed, since a
    constant does not change the optimal point.

    Parameters
    ----------
    name : str
        Name of the problem, written as a comment in LP files
    sense : str or Sense, optional
        'minimize' or 'maximize' (default: 'minimize')
    """

    def __init__(self, name: str, sense: Union[str, Sense] = Sense.MINIMIZE):
        if isinstance(sense, str):
            sense = Sense(sense.lower())
        if not isinstance(sense, Sense):
            raise TypeError(f"sense must be a Sense or a string, got {type(sense).__name__}")
        self.name = name
        self.sense = sense
        self.objective: Optional[ExpressionArena] = None
        self.constraints: List[Constraint] = []

    def is_maximize(self) -> bool:
        return self.sense is Sense.MAXIMIZE

    def add_objective(self, expr: ExpressionLike) -> 'Problem':
        """
        Add ``expr`` to the objective.

        The first call sets the objective; later calls add to it.

        Parameters
        ----------
        expr : ExpressionArena, Variable or number
            Objective term(s)

        Returns
        -------
        Problem
            This problem, for chaining
        """
        if self.objective is None:
            combined = as_expression(expr)
        else:
            combined = self.objective.merge(as_expression(expr), ADD)
        simplify(combined)
        _, self.objective = split_constant_and_expr(combined)
        logger.debug("Objective of '%s' is now: %s", self.name, self.objective.show())
        return self

    def add_constraint(self, constraint: Constraint) -> Constraint:
        """
        Append a constraint.

        Raises
        ------
        TypeError
            If ``constraint`` is not a Constraint (build one with ``<=``,
            ``>=``, ``le``, ``ge`` or ``equal``)
        """
        if not isinstance(constraint, Constraint):
            raise TypeError("Must provide a Constraint object (use <=, >=, le, ge or equal)")
        self.constraints.append(constraint)
        logger.debug("Added constraint c%d to '%s'", len(self.constraints), self.name)
        return constraint

    def __iadd__(self, other):
        if isinstance(other, Constraint):
            self.add_constraint(other)
        else:
            self.add_objective(other)
        return self

    def variables(self) -> Dict[str, Variable]:
        """
        All variables of the problem keyed by name.

        The objective is scanned first, then the constraints in order; each
        name keeps its first occurrence.
        """
        found: Dict[str, Variable] = {}
        expressions = []
        if self.objective is not None:
            expressions.append(self.objective)
        for constraint in self.constraints:
            expressions.append(constraint.lhs)
            expressions.append(constraint.rhs)
        for expr in expressions:
            for var in expr.variables():
                found.setdefault(var.name, var)
        return found

    def to_lp_format(self) -> str:
        from .lp_format import problem_to_lp
        return problem_to_lp(self)

    def write_lp(self, path: str):
        """Write this problem to ``path`` in LP format"""
        from .lp_format import write_lp
        write_lp(self, path)

    def to_standard_form(self):
        """Build the numeric standard form (see :class:`lpmodeler.model.StandardForm`)"""
        from .model import StandardForm
        return StandardForm.from_problem(self)

    def __repr__(self):
        return (f"Problem(name='{self.name}', sense={self.sense.value}, "
                f"variables={len(self.variables())}, constraints={len(self.constraints)})")


def minimize(name: str, expr: ExpressionLike) -> Problem:
    """Create a minimization problem with the given objective"""
    return Problem(name, Sense.MINIMIZE).add_objective(expr)


def maximize(name: str, expr: ExpressionLike) -> Problem:
    """Create a maximization problem with the given objective"""
    return Problem(name, Sense.MAXIMIZE).add_objective(expr)
