"""
Solution returned by a solver
"""
from enum import Enum
from typing import Optional, Dict, Any, TYPE_CHECKING

from .errors import MissingValueError, SolutionStatusError
from .variables import Variable

if TYPE_CHECKING:
    from .problem import Problem

_TOLERANCE = 1e-5


class Status(Enum):
    """Solver status"""
    OPTIMAL = 'optimal'
    SUB_OPTIMAL = 'sub_optimal'
    INFEASIBLE = 'infeasible'
    UNBOUNDED = 'unbounded'
    NOT_SOLVED = 'not_solved'


class Solution:
    """
    Status and variable values returned by a solver.

    Values are looked up by variable name. The mapping is taken as given:
    a variable the solver did not report is only noticed when it is asked for.

    Parameters
    ----------
    status : Status
        Solver status
    values : dict
        Variable name -> value
    problem : Problem, optional
        Problem the values belong to, used by :meth:`eval`

    Examples
    --------
    >>> solution = ScipySolver().run(problem)
    >>> if solution.is_optimal():
    ...     print(solution.get_int(a), solution.eval())
    """

    def __init__(self, status: Status, values: Optional[Dict[str, float]] = None,
                 problem: Optional['Problem'] = None):
        self.status = status
        self.values: Dict[str, float] = dict(values) if values else {}
        self.problem = problem

    def is_optimal(self) -> bool:
        """Check if solution is optimal"""
        return self.status is Status.OPTIMAL

    def is_feasible(self) -> bool:
        """Check if solution carries usable values"""
        return self.status in (Status.OPTIMAL, Status.SUB_OPTIMAL)

    def _check_status(self):
        if not self.is_feasible():
            raise SolutionStatusError(
                f"Solution must be optimal or sub-optimal, status is {self.status.value}"
            )

    def get_raw_value(self, name: str) -> float:
        """Value of the variable called ``name``"""
        self._check_status()
        try:
            return self.values[name]
        except KeyError:
            raise MissingValueError(
                f"No value for variable '{name}'. "
                "Check that the variable is used in the related problem."
            ) from None

    def get_float(self, var: Variable) -> float:
        return float(self.get_raw_value(var.name))

    def get_int(self, var: Variable) -> int:
        """Value of ``var`` as an int; raises ValueError if it is not integral"""
        value = self.get_raw_value(var.name)
        rounded = int(round(value))
        if abs(value - rounded) > _TOLERANCE:
            raise ValueError(f"Value {value} cannot be interpreted as integer")
        return rounded

    def get_bool(self, var: Variable) -> bool:
        """Value of ``var`` as a bool; raises ValueError if it is not 0 or 1"""
        value = self.get_raw_value(var.name)
        if abs(1.0 - value) <= _TOLERANCE:
            return True
        if abs(value) <= _TOLERANCE:
            return False
        raise ValueError(f"Value {value} cannot be interpreted as boolean")

    def eval(self) -> Optional[float]:
        """
        Objective value of the related problem under these values.

        Returns None when there is no related problem or it has no
        objective. Raises MissingValueError if an objective variable has no
        value.
        """
        if self.problem is None or self.problem.objective is None:
            return None
        return self.problem.objective.evaluate(self.values)

    def __repr__(self):
        return f"Solution(status='{self.status.value}', n_vars={len(self.values)})"

    def __str__(self):
        lines = [
            "Solution",
            "=" * 50,
            f"Status:          {self.status.value}",
        ]
        if self.problem is not None:
            lines.append(f"Problem:         {self.problem.name}")
            if self.is_feasible() and self.problem.objective is not None:
                try:
                    lines.append(f"Objective:       {self.eval():.6g}")
                except MissingValueError:
                    lines.append("Objective:       (incomplete values)")
        for name, value in self.values.items():
            lines.append(f"  {name:<15} {value:.6g}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert solution to dictionary; the related problem is not included"""
        return {
            'status': self.status.value,
            'values': dict(self.values),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any], problem: Optional['Problem'] = None):
        """Create Solution from dictionary"""
        values = {name: float(value) for name, value in d.get('values', {}).items()}
        return cls(Status(d['status']), values, problem)
