"""
Numeric standard form of a problem
"""
from typing import Dict, List, Tuple, TYPE_CHECKING

import numpy as np
from scipy import sparse

from .arena import ExpressionArena, Literal, VariableRef, Composite, ADD, SUBTRACT
from .constraints import ConstraintSense
from .errors import NonLinearTermError
from .simplify import simplify
from .variables import Variable, VariableKind

if TYPE_CHECKING:
    from .problem import Problem


def _ensure_contiguous_float64(arr):
    """Ensure array is contiguous float64"""
    if not isinstance(arr, np.ndarray):
        arr = np.array(arr, dtype=np.float64)
    if arr.dtype != np.float64:
        arr = arr.astype(np.float64)
    return np.ascontiguousarray(arr)


def linear_terms(expr: ExpressionArena) -> Tuple[Dict[str, float], float]:
    """
    Decompose an expression into variable coefficients and a constant.

    The expression is simplified on a copy first. Repeated variables have
    their coefficients summed.

    Parameters
    ----------
    expr : ExpressionArena
        A linear expression

    Returns
    -------
    coefficients : dict
        Variable name -> coefficient, in order of first occurrence
    constant : float
        Sum of the constant terms

    Raises
    ------
    NonLinearTermError
        If a product is not ``literal * variable``
    """
    arena = simplify(expr.copy())
    coefficients: Dict[str, float] = {}
    constant = 0.0

    stack = [(arena.root, 1.0)]
    while stack:
        index, sign = stack.pop()
        node = arena.get(index)
        if isinstance(node, Literal):
            constant += sign * node.value
        elif isinstance(node, VariableRef):
            name = node.variable.name
            coefficients[name] = coefficients.get(name, 0.0) + sign
        elif isinstance(node, Composite):
            if node.operator is ADD:
                stack.append((node.right, sign))
                stack.append((node.left, sign))
            elif node.operator is SUBTRACT:
                stack.append((node.right, -sign))
                stack.append((node.left, sign))
            else:
                left, right = arena.get(node.left), arena.get(node.right)
                if not (isinstance(left, Literal) and isinstance(right, VariableRef)):
                    raise NonLinearTermError(
                        f"Non-linear term: {arena.show(index)}"
                    )
                name = right.variable.name
                coefficients[name] = coefficients.get(name, 0.0) + sign * left.value
    return coefficients, constant


def _variable_bounds(var: Variable) -> Tuple[float, float]:
    if var.kind is VariableKind.BINARY:
        return 0.0, 1.0
    lower, upper = var.lower_bound, var.upper_bound
    if lower is None and upper is None and var.kind is VariableKind.CONTINUOUS:
        return -np.inf, np.inf
    return (0.0 if lower is None else lower,
            np.inf if upper is None else upper)


class StandardForm:
    """
    A problem in the form::

        minimize    c'*x + obj_constant
        subject to  AL <= A*x <= AU
                    l <= x <= u
                    x[j] integral where integrality[j] == 1

    Maximization problems are stored with ``c`` negated.

    Attributes
    ----------
    variables : list of Variable
        Column order of ``A``, ``c``, ``l`` and ``u``
    A : scipy.sparse.csr_matrix
        Constraint matrix (m x n)
    AL, AU : np.ndarray
        Lower and upper bounds for constraints (length m)
    l, u : np.ndarray
        Lower and upper bounds for variables (length n)
    c : np.ndarray
        Objective coefficients (length n)
    integrality : np.ndarray
        1 for Integer and Binary columns, 0 for Continuous (length n)
    obj_constant : float
        Objective constant term
    maximize : bool
        Whether ``c`` was negated
    """

    def __init__(self, variables: List[Variable], A, AL, AU, l, u, c,
                 integrality, obj_constant: float = 0.0, maximize: bool = False):
        self.variables = variables
        self.A = A
        self.AL = _ensure_contiguous_float64(AL)
        self.AU = _ensure_contiguous_float64(AU)
        self.l = _ensure_contiguous_float64(l)
        self.u = _ensure_contiguous_float64(u)
        self.c = _ensure_contiguous_float64(c)
        self.integrality = np.ascontiguousarray(integrality, dtype=np.int32)
        self.obj_constant = obj_constant
        self.maximize = maximize

    @property
    def m(self) -> int:
        """Number of constraints"""
        return self.A.shape[0]

    @property
    def n(self) -> int:
        """Number of variables"""
        return self.A.shape[1]

    @property
    def names(self) -> List[str]:
        return [var.name for var in self.variables]

    @classmethod
    def from_problem(cls, problem: 'Problem') -> 'StandardForm':
        """
        Build the standard form of ``problem``.

        Columns follow ``problem.variables()``.

        Raises
        ------
        ValueError
            If the problem has no variables or no objective
        NonLinearTermError
            If the objective or a constraint is not linear
        GeneralizationError
            If a constraint right side is not a constant
        """
        variables = list(problem.variables().values())
        n = len(variables)
        m = len(problem.constraints)

        if n == 0:
            raise ValueError("Problem has no variables")

        if problem.objective is None:
            raise ValueError("Problem has no objective function")

        column = {var.name: j for j, var in enumerate(variables)}

        # Build objective vector c
        c = np.zeros(n)
        coefficients, obj_constant = linear_terms(problem.objective)
        for name, coef in coefficients.items():
            c[column[name]] = coef

        # If maximizing, negate the objective
        if problem.is_maximize():
            c = -c

        bounds = [_variable_bounds(var) for var in variables]
        l = np.array([lo for lo, _ in bounds], dtype=np.float64)
        u = np.array([hi for _, hi in bounds], dtype=np.float64)
        integrality = np.array([0 if var.kind is VariableKind.CONTINUOUS else 1
                                for var in variables])

        if m == 0:
            A = sparse.csr_matrix((0, n))
            AL = np.array([])
            AU = np.array([])
        else:
            rows = []
            cols = []
            data = []
            AL = []
            AU = []

            for i, constraint in enumerate(problem.constraints):
                coefficients, constant = linear_terms(constraint.lhs)
                for name, coef in coefficients.items():
                    rows.append(i)
                    cols.append(column[name])
                    data.append(coef)

                rhs = constraint.rhs_value - constant
                if constraint.sense is ConstraintSense.LE:
                    AL.append(-np.inf)
                    AU.append(rhs)
                elif constraint.sense is ConstraintSense.GE:
                    AL.append(rhs)
                    AU.append(np.inf)
                else:
                    AL.append(rhs)
                    AU.append(rhs)

            # COO sums duplicate entries on conversion
            A = sparse.coo_matrix((data, (rows, cols)), shape=(m, n)).tocsr()
            AL = np.array(AL)
            AU = np.array(AU)

        return cls(variables, A, AL, AU, l, u, c, integrality,
                   obj_constant=obj_constant, maximize=problem.is_maximize())

    def to_arrays(self):
        """Return ``(A, AL, AU, l, u, c)``"""
        return self.A, self.AL, self.AU, self.l, self.u, self.c

    def objective_value(self, x) -> float:
        """Objective of the original problem (maximization undone) at ``x``"""
        value = float(np.dot(self.c, _ensure_contiguous_float64(x)))
        if self.maximize:
            value = -value
        return value + self.obj_constant

    def __repr__(self):
        return f"<StandardForm m={self.m} n={self.n}>"
