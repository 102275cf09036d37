"""
lpmodeler Python Package

Build linear and mixed-integer programs from Python expressions, simplify
them to a canonical form and write them in LP format or solve them with scipy.
"""

from .errors import (
    LpModelerError, ArenaIndexError, GeneralizationError,
    NonLinearTermError, MissingValueError, SolutionStatusError
)
from .variables import Variable, VariableKind, Binary, Integer, Continuous
from .arena import (
    ExpressionArena, Operator, Literal, VariableRef, Empty, Composite,
    as_expression, add, subtract, multiply, scale, negate
)
from .simplify import simplify
from .constraints import (
    Constraint, ConstraintSense, split_constant_and_expr, generalize,
    le, ge, equal, lp_sum, sum_over
)
from .problem import Problem, Sense, minimize, maximize
from .lp_format import normalize_signs, expression_to_lp, constraint_to_lp, problem_to_lp, write_lp
from .model import StandardForm, linear_terms
from .solution import Solution, Status
from .parameters import SolverParameters
from .solver import ScipySolver, solve

__version__ = "0.1.0"

__all__ = [
    'LpModelerError',
    'ArenaIndexError',
    'GeneralizationError',
    'NonLinearTermError',
    'MissingValueError',
    'SolutionStatusError',
    'Variable',
    'VariableKind',
    'Binary',
    'Integer',
    'Continuous',
    # Expressions
    'ExpressionArena',
    'Operator',
    'Literal',
    'VariableRef',
    'Empty',
    'Composite',
    'as_expression',
    'add',
    'subtract',
    'multiply',
    'scale',
    'negate',
    'simplify',
    # Constraints and problems
    'Constraint',
    'ConstraintSense',
    'split_constant_and_expr',
    'generalize',
    'le',
    'ge',
    'equal',
    'lp_sum',
    'sum_over',
    'Problem',
    'Sense',
    'minimize',
    'maximize',
    # Output
    'normalize_signs',
    'expression_to_lp',
    'constraint_to_lp',
    'problem_to_lp',
    'write_lp',
    'StandardForm',
    'linear_terms',
    # Solving
    'Solution',
    'Status',
    'SolverParameters',
    'ScipySolver',
    'solve',
    '__version__',
]
