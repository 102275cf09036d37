"""
LP file format writer.

Renders expressions, constraints and whole problems in the CPLEX LP text
format understood by CBC, GLPK, Gurobi and HiGHS:

    \\ knapsack

    Maximize
      obj: 10 a + 20 b

    Subject To
      c1: 500 a + 1200 b + 1500 c <= 10000
      c2: a - b <= 0

    Generals
      a b c

    End
"""

import logging
from typing import List, TYPE_CHECKING

from .arena import ExpressionArena, format_number
from .constraints import Constraint
from .simplify import simplify
from .variables import VariableKind

if TYPE_CHECKING:
    from .problem import Problem

logger = logging.getLogger(__name__)

_SIGN_RULES = (
    ('+ +', '+ '),
    ('- +', '- '),
    ('+ -', '- '),
    ('- -', '+ '),
    ('  ', ' '),
)


def normalize_signs(text: str) -> str:
    """Collapse doubled signs and spaces until the text stops changing"""
    previous = None
    while text != previous:
        previous = text
        for old, new in _SIGN_RULES:
            text = text.replace(old, new)
    return text


def expression_to_lp(expr: ExpressionArena) -> str:
    """Render a simplified copy of ``expr``; the input is left untouched"""
    return normalize_signs(simplify(expr.copy()).show())


def constraint_to_lp(constraint: Constraint) -> str:
    """Render ``<lhs> <op> <rhs>``"""
    return (f"{expression_to_lp(constraint.lhs)} {constraint.sense.value} "
            f"{expression_to_lp(constraint.rhs)}")


def _bound_line(var) -> str:
    lower, upper = var.lower_bound, var.upper_bound
    if lower is not None and upper is not None:
        return f"  {format_number(lower)} <= {var.name} <= {format_number(upper)}"
    if lower is not None:
        return f"  {format_number(lower)} <= {var.name}"
    if upper is not None:
        return f"  {var.name} <= {format_number(upper)}"
    if var.kind is VariableKind.CONTINUOUS:
        return f"  {var.name} free"
    # Integer without bounds: the solver's default range applies
    return ''


def problem_to_lp(problem: 'Problem') -> str:
    """
    Render a complete problem in LP format.

    Sections without entries (objective, constraints, bounds, integer or
    binary variables) are left out, so a problem with no objective yet has
    no ``Maximize``/``Minimize`` block. Sections are separated by one blank
    line.
    """
    sections: List[List[str]] = []

    if problem.objective is not None:
        sections.append(["Maximize" if problem.is_maximize() else "Minimize",
                         f"  obj: {expression_to_lp(problem.objective)}"])

    if problem.constraints:
        sections.append(["Subject To"] + [
            f"  c{k}: {constraint_to_lp(constraint)}"
            for k, constraint in enumerate(problem.constraints, start=1)
        ])

    variables = list(problem.variables().values())

    bounds = [line for line in (_bound_line(var) for var in variables
                                if var.kind is not VariableKind.BINARY) if line]
    if bounds:
        sections.append(["Bounds"] + bounds)

    generals = [var.name for var in variables if var.kind is VariableKind.INTEGER]
    if generals:
        sections.append(["Generals", "  " + " ".join(generals)])

    binaries = [var.name for var in variables if var.kind is VariableKind.BINARY]
    if binaries:
        sections.append(["Binary", "  " + " ".join(binaries)])

    sections.append(["End"])
    body = "\n\n".join("\n".join(section) for section in sections)
    return f"\\ {problem.name}\n\n{body}\n"


def write_lp(problem: 'Problem', path: str):
    """
    Write ``problem`` to ``path`` in LP format (UTF-8).

    I/O errors are not caught.
    """
    text = problem_to_lp(problem)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
    logger.info("Wrote LP model '%s' to %s (%d constraints)",
                problem.name, path, len(problem.constraints))
