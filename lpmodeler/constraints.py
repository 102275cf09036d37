"""
Constraints and constant extraction.

Every constraint is stored as ``linear expression <sense> constant``,
whatever the user put on either side:

>>> from lpmodeler import Integer
>>> a, b, c = Integer('a'), Integer('b'), Integer('c')
>>> (2*a + b + 20).ge(c).to_lp_format()
'2 a + b - c >= -20'
"""

from enum import Enum
from typing import Callable, Iterable, Tuple, TypeVar

from .arena import ExpressionArena, ExpressionLike, Literal, Composite, ADD, SUBTRACT, as_expression
from .errors import GeneralizationError
from .simplify import simplify

T = TypeVar('T')


class ConstraintSense(Enum):
    """Relational operator of a constraint, valued by its LP token"""
    LE = '<='
    GE = '>='
    EQ = '='


def split_constant_and_expr(expr: ExpressionArena) -> Tuple[float, ExpressionArena]:
    """
    Split one trailing constant off a simplified expression.

    Returns ``(c, left)`` for ``left + c``, ``(-c, left)`` for ``left - c``
    and ``(0.0, expr)`` for any other shape. Only the root is inspected.

    Parameters
    ----------
    expr : ExpressionArena
        A simplified expression

    Returns
    -------
    tuple of (float, ExpressionArena)
        The constant and the remaining expression. The remainder is a new
        arena with the same nodes and its root moved to the left operand.
    """
    node = expr.root_node()
    if isinstance(node, Composite) and node.operator in (ADD, SUBTRACT):
        right = expr.get(node.right)
        if isinstance(right, Literal):
            remainder = expr.copy()
            remainder.set_root(node.left)
            if node.operator is ADD:
                return right.value, remainder
            return -right.value, remainder
    return 0.0, expr


class Constraint:
    """
    A linear constraint ``lhs <sense> rhs``.

    Constraints built with :func:`generalize` (and so with ``le``, ``ge``,
    ``equal`` or the ``<=``/``>=`` operators) always have a single literal on
    the right side.

    Parameters
    ----------
    lhs : ExpressionArena
        Left side
    sense : ConstraintSense
        Relational operator
    rhs : ExpressionArena
        Right side
    """

    def __init__(self, lhs: ExpressionArena, sense: ConstraintSense, rhs: ExpressionArena):
        if not isinstance(sense, ConstraintSense):
            raise TypeError(f"sense must be a ConstraintSense, got {type(sense).__name__}")
        self.lhs = lhs
        self.sense = sense
        self.rhs = rhs

    @property
    def rhs_value(self) -> float:
        """Constant right side; raises GeneralizationError if it is not a literal"""
        node = self.rhs.root_node()
        if not isinstance(node, Literal):
            raise GeneralizationError(
                f"Right side of constraint is not a constant: {self.rhs.show()}"
            )
        return node.value

    def to_lp_format(self) -> str:
        from .lp_format import constraint_to_lp
        return constraint_to_lp(self)

    def __eq__(self, other):
        if not isinstance(other, Constraint):
            return NotImplemented
        return (self.sense is other.sense
                and self.lhs.structurally_equal(other.lhs)
                and self.rhs.structurally_equal(other.rhs))

    __hash__ = None

    def __bool__(self):
        # `1 <= x <= 5` would otherwise keep only `x <= 5`
        raise TypeError("Chained comparisons are not supported; "
                        "add the two constraints separately")

    def __repr__(self):
        return f"Constraint({self.lhs.show()!r} {self.sense.value} {self.rhs.show()!r})"


def generalize(lhs: ExpressionLike, sense: ConstraintSense, rhs: ExpressionLike) -> Constraint:
    """
    Reduce ``lhs <sense> rhs`` to ``expr <sense> constant``.

    Computes ``simplify(lhs - rhs)``, splits off its trailing constant ``c``
    and returns ``Constraint(remainder, sense, -c)``. The sense is kept as
    given.
    """
    difference = as_expression(lhs).merge(as_expression(rhs), SUBTRACT)
    simplify(difference)
    constant, remainder = split_constant_and_expr(difference)
    return Constraint(remainder, sense, ExpressionArena([Literal(-constant)]))


def le(lhs: ExpressionLike, rhs: ExpressionLike) -> Constraint:
    """``lhs <= rhs``"""
    return generalize(lhs, ConstraintSense.LE, rhs)


def ge(lhs: ExpressionLike, rhs: ExpressionLike) -> Constraint:
    """``lhs >= rhs``"""
    return generalize(lhs, ConstraintSense.GE, rhs)


def equal(lhs: ExpressionLike, rhs: ExpressionLike) -> Constraint:
    """``lhs = rhs``"""
    return generalize(lhs, ConstraintSense.EQ, rhs)


def lp_sum(items: Iterable[ExpressionLike]) -> ExpressionArena:
    """
    Sum expressions left to right.

    Raises
    ------
    ValueError
        If ``items`` is empty
    """
    total = None
    for item in items:
        expr = as_expression(item)
        total = expr if total is None else total.merge(expr, ADD)
    if total is None:
        raise ValueError("Cannot sum an empty sequence of expressions")
    return total


def sum_over(items: Iterable[T], fn: Callable[[T], ExpressionLike]) -> ExpressionArena:
    """Sum ``fn(item)`` over ``items``"""
    return lp_sum(fn(item) for item in items)
