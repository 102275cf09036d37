"""
Decision variables for lpmodeler models.

Variables are immutable value objects: two variables of the same kind with
the same name and bounds are interchangeable. Nothing enforces unique names,
so keep names distinct within one problem.

Example
-------
>>> from lpmodeler import Integer, Continuous
>>> a = Integer('a').with_lower_bound(0).with_upper_bound(10)
>>> x = Continuous('x')
>>> expr = 3*a + 2*x - 5  # ExpressionArena
"""

from enum import Enum
from typing import Optional

import numpy as np


class VariableKind(Enum):
    """Kind of a decision variable"""
    BINARY = 'binary'
    INTEGER = 'integer'
    CONTINUOUS = 'continuous'


def _as_bound(value) -> Optional[float]:
    if value is None:
        return None
    if not isinstance(value, (int, float, np.number)):
        raise TypeError(f"Bound must be a number, got {type(value).__name__}")
    return float(value)


class Variable:
    """
    Base class of all decision variables.

    Variables can be combined with arithmetic operators to form expressions
    and compared with ``<=``, ``>=`` (or ``le``, ``ge``, ``equal``) to form
    constraints.

    Parameters
    ----------
    name : str
        Name of the variable, used verbatim in the LP file
    lower_bound : float, optional
        Lower bound (default: None, solver default)
    upper_bound : float, optional
        Upper bound (default: None, solver default)
    """

    kind: VariableKind = None

    __slots__ = ('_name', '_lower_bound', '_upper_bound')

    def __init__(self, name: str, lower_bound: Optional[float] = None,
                 upper_bound: Optional[float] = None):
        if not isinstance(name, str) or not name:
            raise ValueError("Variable name must be a non-empty string")
        self._name = name
        self._lower_bound = _as_bound(lower_bound)
        self._upper_bound = _as_bound(upper_bound)

    @property
    def name(self) -> str:
        return self._name

    @property
    def lower_bound(self) -> Optional[float]:
        return self._lower_bound

    @property
    def upper_bound(self) -> Optional[float]:
        return self._upper_bound

    def with_lower_bound(self, value: float) -> 'Variable':
        """Return a copy of this variable with the given lower bound"""
        return type(self)(self._name, value, self._upper_bound)

    def with_upper_bound(self, value: float) -> 'Variable':
        """Return a copy of this variable with the given upper bound"""
        return type(self)(self._name, self._lower_bound, value)

    def _key(self):
        return (self.kind, self._name, self._lower_bound, self._upper_bound)

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        bounds = []
        if self._lower_bound is not None:
            bounds.append(f"lower_bound={self._lower_bound}")
        if self._upper_bound is not None:
            bounds.append(f"upper_bound={self._upper_bound}")
        extra = ''.join(', ' + b for b in bounds)
        return f"{type(self).__name__}({self._name!r}{extra})"

    def to_expression(self):
        """Wrap this variable in a one-node expression arena"""
        from .arena import as_expression
        return as_expression(self)

    # Arithmetic operations
    def __add__(self, other):
        from .arena import add
        return add(self, other)

    def __radd__(self, other):
        from .arena import add
        return add(other, self)

    def __sub__(self, other):
        from .arena import subtract
        return subtract(self, other)

    def __rsub__(self, other):
        from .arena import subtract
        return subtract(other, self)

    def __mul__(self, other):
        from .arena import multiply
        return multiply(self, other)

    def __rmul__(self, other):
        from .arena import multiply
        return multiply(other, self)

    def __neg__(self):
        from .arena import negate
        return negate(self)

    def __truediv__(self, other):
        if not isinstance(other, (int, float, np.number)):
            raise TypeError("Can only divide variable by scalar")
        return self * (1.0 / float(other))

    # Constraint builders
    def le(self, other):
        from .constraints import le
        return le(self, other)

    def ge(self, other):
        from .constraints import ge
        return ge(self, other)

    def equal(self, other):
        from .constraints import equal
        return equal(self, other)

    def __le__(self, other):
        return self.le(other)

    def __ge__(self, other):
        return self.ge(other)


class Binary(Variable):
    """
    A variable restricted to 0 or 1.

    Binary variables never carry explicit bounds.
    """

    kind = VariableKind.BINARY

    __slots__ = ()

    def __init__(self, name: str):
        super().__init__(name)

    def with_lower_bound(self, value: float) -> 'Variable':
        raise TypeError("Binary variables cannot carry explicit bounds")

    def with_upper_bound(self, value: float) -> 'Variable':
        raise TypeError("Binary variables cannot carry explicit bounds")


class Integer(Variable):
    """An integer variable with optional bounds"""

    kind = VariableKind.INTEGER

    __slots__ = ()


class Continuous(Variable):
    """A real-valued variable with optional bounds"""

    kind = VariableKind.CONTINUOUS

    __slots__ = ()
