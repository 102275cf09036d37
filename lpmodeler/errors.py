"""
Exceptions raised by lpmodeler
"""


class LpModelerError(Exception):
    """Base class for all lpmodeler errors"""


class ArenaIndexError(LpModelerError, IndexError):
    """
    An expression arena was asked for an index it never produced.

    Arena indices only come from the arena itself, so this always points
    to a bug in lpmodeler rather than to bad user input.
    """


class GeneralizationError(LpModelerError, ValueError):
    """The right side of a constraint is not a single constant"""


class NonLinearTermError(LpModelerError, ValueError):
    """A product of variables was found where a linear term is required"""


class MissingValueError(LpModelerError, LookupError):
    """A solution has no value for the requested variable"""


class SolutionStatusError(LpModelerError, RuntimeError):
    """Values were requested from a solution that is not (sub)optimal"""
