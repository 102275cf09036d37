"""
Expression arena for lpmodeler.

An expression is stored as an append-only list of nodes addressed by integer
index. Composite nodes reference their operands by index into the same
arena, so the arena owns every node and rewriting a node is a targeted
replace at one index. Nodes are immutable and may be shared freely between
arenas.

Example
-------
>>> from lpmodeler import Integer
>>> a = Integer('a')
>>> b = Integer('b')
>>> expr = a + b
>>> expr.nodes
(VariableRef(Integer('a')), VariableRef(Integer('b')), Composite(ADD, 0, 1))
>>> expr.root
2
"""

import math
from enum import Enum
from typing import Dict, List, Optional, Union, Any

import numpy as np

from .errors import ArenaIndexError, MissingValueError
from .variables import Variable, VariableKind, Binary, Integer, Continuous


class Operator(Enum):
    """Binary operator of a composite node"""
    ADD = 'add'
    SUBTRACT = 'subtract'
    MULTIPLY = 'multiply'


ADD = Operator.ADD
SUBTRACT = Operator.SUBTRACT
MULTIPLY = Operator.MULTIPLY


def format_number(value: float) -> str:
    """Format a literal the way it appears in LP files (``10.0`` -> ``10``)"""
    value = float(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


class Node:
    """Base class of arena nodes"""

    __slots__ = ()

    def shifted(self, offset: int) -> 'Node':
        """Return this node with its operand indices moved by ``offset``"""
        return self


class Literal(Node):
    """A numeric constant"""

    __slots__ = ('value',)

    def __init__(self, value: float):
        object.__setattr__(self, 'value', float(value))

    def __setattr__(self, key, value):
        raise AttributeError("Arena nodes are immutable")

    def __eq__(self, other):
        return isinstance(other, Literal) and self.value == other.value

    def __hash__(self):
        return hash(('literal', self.value))

    def __repr__(self):
        return f"Literal({self.value!r})"


class VariableRef(Node):
    """A reference to a decision variable"""

    __slots__ = ('variable',)

    def __init__(self, variable: Variable):
        object.__setattr__(self, 'variable', variable)

    def __setattr__(self, key, value):
        raise AttributeError("Arena nodes are immutable")

    def __eq__(self, other):
        return isinstance(other, VariableRef) and self.variable == other.variable

    def __hash__(self):
        return hash(('variable', self.variable))

    def __repr__(self):
        return f"VariableRef({self.variable!r})"


class Empty(Node):
    """Placeholder node, never part of a finished expression"""

    __slots__ = ()

    def __eq__(self, other):
        return isinstance(other, Empty)

    def __hash__(self):
        return hash('empty')

    def __repr__(self):
        return "Empty()"


class Composite(Node):
    """``left <operator> right``, operands given as arena indices"""

    __slots__ = ('operator', 'left', 'right')

    def __init__(self, operator: Operator, left: int, right: int):
        object.__setattr__(self, 'operator', operator)
        object.__setattr__(self, 'left', left)
        object.__setattr__(self, 'right', right)

    def __setattr__(self, key, value):
        raise AttributeError("Arena nodes are immutable")

    def shifted(self, offset: int) -> 'Composite':
        return Composite(self.operator, self.left + offset, self.right + offset)

    def __eq__(self, other):
        return (isinstance(other, Composite)
                and self.operator is other.operator
                and self.left == other.left
                and self.right == other.right)

    def __hash__(self):
        return hash((self.operator, self.left, self.right))

    def __repr__(self):
        return f"Composite({self.operator.name}, {self.left}, {self.right})"


class ExpressionArena:
    """
    Append-only store of expression nodes with a root index.

    Parameters
    ----------
    nodes : list of Node, optional
        Initial nodes (default: empty)
    root : int, optional
        Index of the root node (default: 0)

    Notes
    -----
    Arenas support ``+``, ``-``, ``*``, ``/`` (by scalar) and unary ``-``,
    each returning a new arena. ``<=`` and ``>=`` return generalized
    constraints; use :meth:`equal` for equality constraints since ``==``
    compares arenas.
    """

    def __init__(self, nodes: Optional[List[Node]] = None, root: int = 0):
        self._nodes: List[Node] = list(nodes) if nodes else []
        self._root = root

    @property
    def root(self) -> int:
        """Index of the root node"""
        return self._root

    @property
    def nodes(self) -> tuple:
        """Read-only view of all nodes"""
        return tuple(self._nodes)

    def __len__(self):
        return len(self._nodes)

    def _check(self, index: int):
        if not 0 <= index < len(self._nodes):
            raise ArenaIndexError(
                f"Index {index} out of range for arena of {len(self._nodes)} nodes"
            )

    def add(self, node: Node) -> int:
        """Append a node and return its index"""
        self._nodes.append(node)
        return len(self._nodes) - 1

    def get(self, index: int) -> Node:
        """Return the node at ``index``"""
        self._check(index)
        return self._nodes[index]

    def replace(self, index: int, node: Node):
        """Overwrite the node at ``index``"""
        self._check(index)
        self._nodes[index] = node

    def set_root(self, index: int):
        self._check(index)
        self._root = index

    def root_node(self) -> Node:
        return self.get(self._root)

    def copy(self) -> 'ExpressionArena':
        return ExpressionArena(self._nodes, self._root)

    def clone_node(self, index: int) -> int:
        """Append a shallow copy of the node at ``index``"""
        return self.add(self.get(index))

    def clone_subtree(self, index: int) -> int:
        """Append a deep copy of the subtree at ``index`` and return its root"""
        new_root = self.clone_node(index)
        stack = [new_root]
        while stack:
            current = stack.pop()
            node = self._nodes[current]
            if isinstance(node, Composite):
                left = self.clone_node(node.left)
                right = self.clone_node(node.right)
                self._nodes[current] = Composite(node.operator, left, right)
                stack.append(left)
                stack.append(right)
        return new_root

    def merge(self, other: 'ExpressionArena', operator: Operator) -> 'ExpressionArena':
        """
        Combine two arenas under a new root ``self.root <operator> other.root``.

        Neither arena is modified; the nodes of ``other`` are appended after
        those of ``self`` with their indices shifted.
        """
        offset = len(self._nodes)
        nodes = self._nodes + [node.shifted(offset) for node in other._nodes]
        merged = ExpressionArena(nodes, self._root)
        merged._root = merged.add(Composite(operator, self._root, other._root + offset))
        return merged

    def show(self, index: Optional[int] = None, with_parenthesis: bool = False) -> str:
        """
        Render the subtree at ``index`` (default: root) as text.

        A literal ``1`` coefficient is omitted and ``-1`` becomes a bare
        ``-``. With ``with_parenthesis`` every composite is wrapped in
        parentheses and products are written with ``*``.
        """
        if index is None:
            index = self._root
        open_paren = '(' if with_parenthesis else ''
        close_paren = ')' if with_parenthesis else ''
        mul_sep = ' * ' if with_parenthesis else ' '

        # Items are either strings to emit or indices still to expand
        remaining: List[Union[str, int]] = [index]
        parts = []
        while remaining:
            item = remaining.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            node = self.get(item)
            if isinstance(node, Literal):
                parts.append(format_number(node.value))
            elif isinstance(node, VariableRef):
                parts.append(node.variable.name)
            elif isinstance(node, Empty):
                parts.append('')
            elif node.operator is MULTIPLY:
                left = self.get(node.left)
                if isinstance(left, Literal) and left.value == 1.0:
                    remaining.extend([close_paren, node.right, open_paren])
                elif isinstance(left, Literal) and left.value == -1.0:
                    remaining.extend([close_paren, node.right, '-', open_paren])
                else:
                    remaining.extend([close_paren, node.right, mul_sep, node.left, open_paren])
            else:
                sep = ' + ' if node.operator is ADD else ' - '
                remaining.extend([close_paren, node.right, sep, node.left, open_paren])
        return ''.join(parts)

    def evaluate(self, values: Dict[str, float]) -> float:
        """
        Evaluate the expression with variable values taken from ``values``.

        Raises
        ------
        MissingValueError
            If a variable of the expression has no value
        """
        results: Dict[int, float] = {}
        stack = [(self._root, False)]
        while stack:
            index, expanded = stack.pop()
            node = self.get(index)
            if isinstance(node, Composite):
                if not expanded:
                    stack.append((index, True))
                    stack.append((node.left, False))
                    stack.append((node.right, False))
                    continue
                left = results[node.left]
                right = results[node.right]
                if node.operator is ADD:
                    results[index] = left + right
                elif node.operator is SUBTRACT:
                    results[index] = left - right
                else:
                    results[index] = left * right
            elif isinstance(node, Literal):
                results[index] = node.value
            elif isinstance(node, VariableRef):
                name = node.variable.name
                if name not in values:
                    raise MissingValueError(f"No value for variable '{name}'")
                results[index] = float(values[name])
            else:
                results[index] = 0.0
        return results[self._root]

    def variables(self) -> List[Variable]:
        """Variables of the expression, left to right, repeats included"""
        found = []
        stack = [self._root]
        while stack:
            node = self.get(stack.pop())
            if isinstance(node, VariableRef):
                found.append(node.variable)
            elif isinstance(node, Composite):
                stack.append(node.right)
                stack.append(node.left)
        return found

    def structurally_equal(self, other: 'ExpressionArena') -> bool:
        """Compare the trees under both roots, ignoring node layout"""
        pairs = [(self._root, other._root)]
        while pairs:
            i, j = pairs.pop()
            mine, theirs = self.get(i), other.get(j)
            if isinstance(mine, Composite) and isinstance(theirs, Composite):
                if mine.operator is not theirs.operator:
                    return False
                pairs.append((mine.left, theirs.left))
                pairs.append((mine.right, theirs.right))
            elif mine != theirs:
                return False
        return True

    def __eq__(self, other):
        if not isinstance(other, ExpressionArena):
            return NotImplemented
        return self._root == other._root and self._nodes == other._nodes

    __hash__ = None

    def __repr__(self):
        return f"ExpressionArena(root={self._root}, nodes={self._nodes!r})"

    def __str__(self):
        return self.show()

    # Serialization
    def to_dict(self) -> Dict[str, Any]:
        """Convert the arena to a JSON-compatible dictionary"""
        nodes = []
        for node in self._nodes:
            if isinstance(node, Literal):
                nodes.append({'type': 'literal', 'value': node.value})
            elif isinstance(node, VariableRef):
                var = node.variable
                nodes.append({
                    'type': 'variable',
                    'kind': var.kind.value,
                    'name': var.name,
                    'lower_bound': var.lower_bound,
                    'upper_bound': var.upper_bound,
                })
            elif isinstance(node, Composite):
                nodes.append({
                    'type': 'composite',
                    'operator': node.operator.value,
                    'left': node.left,
                    'right': node.right,
                })
            else:
                nodes.append({'type': 'empty'})
        return {'root': self._root, 'nodes': nodes}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'ExpressionArena':
        """Create an arena from a dictionary produced by :meth:`to_dict`"""
        nodes: List[Node] = []
        for entry in d['nodes']:
            node_type = entry.get('type')
            if node_type == 'literal':
                nodes.append(Literal(entry['value']))
            elif node_type == 'variable':
                kind = VariableKind(entry['kind'])
                if kind is VariableKind.BINARY:
                    var = Binary(entry['name'])
                elif kind is VariableKind.INTEGER:
                    var = Integer(entry['name'], entry.get('lower_bound'), entry.get('upper_bound'))
                else:
                    var = Continuous(entry['name'], entry.get('lower_bound'), entry.get('upper_bound'))
                nodes.append(VariableRef(var))
            elif node_type == 'composite':
                nodes.append(Composite(Operator(entry['operator']),
                                       int(entry['left']), int(entry['right'])))
            elif node_type == 'empty':
                nodes.append(Empty())
            else:
                raise ValueError(f"Unknown node type: {node_type!r}")

        root = int(d['root'])
        if not 0 <= root < len(nodes):
            raise ValueError(f"Root index {root} out of range")
        for node in nodes:
            if isinstance(node, Composite):
                for index in (node.left, node.right):
                    if not 0 <= index < len(nodes):
                        raise ValueError(f"Operand index {index} out of range")
        return cls(nodes, root)

    # Delegating helpers
    def simplify(self) -> 'ExpressionArena':
        """Canonicalize this arena in place (see :func:`lpmodeler.simplify.simplify`)"""
        from .simplify import simplify
        return simplify(self)

    def to_lp_format(self) -> str:
        from .lp_format import expression_to_lp
        return expression_to_lp(self)

    # Arithmetic operations
    def __add__(self, other):
        return add(self, other)

    def __radd__(self, other):
        return add(other, self)

    def __sub__(self, other):
        return subtract(self, other)

    def __rsub__(self, other):
        return subtract(other, self)

    def __mul__(self, other):
        return multiply(self, other)

    def __rmul__(self, other):
        return multiply(other, self)

    def __neg__(self):
        return negate(self)

    def __truediv__(self, other):
        if not isinstance(other, (int, float, np.number)):
            raise TypeError("Can only divide expression by scalar")
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


ExpressionLike = Union[ExpressionArena, Variable, int, float, np.number]


def as_expression(value: ExpressionLike) -> ExpressionArena:
    """
    Convert a number, a variable or an arena into an arena.

    Arenas are copied, so the result can be modified freely.
    """
    if isinstance(value, ExpressionArena):
        return value.copy()
    if isinstance(value, Variable):
        return ExpressionArena([VariableRef(value)])
    if isinstance(value, (bool, np.bool_)):
        raise TypeError("Booleans cannot be used in expressions")
    if isinstance(value, (int, float, np.number)):
        return ExpressionArena([Literal(float(value))])
    raise TypeError(
        f"Cannot build an expression from {type(value).__name__}; "
        "expected a number, a Variable or an ExpressionArena"
    )


def _combine(lhs: ExpressionLike, rhs: ExpressionLike, operator: Operator) -> ExpressionArena:
    return as_expression(lhs).merge(as_expression(rhs), operator)


def add(lhs: ExpressionLike, rhs: ExpressionLike) -> ExpressionArena:
    """``lhs + rhs``"""
    return _combine(lhs, rhs, ADD)


def subtract(lhs: ExpressionLike, rhs: ExpressionLike) -> ExpressionArena:
    """``lhs - rhs``"""
    return _combine(lhs, rhs, SUBTRACT)


def multiply(lhs: ExpressionLike, rhs: ExpressionLike) -> ExpressionArena:
    """``lhs * rhs``; products of variables are kept and rejected later"""
    return _combine(lhs, rhs, MULTIPLY)


def scale(coefficient: float, expr: ExpressionLike) -> ExpressionArena:
    """``coefficient * expr``"""
    if not isinstance(coefficient, (int, float, np.number)):
        raise TypeError("Coefficient must be a scalar")
    return _combine(coefficient, expr, MULTIPLY)


def negate(expr: ExpressionLike) -> ExpressionArena:
    """``-expr``, stored as ``-1 * expr``"""
    return _combine(-1.0, expr, MULTIPLY)
