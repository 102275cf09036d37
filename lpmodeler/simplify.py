"""
Term-rewriting simplifier for expression arenas.

The simplifier rewrites the tree under ``arena.root`` in place until a full
pass leaves its parenthesized rendering unchanged. Each pass walks the tree
depth-first with an explicit stack of indices. A rule that rewrites a node
pushes the rewritten index (or the child it names) back on the stack, so
every rule fires to exhaustion at a position before its children are visited.

Canonical form:
    - literal coefficients on the left of products (``c * x``)
    - one trailing additive constant (``... + c`` or ``... - c``)
    - variables in order of first occurrence

Like terms are only combined when they appear directly as ``x + x`` or
``x - x``. Products of variables are kept as they are.
"""

import logging

from .arena import (
    ExpressionArena,
    Node,
    Literal,
    Composite,
    ADD,
    SUBTRACT,
    MULTIPLY,
)

logger = logging.getLogger(__name__)


def _is_literal(node: Node) -> bool:
    return isinstance(node, Literal)


def _is_zero(node: Node) -> bool:
    return isinstance(node, Literal) and node.value == 0.0


def _is_composite(node: Node, operator=None) -> bool:
    if not isinstance(node, Composite):
        return False
    return operator is None or node.operator is operator


class Simplifier:
    """
    Fixed-point rewriter bound to a single arena.

    Parameters
    ----------
    arena : ExpressionArena
        Arena to rewrite in place
    """

    def __init__(self, arena: ExpressionArena):
        self.arena = arena
        self.passes = 0

    def run(self) -> ExpressionArena:
        arena = self.arena
        root = arena.root
        size_before = len(arena)

        snapshot = arena.show(root, True)
        while True:
            self._run_pass(root)
            self.passes += 1
            current = arena.show(root, True)
            if current == snapshot:
                break
            snapshot = current

        logger.debug(
            "Simplified expression in %d pass(es), arena grew from %d to %d nodes",
            self.passes, size_before, len(arena)
        )
        return arena

    def _run_pass(self, root: int):
        stack = [root]
        while stack:
            index = stack.pop()
            node = self.arena.get(index)
            if not isinstance(node, Composite):
                continue
            if node.operator is MULTIPLY:
                self._multiply(index, node, stack)
            elif node.operator is ADD:
                self._add(index, node, stack)
            else:
                self._subtract(index, node, stack)

    def _copy_operand(self, index: int) -> int:
        """Deep copy of a composite operand, shallow copy of an atomic one"""
        if _is_composite(self.arena.get(index)):
            return self.arena.clone_subtree(index)
        return self.arena.clone_node(index)

    def _multiply(self, h: int, node: Composite, stack: list):
        arena = self.arena
        l, r = node.left, node.right
        left, right = arena.get(l), arena.get(r)

        # 0 * x = 0, x * 0 = 0
        if _is_zero(left) or _is_zero(right):
            arena.replace(h, Literal(0.0))
            return

        # c1 * c2
        if _is_literal(left) and _is_literal(right):
            arena.replace(h, Literal(left.value * right.value))
            return

        # i*(a+b) = i*a + i*b
        if _is_composite(right, ADD):
            i_new = self._copy_operand(l)
            new_left = arena.add(Composite(MULTIPLY, l, right.left))
            arena.replace(r, Composite(MULTIPLY, i_new, right.right))
            arena.replace(h, Composite(ADD, new_left, r))
            stack.append(h)
            return

        # (a+b)*i = i*a + i*b
        if _is_composite(left, ADD):
            i_new = self._copy_operand(r)
            new_right = arena.add(Composite(MULTIPLY, r, left.right))
            arena.replace(l, Composite(MULTIPLY, i_new, left.left))
            arena.replace(h, Composite(ADD, l, new_right))
            stack.append(h)
            return

        # (a-b)*i = i*a - i*b
        if _is_composite(left, SUBTRACT):
            i_new = self._copy_operand(r)
            new_right = arena.add(Composite(MULTIPLY, r, left.right))
            arena.replace(l, Composite(MULTIPLY, i_new, left.left))
            arena.replace(h, Composite(SUBTRACT, l, new_right))
            stack.append(h)
            return

        # i*(a-b) = i*a - i*b
        if _is_composite(right, SUBTRACT):
            i_new = self._copy_operand(l)
            new_left = arena.add(Composite(MULTIPLY, l, right.left))
            arena.replace(r, Composite(MULTIPLY, i_new, right.right))
            arena.replace(h, Composite(SUBTRACT, new_left, r))
            stack.append(h)
            return

        if _is_literal(left) and _is_composite(right, MULTIPLY):
            a, b = right.left, right.right
            a_node, b_node = arena.get(a), arena.get(b)
            if _is_literal(a_node):
                # c1*(c2*b) = (c1*c2)*b
                arena.replace(l, Literal(left.value * a_node.value))
                arena.replace(h, Composite(MULTIPLY, l, b))
            elif _is_literal(b_node):
                # c1*(a*c2) = (c1*c2)*a
                arena.replace(l, Literal(left.value * b_node.value))
                arena.replace(h, Composite(MULTIPLY, l, a))
            else:
                # c1*(a*b) = (c1*a)*b
                lit = arena.add(Literal(left.value))
                arena.replace(l, Composite(MULTIPLY, lit, a))
                arena.replace(h, Composite(MULTIPLY, l, b))
            stack.append(h)
            return

        # x*(a*b) = (x*a)*b
        if _is_composite(right, MULTIPLY):
            left_new = arena.clone_node(l)
            arena.replace(l, Composite(MULTIPLY, left_new, right.left))
            arena.replace(r, arena.get(right.right))
            stack.append(h)
            return

        # x*c = c*x
        if _is_literal(right):
            arena.replace(h, Composite(MULTIPLY, r, l))
            stack.append(h)
            return

        if _is_literal(left):
            return

        if _is_composite(left):
            stack.append(l)

    def _add(self, h: int, node: Composite, stack: list):
        arena = self.arena
        l, r = node.left, node.right
        left, right = arena.get(l), arena.get(r)

        # 0 + x = x, x + 0 = x
        if _is_zero(left):
            arena.replace(h, right)
            stack.append(h)
            return
        if _is_zero(right):
            arena.replace(h, left)
            stack.append(h)
            return

        if _is_literal(left) and _is_literal(right):
            arena.replace(h, Literal(left.value + right.value))
            return

        # c + x = x + c
        if _is_literal(left):
            arena.replace(h, Composite(ADD, r, l))
            stack.append(r)
            return

        # a + (b+c) = (a+b)+c
        if _is_composite(right, ADD):
            new_a = arena.add(left)
            arena.replace(l, Composite(ADD, new_a, right.left))
            arena.replace(r, arena.get(right.right))
            stack.append(h)
            return

        # a + (b-c) = (a+b)-c
        if _is_composite(right, SUBTRACT):
            new_a = arena.add(left)
            arena.replace(l, Composite(ADD, new_a, right.left))
            arena.replace(r, arena.get(right.right))
            arena.replace(h, Composite(SUBTRACT, l, r))
            stack.append(h)
            return

        if _is_composite(left, ADD) and _is_literal(right):
            b_node = arena.get(left.right)
            if _is_literal(b_node):
                # (a+c1)+c2 = a+(c1+c2)
                arena.replace(l, arena.get(left.left))
                arena.replace(r, Literal(b_node.value + right.value))
                stack.append(h)
            else:
                stack.append(l)
            return

        if _is_composite(left, SUBTRACT) and _is_literal(right):
            a, b = left.left, left.right
            a_node, b_node = arena.get(a), arena.get(b)
            if _is_literal(b_node):
                # (a-c1)+c2 = a+(c2-c1)
                arena.replace(r, Literal(right.value - b_node.value))
                arena.replace(h, Composite(ADD, a, r))
                stack.append(a)
            elif _is_literal(a_node):
                # (c1-b)+c2 = -b+(c1+c2)
                lit = arena.add(Literal(-1.0))
                arena.replace(l, Composite(MULTIPLY, lit, b))
                arena.replace(r, Literal(a_node.value + right.value))
                stack.append(h)
            else:
                stack.append(l)
            return

        if _is_composite(left, ADD):
            a, b = left.left, left.right
            if _is_literal(arena.get(b)):
                # (a+c1)+x = (a+x)+c1
                arena.replace(l, Composite(ADD, a, r))
                arena.replace(h, Composite(ADD, l, b))
                stack.append(l)
            else:
                stack.append(r)
                stack.append(l)
            return

        if _is_composite(left, SUBTRACT):
            a, b = left.left, left.right
            if _is_literal(arena.get(b)):
                # (a-c1)+x = (a+x)-c1
                arena.replace(l, Composite(ADD, a, r))
                arena.replace(h, Composite(SUBTRACT, l, b))
                stack.append(l)
            elif _is_literal(arena.get(a)):
                # (c1-b)+x = (x-b)+c1
                arena.replace(l, Composite(SUBTRACT, r, b))
                arena.replace(h, Composite(ADD, l, a))
                stack.append(l)
            else:
                stack.append(l)
                stack.append(r)
            return

        # x + x = 2*x
        if left == right:
            lit = arena.add(Literal(2.0))
            arena.replace(h, Composite(MULTIPLY, lit, l))
            stack.append(l)
            return

        self._descend(l, left, r, right, stack)

    def _subtract(self, h: int, node: Composite, stack: list):
        arena = self.arena
        l, r = node.left, node.right
        left, right = arena.get(l), arena.get(r)

        # x - 0 = x
        if _is_zero(right):
            arena.replace(h, left)
            stack.append(h)
            return

        if _is_literal(left) and _is_literal(right):
            arena.replace(h, Literal(left.value - right.value))
            return

        # a - (b+c) = (a-b)-c
        if _is_composite(right, ADD):
            a_new = arena.clone_node(l)
            arena.replace(l, Composite(SUBTRACT, a_new, right.left))
            arena.replace(h, Composite(SUBTRACT, l, right.right))
            stack.append(h)
            return

        # a - (b-c) = (a-b)+c
        if _is_composite(right, SUBTRACT):
            a_new = arena.clone_node(l)
            arena.replace(l, Composite(SUBTRACT, a_new, right.left))
            arena.replace(h, Composite(ADD, l, right.right))
            stack.append(h)
            return

        # c - x = -x + c
        if _is_literal(left):
            lit = arena.add(Literal(-1.0))
            negated = arena.add(Composite(MULTIPLY, lit, r))
            arena.replace(h, Composite(ADD, negated, l))
            stack.append(h)
            return

        if _is_composite(left, SUBTRACT) and _is_literal(right):
            a, b = left.left, left.right
            a_node, b_node = arena.get(a), arena.get(b)
            if _is_literal(b_node):
                # (a-c1)-c2 = a-(c1+c2)
                arena.replace(l, a_node)
                arena.replace(r, Literal(b_node.value + right.value))
                stack.append(h)
            elif _is_literal(a_node):
                # (c1-b)-c2 = -b+(c1-c2)
                lit = arena.add(Literal(-1.0))
                arena.replace(l, Composite(MULTIPLY, lit, b))
                arena.replace(r, Literal(a_node.value - right.value))
                arena.replace(h, Composite(ADD, l, r))
                stack.append(h)
            else:
                stack.append(l)
            return

        if _is_composite(left, ADD) and _is_literal(right):
            c1_node = arena.get(left.right)
            if _is_literal(c1_node):
                # (a+c1)-c2 = a+(c1-c2)
                arena.replace(r, Literal(c1_node.value - right.value))
                arena.replace(h, Composite(ADD, left.left, r))
                stack.append(h)
            else:
                stack.append(l)
            return

        if _is_composite(left, ADD):
            a, b = left.left, left.right
            if _is_literal(arena.get(b)):
                # (a+c1)-x = (a-x)+c1
                arena.replace(l, Composite(SUBTRACT, a, r))
                arena.replace(h, Composite(ADD, l, b))
                stack.append(h)
            else:
                stack.append(l)
                stack.append(r)
            return

        if _is_composite(left, SUBTRACT):
            a, b = left.left, left.right
            if _is_literal(arena.get(b)):
                # (a-c1)-x = (a-x)-c1
                arena.replace(l, Composite(SUBTRACT, a, r))
                arena.replace(h, Composite(SUBTRACT, l, b))
                stack.append(l)
            elif _is_literal(arena.get(a)):
                # (c1-b)-x = (-b-x)+c1
                minus_one = arena.add(Literal(-1.0))
                minus_b = arena.add(Composite(MULTIPLY, minus_one, b))
                arena.replace(l, Composite(SUBTRACT, minus_b, r))
                arena.replace(h, Composite(ADD, l, a))
                stack.append(l)
            else:
                stack.append(r)
                stack.append(l)
            return

        # x - x = 0
        if left == right:
            arena.replace(h, Literal(0.0))
            return

        self._descend(l, left, r, right, stack)

    @staticmethod
    def _descend(l: int, left: Node, r: int, right: Node, stack: list):
        if _is_composite(left):
            stack.append(l)
        if _is_composite(right):
            stack.append(r)


def simplify(arena: ExpressionArena) -> ExpressionArena:
    """
    Canonicalize ``arena`` in place and return it.

    The root index is left unchanged; rewritten nodes are written by index
    and new nodes are appended, so the arena may grow.

    Parameters
    ----------
    arena : ExpressionArena
        Arena to simplify

    Returns
    -------
    ExpressionArena
        The same arena object
    """
    return Simplifier(arena).run()
