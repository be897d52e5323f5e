"""Expression tree nodes and the allocator that hands them out.

Every node is created through a ``NodeAllocator`` and released through it
exactly once, so a caller can check that a failed parse or evaluation did not
leave any part of a tree behind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class LeafKind(Enum):
    INTEGER = "integer"
    SYMBOL = "symbol"


class Operator(Enum):
    """Interior node operators, valued by their printed symbol."""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    ASSIGN = "="
    CONDITIONAL = "?"
    ALTERNATIVE = ":"

    @property
    def symbol(self) -> str:
        return self.value


# --------------------------
# Nodes
# --------------------------

@dataclass(eq=False)
class LeafNode:
    """Integer literal or symbol reference."""
    kind: LeafKind
    token: str
    released: bool = field(default=False, repr=False)

    @property
    def is_symbol(self) -> bool:
        return self.kind is LeafKind.SYMBOL


@dataclass(eq=False)
class InteriorNode:
    """Operator node owning its left and right subtrees.

    For ``CONDITIONAL`` the left child is the condition and the right child is
    an ``ALTERNATIVE`` node holding the true branch (left) and false branch
    (right).
    """
    op: Operator
    token: str
    left: "Node"
    right: "Node"
    released: bool = field(default=False, repr=False)


Node = Union[LeafNode, InteriorNode]


class NodeAllocator:
    """Creates tree nodes and tracks how many are still live."""

    def __init__(self) -> None:
        self.allocated = 0
        self.released = 0

    @property
    def live(self) -> int:
        return self.allocated - self.released

    def make_leaf(self, kind: LeafKind, token: str) -> LeafNode:
        self.allocated += 1
        return LeafNode(kind, token)

    def make_interior(self, op: Operator, token: str, left: Node, right: Node) -> InteriorNode:
        self.allocated += 1
        return InteriorNode(op, token, left, right)

    def release(self, node: Node) -> None:
        """Release a node and, recursively, every node it owns.

        Raises:
            RuntimeError: If any node of the subtree was already released
        """
        if node.released:
            raise RuntimeError(f"node {node.token!r} released twice")
        if isinstance(node, InteriorNode):
            self.release(node.left)
            self.release(node.right)
        node.released = True
        self.released += 1
