"""Render expression trees as infix or postfix text."""

from __future__ import annotations

from typing import List

from .tree import InteriorNode, LeafNode, Node, Operator

# Token used when re-encoding assignments as postfix.
POSTFIX_ASSIGN = "<-"


def to_infix(node: Node) -> str:
    """Fully parenthesized infix form, e.g. ``((x=5)?((x+1):0))``."""
    if isinstance(node, LeafNode):
        return node.token
    if node.op is Operator.CONDITIONAL:
        alternative = node.right
        return (
            f"({to_infix(node.left)}?"
            f"({to_infix(alternative.left)}:{to_infix(alternative.right)}))"
        )
    return f"({to_infix(node.left)}{node.op.symbol}{to_infix(node.right)})"


def to_postfix(node: Node) -> str:
    """Space-separated postfix tokens that rebuild an equivalent tree."""
    parts: List[str] = []
    _emit_postfix(node, parts)
    return " ".join(parts)


def _emit_postfix(node: Node, parts: List[str]) -> None:
    if isinstance(node, LeafNode):
        parts.append(node.token)
        return
    if node.op is Operator.CONDITIONAL:
        alternative = node.right
        _emit_postfix(node.left, parts)
        _emit_postfix(alternative.left, parts)
        _emit_postfix(alternative.right, parts)
        parts.append("?")
        return
    _emit_postfix(node.left, parts)
    _emit_postfix(node.right, parts)
    parts.append(POSTFIX_ASSIGN if node.op is Operator.ASSIGN else node.op.symbol)
