"""Tree builder for postfix expressions.

Tokens are pushed onto a stack in source order and consumed from the top, so
the builder sees the postfix line from its last token backwards. Each operator
token therefore builds its operands right to left:

    binary:      right, left
    conditional: false branch, true branch, condition

Grammar (read left to right):
    expr : INTEGER | SYMBOL
         | expr expr BINOP            BINOP is one of + - * / % <-
         | expr expr expr '?'         condition, true branch, false branch
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .errors import ParseError, ParseErrorKind
from .tokenizer import TokenStack, tokenize
from .tree import LeafKind, Node, NodeAllocator, Operator

logger = logging.getLogger(__name__)

ASSIGN_TOKEN = "<-"
CONDITIONAL_TOKEN = "?"
ALTERNATIVE_TOKEN = ":"

# Deepest operator nesting accepted; every tree walk recurses per level.
MAX_DEPTH = 200

BINARY_OPERATORS: Dict[str, Operator] = {
    '+': Operator.ADD,
    '-': Operator.SUB,
    '*': Operator.MUL,
    '/': Operator.DIV,
    '%': Operator.MOD,
    ASSIGN_TOKEN: Operator.ASSIGN,
}


def is_integer_literal(token: str) -> bool:
    """Optional leading '-', then one or more ASCII digits."""
    digits = token[1:] if token.startswith('-') else token
    return bool(digits) and all('0' <= ch <= '9' for ch in digits)


def is_symbol_name(token: str) -> bool:
    """An ASCII letter followed by ASCII letters or digits."""
    if not token or not token[0].isascii() or not token[0].isalpha():
        return False
    return all(ch.isascii() and ch.isalnum() for ch in token[1:])


class _Pending:
    """An operator token waiting for its operands."""

    __slots__ = ('token', 'arity', 'operands')

    def __init__(self, token: str, arity: int):
        self.token = token
        self.arity = arity
        self.operands: List[Node] = []


class TreeBuilder:
    """
    Builds one tree from the top of a token stack.

    An operator token opens a pending entry that collects its operands in
    build order; a completed entry becomes a node and feeds the entry below
    it. Pending entries live on a list, not the call stack, and their count
    is limited by ``max_depth``.
    """

    def __init__(
        self,
        stack: TokenStack,
        allocator: Optional[NodeAllocator] = None,
        max_depth: int = MAX_DEPTH,
    ):
        self.stack = stack
        self.allocator = allocator if allocator is not None else NodeAllocator()
        self.max_depth = max_depth

    def build(self) -> Node:
        """Build one complete subtree, releasing every partial subtree on error."""
        pending: List[_Pending] = []
        try:
            while True:
                if self.stack.empty():
                    raise ParseError(ParseErrorKind.TOO_FEW_TOKENS)

                token = self.stack.pop()
                arity = self._arity(token)
                if arity:
                    if len(pending) >= self.max_depth:
                        raise ParseError(
                            ParseErrorKind.NESTING_TOO_DEEP, f"more than {self.max_depth} levels"
                        )
                    pending.append(_Pending(token, arity))
                    continue

                node = self._make_leaf(token)
                while pending:
                    top = pending[-1]
                    top.operands.append(node)
                    if len(top.operands) < top.arity:
                        break
                    node = self._make_interior(top)
                    pending.pop()
                if not pending:
                    return node
        except Exception:
            for entry in pending:
                for operand in entry.operands:
                    self.allocator.release(operand)
            raise

    @staticmethod
    def _arity(token: str) -> int:
        if token == CONDITIONAL_TOKEN:
            return 3
        if token in BINARY_OPERATORS:
            return 2
        return 0

    def _make_leaf(self, token: str) -> Node:
        if is_integer_literal(token):
            return self.allocator.make_leaf(LeafKind.INTEGER, token)
        if is_symbol_name(token):
            return self.allocator.make_leaf(LeafKind.SYMBOL, token)
        raise ParseError(ParseErrorKind.ILLEGAL_TOKEN, repr(token))

    def _make_interior(self, entry: _Pending) -> Node:
        if entry.token == CONDITIONAL_TOKEN:
            false_branch, true_branch, condition = entry.operands
            alternative = self.allocator.make_interior(
                Operator.ALTERNATIVE, ALTERNATIVE_TOKEN, true_branch, false_branch
            )
            return self.allocator.make_interior(Operator.CONDITIONAL, entry.token, condition, alternative)
        right, left = entry.operands
        return self.allocator.make_interior(BINARY_OPERATORS[entry.token], entry.token, left, right)


def make_parse_tree(
    line: str,
    allocator: Optional[NodeAllocator] = None,
    max_depth: int = MAX_DEPTH,
) -> Node:
    """
    Build the expression tree for one postfix line.

    Args:
        line: Whitespace-separated postfix tokens
        allocator: Allocator owning the nodes; a private one is used if omitted
        max_depth: Deepest operator nesting accepted

    Returns:
        The root node. The caller releases it through the same allocator.

    Raises:
        ParseError: TOO_FEW_TOKENS, TOO_MANY_TOKENS, ILLEGAL_TOKEN or
            NESTING_TOO_DEEP
    """
    tokens = tokenize(line)
    if not tokens:
        raise ParseError(ParseErrorKind.TOO_FEW_TOKENS, "empty expression")

    stack = TokenStack.from_tokens(tokens)
    builder = TreeBuilder(stack, allocator, max_depth)
    try:
        root = builder.build()
        if not stack.empty():
            leftover = len(stack)
            builder.allocator.release(root)
            raise ParseError(ParseErrorKind.TOO_MANY_TOKENS, f"{leftover} unused")
    finally:
        stack.clear()

    logger.debug(f"Built tree for {line!r}")
    return root
