"""Evaluator for expression trees.

Evaluation errors are raised as EvalError and propagate unchanged, with one
exception: an undefined symbol on the right-hand side of an assignment
evaluates to 0 and the assignment goes ahead.

Values are Python integers bounded to MAX_VALUE_BITS so that every result can
still be printed in decimal.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .errors import EvalError, EvalErrorKind, SymbolTableFullError
from .symtab import SymbolTable
from .tree import InteriorNode, LeafKind, LeafNode, Node, Operator

logger = logging.getLogger(__name__)

# Both limits stay under the interpreter's 4300 digit int/str conversion cap.
MAX_LITERAL_DIGITS = 4000
MAX_VALUE_BITS = 14000


def _trunc_div(left: int, right: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _trunc_mod(left: int, right: int) -> int:
    """Remainder of _trunc_div; takes the sign of the dividend."""
    return left - right * _trunc_div(left, right)


def _in_range(value: int) -> int:
    if value.bit_length() > MAX_VALUE_BITS:
        raise EvalError(EvalErrorKind.VALUE_OUT_OF_RANGE, f"more than {MAX_VALUE_BITS} bits")
    return value


class Evaluator:
    """Evaluates expression trees against a symbol table."""

    def __init__(self, symbols: SymbolTable):
        self.symbols = symbols

    def eval(self, node: Node) -> int:
        """Evaluate node and return its integer value or raise EvalError."""
        if isinstance(node, LeafNode):
            return self._eval_leaf(node)
        if isinstance(node, InteriorNode):
            if node.op is Operator.ASSIGN:
                return self._eval_assign(node)
            if node.op is Operator.CONDITIONAL:
                return self._eval_conditional(node)
            return self._eval_arithmetic(node)
        raise EvalError(EvalErrorKind.UNKNOWN_OPERATION, type(node).__name__)

    def _eval_leaf(self, node: LeafNode) -> int:
        if node.kind is LeafKind.INTEGER:
            if len(node.token.lstrip('-')) > MAX_LITERAL_DIGITS:
                raise EvalError(
                    EvalErrorKind.VALUE_OUT_OF_RANGE, f"literal longer than {MAX_LITERAL_DIGITS} digits"
                )
            return int(node.token)
        value = self.symbols.lookup(node.token)
        if value is None:
            raise EvalError(EvalErrorKind.UNDEFINED_SYMBOL, node.token)
        return _in_range(value)

    def _eval_assign(self, node: InteriorNode) -> int:
        target = node.left
        if not (isinstance(target, LeafNode) and target.is_symbol):
            raise EvalError(EvalErrorKind.INVALID_LVALUE, "assignment target must be a symbol")

        try:
            value = self.eval(node.right)
        except EvalError as e:
            if e.kind is not EvalErrorKind.UNDEFINED_SYMBOL:
                raise
            logger.debug(f"Undefined {e.detail} on right of assignment to {target.token}; using 0")
            value = 0

        try:
            return self.symbols.create_or_update(target.token, value)
        except SymbolTableFullError as e:
            raise EvalError(EvalErrorKind.SYMBOL_TABLE_FULL, str(e))

    def _eval_conditional(self, node: InteriorNode) -> int:
        alternative = node.right
        if not (isinstance(alternative, InteriorNode) and alternative.op is Operator.ALTERNATIVE):
            raise EvalError(EvalErrorKind.UNKNOWN_OPERATION, "conditional without alternative")
        condition = self.eval(node.left)
        # Only the chosen branch runs.
        if condition != 0:
            return self.eval(alternative.left)
        return self.eval(alternative.right)

    def _eval_arithmetic(self, node: InteriorNode) -> int:
        op = node.op
        if op not in (Operator.ADD, Operator.SUB, Operator.MUL, Operator.DIV, Operator.MOD):
            raise EvalError(EvalErrorKind.UNKNOWN_OPERATION, op.name)

        left = self.eval(node.left)
        right = self.eval(node.right)

        if op is Operator.ADD:
            return _in_range(left + right)
        if op is Operator.SUB:
            return _in_range(left - right)
        if op is Operator.MUL:
            return _in_range(left * right)
        if op is Operator.DIV:
            if right == 0:
                raise EvalError(EvalErrorKind.DIVISION_BY_ZERO)
            return _trunc_div(left, right)
        if right == 0:
            raise EvalError(EvalErrorKind.INVALID_MODULUS)
        return _trunc_mod(left, right)


def evaluate(node: Node, symbols: SymbolTable) -> Tuple[int, Optional[EvalErrorKind]]:
    """
    Evaluate a tree from a clean error state.

    Returns:
        (value, None) on success, or (0, kind) for the first error raised
    """
    try:
        return Evaluator(symbols).eval(node), None
    except EvalError as e:
        logger.debug(f"Evaluation failed: {e}")
        return 0, e.kind
