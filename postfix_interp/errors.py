"""Exception classes and error kinds for the postfix interpreter.

Parsing and evaluation each have their own taxonomy. A raised error is the
first error of the operation; unwinding skips any remaining sibling work.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ParseErrorKind(Enum):
    """Reasons a token line cannot be built into a tree."""
    TOO_FEW_TOKENS = "too few tokens"
    TOO_MANY_TOKENS = "too many tokens"
    ILLEGAL_TOKEN = "illegal token"
    NESTING_TOO_DEEP = "expression nested too deeply"


class EvalErrorKind(Enum):
    """Reasons a well-formed tree cannot be evaluated."""
    UNDEFINED_SYMBOL = "undefined symbol"
    INVALID_LVALUE = "invalid lvalue"
    DIVISION_BY_ZERO = "division by zero"
    INVALID_MODULUS = "invalid modulus"
    SYMBOL_TABLE_FULL = "symbol table full"
    UNKNOWN_OPERATION = "unknown operation"
    VALUE_OUT_OF_RANGE = "value out of range"


# --------------------------
# Exceptions
# --------------------------

class InterpreterError(Exception):
    """Base class for interpreter errors."""
    pass


class ParseError(InterpreterError):
    """Raised when a line cannot be built into an expression tree."""

    def __init__(self, kind: ParseErrorKind, detail: Optional[str] = None):
        self.kind = kind
        self.detail = detail
        message = kind.value if detail is None else f"{kind.value}: {detail}"
        super().__init__(message)


class EvalError(InterpreterError):
    """Raised when evaluation of an expression tree fails."""

    def __init__(self, kind: EvalErrorKind, detail: Optional[str] = None):
        self.kind = kind
        self.detail = detail
        message = kind.value if detail is None else f"{kind.value}: {detail}"
        super().__init__(message)


class SymbolTableFullError(InterpreterError):
    """Raised by a bounded symbol table when a new name does not fit."""
    pass
