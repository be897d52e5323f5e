"""Parse -> evaluate -> print pipeline for single postfix lines.

An Interpreter owns the symbol table for a run. Callers feed it one trimmed,
comment-free line at a time; each line is fully tokenized, built, evaluated
and printed before the call returns, and its tree is released either way.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Tuple

from .config import InterpreterSettings, configure_logging, load_settings
from .errors import InterpreterError
from .evaluator import Evaluator
from .parser import make_parse_tree
from .printer import to_infix
from .symtab import SymbolTable
from .tree import NodeAllocator

logger = logging.getLogger(__name__)


class Interpreter:
    """Evaluates postfix lines and writes ``<infix> = <value>`` results.

    A symbol table passed in keeps its own capacity; ``settings.symbol_capacity``
    only sizes the table the interpreter creates, and must agree with a given
    table when both are set.
    """

    def __init__(
        self,
        symbols: Optional[SymbolTable] = None,
        settings: Optional[InterpreterSettings] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ):
        self.settings = settings if settings is not None else InterpreterSettings()
        capacity = self.settings.symbol_capacity
        if symbols is not None and capacity is not None and symbols.capacity != capacity:
            raise ValueError(
                f"symbol_capacity={capacity} conflicts with the given table's capacity {symbols.capacity}"
            )
        if symbols is None:
            symbols = SymbolTable(capacity=self.settings.symbol_capacity)
        self.symbols = symbols
        self.evaluator = Evaluator(self.symbols)
        self.allocator = NodeAllocator()
        self.out = out
        self.err = err

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **kwargs) -> "Interpreter":
        """Build an interpreter from environment settings and set up logging."""
        settings = load_settings(env_file)
        configure_logging(settings)
        return cls(settings=settings, **kwargs)

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """
        Parse, evaluate and render one line.

        Returns:
            (True, "<infix> = <value>") on success, or
            (False, "Error: <message>") for any parse or evaluation error
        """
        try:
            tree = make_parse_tree(line, self.allocator)
        except InterpreterError as e:
            logger.info(f"Parse failed for {line!r}: {e}")
            return False, f"Error: {e}"

        try:
            value = self.evaluator.eval(tree)
            return True, f"{to_infix(tree)} = {value}"
        except InterpreterError as e:
            logger.info(f"Evaluation failed for {line!r}: {e}")
            return False, f"Error: {e}"
        finally:
            self.allocator.release(tree)

    def evaluate_and_print(self, line: str) -> None:
        """Write the result line, or nothing (or a diagnostic) on failure."""
        ok, output = self.evaluate_line(line)
        if ok:
            self._write(self.out if self.out is not None else sys.stdout, output)
        elif self.settings.diagnostics:
            self._write(self.err if self.err is not None else sys.stderr, output)

    def dump_table(self) -> None:
        """Write the symbol table listing if any symbol is defined."""
        listing = self.symbols.dump()
        if listing:
            self._write(self.out if self.out is not None else sys.stdout, listing)

    @staticmethod
    def _write(stream: TextIO, text: str) -> None:
        stream.write(text + "\n")
        stream.flush()
