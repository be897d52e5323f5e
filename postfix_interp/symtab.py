"""Symbol table mapping variable names to integer values."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterator, Mapping, Optional

from pydantic import BaseModel, field_validator

from .errors import SymbolTableFullError

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r'[a-zA-Z][a-zA-Z0-9]*')


class Symbol(BaseModel):
    """A named integer variable."""
    name: str
    value: int

    @field_validator('name')
    @classmethod
    def name_must_be_identifier(cls, v: str) -> str:
        if not _NAME_PATTERN.fullmatch(v):
            raise ValueError(f'Invalid symbol name: {v!r}')
        return v


class SymbolTable:
    """
    Mutable name -> value mapping shared by every evaluation of a run.

    Symbols are created on first assignment and updated in place afterwards.
    With a capacity, creating a symbol beyond it raises SymbolTableFullError;
    updating an existing symbol always succeeds.
    """

    def __init__(self, capacity: Optional[int] = None):
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._symbols: Dict[str, Symbol] = {}

    @classmethod
    def from_mapping(cls, values: Mapping[str, int], capacity: Optional[int] = None) -> "SymbolTable":
        table = cls(capacity)
        for name, value in values.items():
            table.create_or_update(name, value)
        return table

    def lookup(self, name: str) -> Optional[int]:
        """Return the value bound to name, or None if it is undefined."""
        symbol = self._symbols.get(name)
        return symbol.value if symbol is not None else None

    def create_or_update(self, name: str, value: int) -> int:
        """
        Bind name to value, creating the symbol if needed.

        Returns:
            The stored value

        Raises:
            SymbolTableFullError: If name is new and the table is at capacity
            pydantic.ValidationError: If name is not a valid identifier
        """
        symbol = self._symbols.get(name)
        if symbol is not None:
            symbol.value = value
            return value
        if self.capacity is not None and len(self._symbols) >= self.capacity:
            raise SymbolTableFullError(f"cannot create '{name}': table holds {self.capacity} symbols")
        self._symbols[name] = Symbol(name=name, value=value)
        logger.debug(f"Created symbol {name} = {value}")
        return value

    def clear(self) -> None:
        self._symbols.clear()

    def dump(self) -> str:
        """Render the table, newest symbol first; empty string when empty."""
        if not self._symbols:
            return ""
        lines = ["SYMBOL TABLE:"]
        lines.extend(f"\tName: {sym.name}, Value: {sym.value}" for sym in self)
        return "\n".join(lines)

    def as_dict(self) -> Dict[str, int]:
        return {name: sym.value for name, sym in self._symbols.items()}

    def __iter__(self) -> Iterator[Symbol]:
        return reversed(list(self._symbols.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)
