"""Tokenizer and token stack for postfix expression lines."""

from __future__ import annotations

import re
from typing import Iterable, List

# Only these four characters separate tokens.
_DELIMITERS = re.compile(r'[ \t\r\n]+')


def tokenize(text: str) -> List[str]:
    """
    Split a line into whitespace-delimited tokens.

    Runs of space, tab, carriage return and newline separate tokens. There is
    no quoting or escaping; an empty or blank line gives an empty list.
    """
    return [tok for tok in _DELIMITERS.split(text) if tok]


class TokenStack:
    """LIFO container of owned token strings."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[str] = []

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "TokenStack":
        """Push tokens in source order, leaving the last token on top."""
        stack = cls()
        for tok in tokens:
            stack.push(tok)
        return stack

    def push(self, token: str) -> None:
        self._items.append(token)

    def pop(self) -> str:
        """Remove the top token and hand it to the caller."""
        if not self._items:
            raise IndexError("pop from an empty token stack")
        return self._items.pop()

    def top(self) -> str:
        if not self._items:
            raise IndexError("top of an empty token stack")
        return self._items[-1]

    def empty(self) -> bool:
        return not self._items

    def clear(self) -> None:
        """Drop every remaining token."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"TokenStack({self._items!r})"
