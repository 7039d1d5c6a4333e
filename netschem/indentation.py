"""Indentation tracking for nested text output."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator


class Indentation:
    """A growing and shrinking run of spaces for nested output."""

    def __init__(self, tab_size: int = 2) -> None:
        self.tab_size = tab_size
        self._text = ""

    def increase(self) -> "Indentation":
        """Add one level of indentation and return self."""
        self._text += " " * self.tab_size
        return self

    def decrease(self) -> "Indentation":
        """Remove one level of indentation, never going below zero, and return self."""
        if len(self._text) > self.tab_size:
            self._text = self._text[: len(self._text) - self.tab_size]
        else:
            self._text = ""
        return self

    @contextmanager
    def block(self) -> Iterator["Indentation"]:
        """Indent one level for the duration of a ``with`` block."""
        self.increase()
        try:
            yield self
        finally:
            self.decrease()

    @property
    def width(self) -> int:
        """Number of spaces currently produced."""
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Indentation(tab_size={self.tab_size}, width={self.width})"