"""Exceptions raised by javamodel."""

from __future__ import annotations


class JavaModelError(Exception):
    """Base class for all javamodel errors."""


class ParseError(JavaModelError):
    """A source unit could not be turned into declaration events."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        origin: str | None = None,
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.origin = origin
        super().__init__(self._format())

    def _format(self) -> str:
        where = self.origin or "<source>"
        if self.line is not None:
            where = f"{where}:{self.line}"
            if self.column is not None:
                where = f"{where}:{self.column}"
        return f"{where}: {self.message}"


class PersistenceError(JavaModelError):
    """Saving or loading a registry failed."""
