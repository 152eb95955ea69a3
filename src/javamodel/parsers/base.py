"""Parser protocol: every declaration-event backend conforms to this interface."""

from __future__ import annotations

from typing import Protocol

from javamodel.parsers.events import UnitDecl


class Parser(Protocol):
    """Protocol for source-to-event backends."""

    name: str

    def parse(self, text: str, origin: str | None = None) -> UnitDecl:
        """Return the declaration events for *text*.

        Raises :class:`javamodel.errors.ParseError` on malformed input; a
        partial result is never returned.
        """
        ...
