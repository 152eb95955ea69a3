"""Namespace registry: the record of which types exist, and the query facade.

Lookups by fully-qualified name go through two tiers:

1. the index of classes declared in registered source units (a later unit
   declaring the same name shadows the earlier one), then
2. the external resolvers, in registration order; the first hit is cached.

The registry is not thread-safe.  Concurrent reads are fine; any
``add_*`` call must not overlap with another operation.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Callable, Iterable

from javamodel.assembly import assemble_unit
from javamodel.errors import ParseError
from javamodel.model import JavaClass, SourceUnit
from javamodel.parsers import DEFAULT_PARSER, Parser, get_parser
from javamodel.resolvers.base import Resolver
from javamodel.sources import find_java_sources

logger = logging.getLogger(__name__)


class Registry:
    """Registered source units, the class index and the resolver chain."""

    def __init__(
        self,
        resolvers: Iterable[Resolver] = (),
        parser: str = DEFAULT_PARSER,
    ) -> None:
        self.parser_name = parser
        self._parser: Parser | None = None
        self._sources: list[SourceUnit] = []
        self._index: dict[str, JavaClass] = {}
        self._resolvers: list[Resolver] = []
        self._resolved: dict[str, JavaClass] = {}
        self._misses: set[str] = set()
        for resolver in resolvers:
            self.add_resolver(resolver)

    @property
    def parser(self) -> Parser:
        if self._parser is None:
            self._parser = get_parser(self.parser_name)
        return self._parser

    @property
    def resolvers(self) -> tuple[Resolver, ...]:
        return tuple(self._resolvers)

    # ---------------- Registration ----------------

    def add_source(self, text: str, origin: str | None = None) -> SourceUnit:
        """Parse *text* as one compilation unit and register its classes.

        A :class:`ParseError` leaves the registry untouched.
        """
        unit_decl = self.parser.parse(text, origin=origin)
        unit = assemble_unit(unit_decl, origin=origin)
        self.add_unit(unit)
        return unit

    def add_source_file(self, path: str | os.PathLike, encoding: str = "utf-8") -> SourceUnit:
        """Add one file.  Undecodable bytes raise :class:`UnicodeDecodeError`."""
        path = Path(path)
        text = path.read_text(encoding=encoding)
        return self.add_source(text, origin=str(path))

    def add_source_tree(
        self,
        directory: str | os.PathLike,
        *,
        skip_errors: bool = False,
        encoding: str = "utf-8",
    ) -> list[SourceUnit]:
        """Add every Java file below *directory*.

        With *skip_errors*, files that fail to decode or parse are logged and
        skipped; otherwise the first error propagates and the files
        already added stay registered.
        """
        units: list[SourceUnit] = []
        skipped = 0
        for java_file in find_java_sources(Path(directory)):
            try:
                units.append(self.add_source_file(java_file, encoding=encoding))
            except (ParseError, UnicodeDecodeError) as e:
                if not skip_errors:
                    raise
                skipped += 1
                reason = e.message if isinstance(e, ParseError) else e
                logger.warning("Skipping %s: %s", java_file, reason)
        logger.debug(
            "Source tree %s: %d units (%d skipped)",
            directory,
            len(units),
            skipped,
        )
        return units

    def add_unit(self, unit: SourceUnit) -> None:
        """Register an already assembled unit."""
        unit.registry = self
        for cls in unit.iter_classes():
            fqn = cls.full_name
            if fqn in self._index:
                logger.debug("%s from %s shadows an earlier declaration", fqn, unit.origin)
            self._index[fqn] = cls
        # The index is consulted before the miss cache; misses survive new units.
        self._sources.append(unit)

    def add_resolver(self, resolver: Resolver) -> None:
        """Append *resolver* to the chain queried on index misses."""
        self._resolvers.append(resolver)
        self._misses.clear()

    # ---------------- Queries ----------------

    def get_class_by_name(self, fqn: str) -> JavaClass | None:
        """Return the class named *fqn*, or None when nothing knows it."""
        if not fqn:
            return None
        cls = self._index.get(fqn)
        if cls is not None:
            return cls
        cls = self._resolved.get(fqn)
        if cls is not None:
            return cls
        if fqn in self._misses:
            return None

        for resolver in self._resolvers:
            cls = resolver.resolve(fqn)
            if cls is not None:
                if cls.source is not None:
                    cls.source.registry = self
                self._resolved[fqn] = cls
                logger.debug("Resolved %s via %s", fqn, type(resolver).__name__)
                return cls

        self._misses.add(fqn)
        return None

    def has_class(self, fqn: str) -> bool:
        return self.get_class_by_name(fqn) is not None

    def get_sources(self) -> list[SourceUnit]:
        """Registered source units, in registration order."""
        return list(self._sources)

    def get_classes(self) -> list[JavaClass]:
        """Every class of every registered unit, nested classes included."""
        return [cls for unit in self._sources for cls in unit.iter_classes()]

    def search(self, predicate: Callable[[JavaClass], bool]) -> list[JavaClass]:
        """Classes matching *predicate*, in unit registration then declaration order."""
        return [cls for cls in self.get_classes() if predicate(cls)]

    # ---------------- Persistence ----------------

    def save(self, target: str | os.PathLike | IO[bytes]) -> None:
        """Persist sources and classes; resolvers are not saved."""
        from javamodel.persistence import save_registry

        save_registry(self, target)

    @classmethod
    def load(cls, source: str | os.PathLike | IO[bytes]) -> Registry:
        """Load a registry saved with :meth:`save`.  Its resolver chain is empty."""
        from javamodel.persistence import load_registry

        return load_registry(source)

    def __getstate__(self) -> dict:
        state = self.__dict__.copy()
        state["_parser"] = None
        state["_resolvers"] = []
        state["_resolved"] = {}
        state["_misses"] = set()
        return state

    def __setstate__(self, state: dict) -> None:
        self.__dict__.update(state)

    def __repr__(self) -> str:
        return (
            f"Registry(sources={len(self._sources)}, classes={len(self._index)}, "
            f"resolvers={len(self._resolvers)})"
        )
