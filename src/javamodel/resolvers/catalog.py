"""Resolver answering from a declarative catalog of binary types."""

from __future__ import annotations

import json
import logging
from importlib import resources
from typing import Any, Mapping

from javamodel.model import JavaClass
from javamodel.resolvers.base import class_from_entry

logger = logging.getLogger(__name__)


class CatalogResolver:
    """Resolve names listed in a mapping of FQN -> class entry.

    See :func:`javamodel.resolvers.base.class_from_entry` for the entry
    format.  An empty entry stands for a public class with no members.
    """

    def __init__(self, entries: Mapping[str, Mapping[str, Any]], name: str = "catalog") -> None:
        self.name = name
        self._entries = dict(entries)

    @classmethod
    def jdk(cls) -> CatalogResolver:
        """Catalog of core ``java.lang``, ``java.io`` and ``java.util`` types."""
        data = resources.files("javamodel.resolvers").joinpath("data/jdk.json").read_text(
            encoding="utf-8"
        )
        entries = json.loads(data)
        logger.debug("Loaded JDK catalog with %d types", len(entries))
        return cls(entries, name="jdk")

    def resolve(self, fqn: str) -> JavaClass | None:
        entry = self._entries.get(fqn)
        if entry is None:
            return None
        return class_from_entry(fqn, entry, origin=f"resolver:{self.name}")

    def __contains__(self, fqn: object) -> bool:
        return fqn in self._entries

    def __len__(self) -> int:
        return len(self._entries)
