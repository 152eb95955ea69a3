from __future__ import annotations

from pathlib import Path

import pytest

from javamodel import CatalogResolver, Registry


class RecordingResolver:
    """Resolver backed by a catalog that records every lookup it answers."""

    def __init__(self, entries: dict) -> None:
        self._catalog = CatalogResolver(entries, name="recording")
        self.calls: list[str] = []

    def resolve(self, fqn):
        self.calls.append(fqn)
        return self._catalog.resolve(fqn)


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest.fixture
def jdk_registry() -> Registry:
    return Registry(resolvers=[CatalogResolver.jdk()])


@pytest.fixture
def recording_resolver():
    return RecordingResolver


@pytest.fixture
def java_tree(tmp_path):
    """Write ``{relative path: source}`` below a fresh directory and return it."""

    def write(files: dict[str, str]) -> Path:
        root = tmp_path / "java"
        for rel, text in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return root

    return write
