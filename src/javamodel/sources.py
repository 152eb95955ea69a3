"""Enumerate Java source files under a directory tree."""

from __future__ import annotations

from pathlib import Path

# Files to skip when walking Java sources.
_SKIP_FILES = {"package-info.java", "module-info.java"}


def find_java_sources(root: Path) -> list[Path]:
    """Return every ``*.java`` file below *root*, sorted by path."""
    return [
        java_file
        for java_file in sorted(Path(root).rglob("*.java"))
        if java_file.name not in _SKIP_FILES and java_file.is_file()
    ]
