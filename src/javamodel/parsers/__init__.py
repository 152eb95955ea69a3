"""Parser backends turning Java source into declaration events."""

from __future__ import annotations

from javamodel.errors import JavaModelError
from javamodel.parsers.base import Parser
from javamodel.parsers.javalang_parser import JavalangParser

__all__ = ["JavalangParser", "Parser", "get_parser"]

DEFAULT_PARSER = "javalang"


def get_parser(name: str = DEFAULT_PARSER) -> Parser:
    """Return a parser backend by name."""
    if name == "javalang":
        return JavalangParser()
    if name == "tree-sitter":
        from javamodel.parsers.treesitter_parser import TreeSitterParser

        return TreeSitterParser()
    raise JavaModelError(f"Unknown parser backend: {name!r}")
