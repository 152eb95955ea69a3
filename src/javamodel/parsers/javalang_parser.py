"""Declaration events from Java source via javalang."""

from __future__ import annotations

import logging

import javalang
from javalang.tree import (
    AnnotationDeclaration,
    AnnotationMethod,
    ClassDeclaration,
    ConstructorDeclaration,
    EnumDeclaration,
    FieldDeclaration,
    InterfaceDeclaration,
    MethodDeclaration,
)

from javamodel.errors import ParseError
from javamodel.parsers.events import (
    FieldDecl,
    ImportDecl,
    MethodDecl,
    ParamDecl,
    TypeDecl,
    TypeName,
    UnitDecl,
    ordered_modifiers,
)

logger = logging.getLogger(__name__)

_TYPE_KINDS = {
    ClassDeclaration: "class",
    InterfaceDeclaration: "interface",
    EnumDeclaration: "enum",
    AnnotationDeclaration: "annotation",
}


class JavalangParser:
    """Parse one compilation unit with javalang."""

    name = "javalang"

    def parse(self, text: str, origin: str | None = None) -> UnitDecl:
        try:
            tree = javalang.parse.parse(text)
        except javalang.parser.JavaSyntaxError as e:
            line, column = _error_position(e)
            raise ParseError(e.description or "syntax error", line, column, origin) from e
        except javalang.tokenizer.LexerError as e:
            raise ParseError(f"lexer error: {e}", origin=origin) from e
        except Exception as e:
            # javalang leaks assorted exceptions on input it cannot handle
            raise ParseError(f"failed to parse: {e!r}", origin=origin) from e

        package = tree.package.name if tree.package else ""
        imports = [
            ImportDecl(imp.path, static=bool(imp.static), wildcard=bool(imp.wildcard))
            for imp in tree.imports or []
        ]
        types = [_type_decl(t) for t in tree.types or [] if type(t) in _TYPE_KINDS]

        logger.debug(
            "javalang: %s — package %r, %d imports, %d types",
            origin or "<source>",
            package,
            len(imports),
            len(types),
        )
        return UnitDecl(package=package, imports=imports, types=types)


def _error_position(error) -> tuple[int | None, int | None]:
    position = getattr(getattr(error, "at", None), "position", None)
    if not position:
        return None, None
    return position[0], position[1]


def _type_name(node, extra_dimensions: int = 0) -> TypeName:
    """Flatten a javalang Type node (``sub_type`` chain) into a dotted name."""
    if node is None:
        return TypeName("void")
    parts: list[str] = []
    dimensions = 0
    current = node
    while current is not None:
        parts.append(current.name)
        dimensions = max(dimensions, len(getattr(current, "dimensions", None) or []))
        current = getattr(current, "sub_type", None)
    return TypeName(".".join(parts), dimensions + extra_dimensions)


def _members(node) -> list:
    if isinstance(node, EnumDeclaration):
        return list(node.body.declarations or []) if node.body else []
    return list(node.body or [])


def _type_decl(node) -> TypeDecl:
    """Convert a class/interface/enum/annotation declaration and its members."""
    kind = _TYPE_KINDS[type(node)]
    decl = TypeDecl(
        kind=kind,
        name=node.name,
        modifiers=ordered_modifiers(node.modifiers),
        line=node.position.line if node.position else None,
    )

    if kind == "class":
        if node.extends is not None:
            decl.superclass = _type_name(node.extends)
        decl.interfaces = [_type_name(i) for i in node.implements or []]
    elif kind == "interface":
        # Interfaces "extend" other interfaces; modelled as implements.
        decl.interfaces = [_type_name(i) for i in node.extends or []]
    elif kind == "enum":
        decl.interfaces = [_type_name(i) for i in node.implements or []]
        constants = (node.body.constants or []) if node.body else []
        for constant in constants:
            decl.fields.append(
                FieldDecl(constant.name, TypeName(node.name), ["public", "static", "final"])
            )

    for member in _members(node):
        if isinstance(member, FieldDeclaration):
            for declarator in member.declarators:
                decl.fields.append(
                    FieldDecl(
                        declarator.name,
                        _type_name(member.type, len(declarator.dimensions or [])),
                        ordered_modifiers(member.modifiers),
                    )
                )
        elif isinstance(member, MethodDeclaration):
            decl.methods.append(
                MethodDecl(
                    name=member.name,
                    returns=_type_name(member.return_type),
                    params=_params(member.parameters),
                    modifiers=ordered_modifiers(member.modifiers),
                    exceptions=[TypeName(t) for t in member.throws or []],
                )
            )
        elif isinstance(member, ConstructorDeclaration):
            decl.methods.append(
                MethodDecl(
                    name=member.name,
                    returns=None,
                    params=_params(member.parameters),
                    modifiers=ordered_modifiers(member.modifiers),
                    constructor=True,
                    exceptions=[TypeName(t) for t in member.throws or []],
                )
            )
        elif isinstance(member, AnnotationMethod):
            decl.methods.append(
                MethodDecl(
                    name=member.name,
                    returns=_type_name(member.return_type),
                    modifiers=ordered_modifiers(member.modifiers),
                )
            )
        elif type(member) in _TYPE_KINDS:
            decl.nested.append(_type_decl(member))

    return decl


def _params(parameters) -> list[ParamDecl]:
    return [
        ParamDecl(
            p.name,
            _type_name(p.type, 1 if p.varargs else 0),
            varargs=bool(p.varargs),
        )
        for p in parameters or []
    ]
