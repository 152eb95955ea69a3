"""Declaration events from Java source via tree-sitter."""

from __future__ import annotations

import logging

from javamodel.errors import JavaModelError, ParseError
from javamodel.parsers.events import (
    MODIFIER_ORDER,
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

# tree-sitter node types that represent Java type declarations.
_TYPE_KINDS = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "annotation_type_declaration": "annotation",
}

_FIELD_DECL_TYPES = {"field_declaration", "constant_declaration"}


class TreeSitterParser:
    """Parse one compilation unit with tree-sitter-java."""

    name = "tree-sitter"

    def __init__(self) -> None:
        try:
            import tree_sitter_java as tsjava
            from tree_sitter import Language, Parser
        except ImportError as e:
            raise JavaModelError(
                "tree-sitter / tree-sitter-java not installed. "
                "Install with: pip install javamodel[tree-sitter]"
            ) from e
        self._parser = Parser(Language(tsjava.language()))

    def parse(self, text: str, origin: str | None = None) -> UnitDecl:
        tree = self._parser.parse(text.encode("utf-8"))
        root = tree.root_node

        error = _first_error(root)
        if error is not None:
            row, column = error.start_point
            message = f"missing {error.type}" if error.is_missing else "unexpected input"
            raise ParseError(message, row + 1, column + 1, origin)

        unit = UnitDecl()
        for child in root.named_children:
            if child.type == "package_declaration":
                unit.package = _qualified_name(child) or ""
            elif child.type == "import_declaration":
                name = _qualified_name(child)
                if name:
                    unit.imports.append(
                        ImportDecl(
                            name,
                            static=any(c.type == "static" for c in child.children),
                            wildcard=any(c.type == "asterisk" for c in child.children),
                        )
                    )
            elif child.type in _TYPE_KINDS:
                unit.types.append(_type_decl(child))

        logger.debug(
            "tree-sitter: %s — package %r, %d imports, %d types",
            origin or "<source>",
            unit.package,
            len(unit.imports),
            len(unit.types),
        )
        return unit


def _text(node) -> str:
    return node.text.decode("utf-8")


def _first_error(node):
    """Return the first ERROR or MISSING node in *node*'s subtree, or None."""
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return None


def _qualified_name(node) -> str | None:
    for child in node.named_children:
        if child.type in ("identifier", "scoped_identifier"):
            return _text(child)
    return None


def _strip_generics(text: str) -> str:
    """Drop ``<...>`` argument lists (nesting-aware) and whitespace."""
    out: list[str] = []
    depth = 0
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        elif depth == 0 and not ch.isspace():
            out.append(ch)
    return "".join(out)


def _type_name(node, extra_dimensions: int = 0) -> TypeName:
    if node.type == "array_type":
        inner = _type_name(node.child_by_field_name("element"))
        dims = node.child_by_field_name("dimensions")
        count = _text(dims).count("[") if dims is not None else 0
        return TypeName(inner.name, inner.dimensions + count + extra_dimensions)
    if node.type == "annotated_type":
        return _type_name(node.named_children[-1], extra_dimensions)
    return TypeName(_strip_generics(_text(node)), extra_dimensions)


def _modifiers(node) -> list[str]:
    for child in node.children:
        if child.type == "modifiers":
            return ordered_modifiers(
                c.type for c in child.children if c.type in MODIFIER_ORDER
            )
    return []


def _dimensions(node) -> int:
    dims = node.child_by_field_name("dimensions")
    return _text(dims).count("[") if dims is not None else 0


def _type_list(node) -> list[TypeName]:
    """Types inside a ``superclass``/``super_interfaces``/``extends_interfaces`` node."""
    names: list[TypeName] = []
    for child in node.named_children:
        if child.type == "type_list":
            names.extend(_type_name(t) for t in child.named_children)
        else:
            names.append(_type_name(child))
    return names


def _type_decl(node) -> TypeDecl:
    """Convert a class/interface/enum/annotation declaration and its members."""
    kind = _TYPE_KINDS[node.type]
    decl = TypeDecl(
        kind=kind,
        name=_text(node.child_by_field_name("name")),
        modifiers=_modifiers(node),
        line=node.start_point[0] + 1,
    )

    superclass = node.child_by_field_name("superclass")
    if superclass is not None:
        supers = _type_list(superclass)
        decl.superclass = supers[0] if supers else None
    interfaces = node.child_by_field_name("interfaces")
    if interfaces is not None:
        decl.interfaces.extend(_type_list(interfaces))
    for child in node.children:
        if child.type == "extends_interfaces":
            decl.interfaces.extend(_type_list(child))

    body = node.child_by_field_name("body")
    if body is None:
        return decl

    members = list(body.named_children)
    if kind == "enum":
        members = []
        for child in body.named_children:
            if child.type == "enum_constant":
                decl.fields.append(
                    FieldDecl(
                        _text(child.child_by_field_name("name")),
                        TypeName(decl.name),
                        ["public", "static", "final"],
                    )
                )
            elif child.type == "enum_body_declarations":
                members.extend(child.named_children)

    for member in members:
        if member.type in _FIELD_DECL_TYPES:
            field_type = member.child_by_field_name("type")
            modifiers = _modifiers(member)
            for declarator in member.children_by_field_name("declarator"):
                decl.fields.append(
                    FieldDecl(
                        _text(declarator.child_by_field_name("name")),
                        _type_name(field_type, _dimensions(declarator)),
                        modifiers,
                    )
                )
        elif member.type == "method_declaration":
            decl.methods.append(
                MethodDecl(
                    name=_text(member.child_by_field_name("name")),
                    returns=_type_name(member.child_by_field_name("type"), _dimensions(member)),
                    params=_params(member.child_by_field_name("parameters")),
                    modifiers=_modifiers(member),
                    exceptions=_throws(member),
                )
            )
        elif member.type == "constructor_declaration":
            decl.methods.append(
                MethodDecl(
                    name=_text(member.child_by_field_name("name")),
                    returns=None,
                    params=_params(member.child_by_field_name("parameters")),
                    modifiers=_modifiers(member),
                    constructor=True,
                    exceptions=_throws(member),
                )
            )
        elif member.type == "annotation_type_element_declaration":
            decl.methods.append(
                MethodDecl(
                    name=_text(member.child_by_field_name("name")),
                    returns=_type_name(member.child_by_field_name("type"), _dimensions(member)),
                    modifiers=_modifiers(member),
                )
            )
        elif member.type in _TYPE_KINDS:
            decl.nested.append(_type_decl(member))

    return decl


def _params(params_node) -> list[ParamDecl]:
    """Extract parameters from a formal_parameters node."""
    if params_node is None:
        return []
    params: list[ParamDecl] = []
    for child in params_node.named_children:
        if child.type == "formal_parameter":
            params.append(
                ParamDecl(
                    _text(child.child_by_field_name("name")),
                    _type_name(child.child_by_field_name("type"), _dimensions(child)),
                )
            )
        elif child.type == "spread_parameter":
            type_node = None
            name = ""
            for part in child.named_children:
                if part.type == "variable_declarator":
                    name = _text(part.child_by_field_name("name"))
                elif part.type != "modifiers" and type_node is None:
                    type_node = part
            if type_node is not None:
                params.append(ParamDecl(name, _type_name(type_node, 1), varargs=True))
    return params


def _throws(node) -> list[TypeName]:
    for child in node.children:
        if child.type == "throws":
            return [_type_name(t) for t in child.named_children]
    return []
