"""Assemble declaration events into an owned, cross-referenced class graph."""

from __future__ import annotations

import logging

from javamodel.model import (
    JavaClass,
    JavaField,
    JavaMethod,
    JavaParameter,
    SourceUnit,
    TypeRef,
)
from javamodel.parsers.events import MethodDecl, TypeDecl, TypeName, UnitDecl

logger = logging.getLogger(__name__)


def assemble_unit(unit_decl: UnitDecl, origin: str | None = None) -> SourceUnit:
    """Build a :class:`SourceUnit` owning every class declared in *unit_decl*.

    Every type reference in the result is bound to the new unit, so it
    resolves against that unit's package and imports.
    """
    unit = SourceUnit(package=unit_decl.package, origin=origin)
    for imp in unit_decl.imports:
        spec = f"{imp.name}.*" if imp.wildcard else imp.name
        if imp.static:
            unit.static_imports.append(spec)
        else:
            unit.imports.append(spec)

    unit.classes = [_assemble_class(t, unit, None) for t in unit_decl.types]
    logger.debug(
        "Assembled %s: %d top-level classes",
        origin or "<source>",
        len(unit.classes),
    )
    return unit


def _ref(name: TypeName, unit: SourceUnit, scope: JavaClass | None) -> TypeRef:
    return TypeRef(name.name, name.dimensions, unit, scope)


def _assemble_class(decl: TypeDecl, unit: SourceUnit, parent: JavaClass | None) -> JavaClass:
    # extends/implements sit outside the class body: they see the enclosing
    # class's members, while fields and methods see the class's own.
    cls = JavaClass(
        name=decl.name,
        kind=decl.kind,
        modifiers=list(decl.modifiers),
        superclass=_ref(decl.superclass, unit, parent) if decl.superclass else None,
        implements=[_ref(i, unit, parent) for i in decl.interfaces],
        source=unit,
        parent=parent,
        line=decl.line,
    )
    cls.fields = [
        JavaField(f.name, _ref(f.type, unit, cls), list(f.modifiers), cls)
        for f in decl.fields
    ]
    cls.methods = [_assemble_method(m, unit, cls) for m in decl.methods]
    cls.nested_classes = [_assemble_class(n, unit, cls) for n in decl.nested]
    return cls


def _assemble_method(decl: MethodDecl, unit: SourceUnit, parent: JavaClass) -> JavaMethod:
    return JavaMethod(
        name=decl.name,
        returns=_ref(decl.returns, unit, parent) if decl.returns and not decl.constructor else None,
        parameters=[
            JavaParameter(p.name, _ref(p.type, unit, parent), p.varargs)
            for p in decl.params
        ],
        modifiers=list(decl.modifiers),
        constructor=decl.constructor,
        exceptions=[_ref(e, unit, parent) for e in decl.exceptions],
        parent=parent,
    )
