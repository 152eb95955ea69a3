"""Resolver protocol and helpers for building classes outside parsed sources."""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from javamodel.model import (
    JavaClass,
    JavaField,
    JavaMethod,
    JavaParameter,
    SourceUnit,
    TypeRef,
)


class Resolver(Protocol):
    """Answers lookups for fully-qualified names the parsed sources lack."""

    def resolve(self, fqn: str) -> JavaClass | None:
        """Return a class for *fqn*, or None if this resolver does not know it."""
        ...


def split_qualified_name(fqn: str) -> tuple[str, str]:
    """Split *fqn* into (package, class name).

    The package ends before the first capitalised segment, so nested names
    keep their enclosing class: ``java.util.Map.Entry`` gives
    ``("java.util", "Map.Entry")``.
    """
    parts = fqn.split(".")
    for i, part in enumerate(parts[:-1]):
        if part[:1].isupper():
            return ".".join(parts[:i]), ".".join(parts[i:])
    return ".".join(parts[:-1]), parts[-1]


def _type(spec: str, unit: SourceUnit) -> TypeRef:
    """``"java.lang.String[]"`` -> TypeRef with one dimension."""
    varargs = spec.endswith("...")
    if varargs:
        spec = spec[:-3]
    dimensions = spec.count("[]") + (1 if varargs else 0)
    return TypeRef(spec.replace("[]", "").strip(), dimensions, unit)


def class_from_entry(fqn: str, entry: Mapping[str, Any], origin: str) -> JavaClass:
    """Build a class for *fqn* from a declarative entry.

    Recognised keys: ``kind``, ``modifiers``, ``superclass``, ``interfaces``,
    ``fields`` (``name``/``type``/``modifiers``) and ``methods``
    (``name``/``returns``/``params``/``modifiers``/``constructor``).  The
    class is owned by a fresh unit so its references resolve through the
    registry that adopts it.
    """
    package, name = split_qualified_name(fqn)
    unit = SourceUnit(package=package, origin=origin)
    superclass = entry.get("superclass")
    cls = JavaClass(
        name=name,
        kind=entry.get("kind", "class"),
        modifiers=list(entry.get("modifiers", ["public"])),
        superclass=TypeRef(superclass, owner=unit) if superclass else None,
        implements=[TypeRef(i, owner=unit) for i in entry.get("interfaces", [])],
        source=unit,
    )
    cls.fields = [
        JavaField(f["name"], _type(f["type"], unit), list(f.get("modifiers", ["public"])), cls)
        for f in entry.get("fields", [])
    ]
    for m in entry.get("methods", []):
        constructor = bool(m.get("constructor", False))
        cls.methods.append(
            JavaMethod(
                name=m["name"],
                returns=None if constructor else _type(m.get("returns", "void"), unit),
                parameters=[
                    JavaParameter(f"arg{i}", _type(p, unit), p.endswith("..."))
                    for i, p in enumerate(m.get("params", []))
                ],
                modifiers=list(m.get("modifiers", ["public"])),
                constructor=constructor,
                parent=cls,
            )
        )
    unit.classes = [cls]
    return cls
