"""Short-name to fully-qualified-name resolution against a unit's imports."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from javamodel.model import JavaClass, SourceUnit
    from javamodel.registry import Registry

# Package every compilation unit imports implicitly.
IMPLICIT_PACKAGE = "java.lang"


def resolve_type_name(
    name: str, unit: SourceUnit, scope: JavaClass | None = None
) -> str | None:
    """Resolve *name* as written in *unit* to a fully-qualified name.

    Lookup order:

    1. *name* is a qualified name the registry knows.
    2. A class in scope: a member class of *scope* or of a class enclosing
       it, or a top-level class of *unit*.
    3. A class of that name in the unit's own package.
    4. A single-type import ending in that name (not confirmed).
    5. The on-demand (``pkg.*``) imports, in declaration order.
    6. The implicit ``java.lang`` package.

    Dotted names such as ``Map.Entry`` resolve their first segment and keep
    the rest.  Returns None when nothing matches; the caller then treats the
    reference as unresolved.  Nothing is cached and nothing is mutated.
    """
    if not name:
        return None
    registry = unit.registry
    head, _, rest = name.partition(".")
    suffix = f".{rest}" if rest else ""

    if suffix and registry is not None and registry.has_class(name):
        return name

    local = _class_in_scope(head, unit, scope)
    if local is not None:
        candidate = local.full_name + suffix
        if not suffix or registry is None or registry.has_class(candidate):
            return candidate

    # Classes of the default package are known by their simple name.
    package_candidate = f"{unit.package}.{head}" if unit.package else head
    found = _confirm(registry, package_candidate + suffix)
    if found:
        return found

    for imported in unit.imports:
        if imported.endswith(".*"):
            continue
        if imported.rpartition(".")[2] == head:
            return imported + suffix

    for imported in unit.imports:
        if not imported.endswith(".*"):
            continue
        found = _confirm(registry, f"{imported[:-2]}.{head}{suffix}")
        if found:
            return found

    return _confirm(registry, f"{IMPLICIT_PACKAGE}.{head}{suffix}")


def _class_in_scope(head: str, unit: SourceUnit, scope: JavaClass | None) -> JavaClass | None:
    """Innermost class named *head* visible from the body of *scope*."""
    current = scope
    while current is not None:
        for nested in current.nested_classes:
            if nested.name == head:
                return nested
        if current.name == head:
            return current
        current = current.parent
    for cls in unit.classes:
        if cls.name == head:
            return cls
    return None


def _confirm(registry: Registry | None, candidate: str) -> str | None:
    if registry is not None and registry.has_class(candidate):
        return candidate
    return None
