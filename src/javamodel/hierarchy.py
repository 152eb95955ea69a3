"""Transitive is-a relationships over class and interface hierarchies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from javamodel.model import OBJECT

if TYPE_CHECKING:
    from javamodel.model import JavaClass


def _supertypes(cls: JavaClass) -> list[JavaClass]:
    """Directly declared supertypes of *cls* that the registry can resolve."""
    found: list[JavaClass] = []
    for ref in cls.implements:
        resolved = ref.resolve_class()
        if resolved is not None:
            found.append(resolved)
    if not cls.is_interface and cls.superclass is not None:
        resolved = cls.superclass.resolve_class()
        if resolved is not None:
            found.append(resolved)
    return found


def is_a(cls: JavaClass, target: str) -> bool:
    """Return True if *cls* is, extends or implements *target* (a FQN).

    Classes without a declared superclass are implicitly ``java.lang.Object``;
    interfaces without a declared supertype are not.  Cyclic hierarchies
    (malformed input) end the walk with False instead of looping.
    """
    visited: set[str] = set()
    stack = [cls]
    while stack:
        current = stack.pop()
        fqn = current.full_name
        if fqn == target:
            return True
        if fqn in visited:
            continue
        visited.add(fqn)
        if not current.is_interface and current.superclass is None and target == OBJECT:
            return True
        stack.extend(reversed(_supertypes(current)))
    return False


def superclass_chain(cls: JavaClass) -> list[JavaClass]:
    """Resolvable superclasses of *cls*, nearest first, ending at Object if known."""
    chain: list[JavaClass] = []
    seen = {cls.full_name}
    current = cls.get_super_java_class()
    while current is not None and current.full_name not in seen:
        chain.append(current)
        seen.add(current.full_name)
        current = current.get_super_java_class()
    return chain


def implemented_interfaces(cls: JavaClass) -> list[JavaClass]:
    """Every resolvable interface *cls* implements, directly or inherited.

    Includes interfaces of superclasses and super-interfaces, de-duplicated
    in discovery order.
    """
    result: list[JavaClass] = []
    seen = {cls.full_name}
    queue = [cls, *superclass_chain(cls)]
    visited = {c.full_name for c in queue}
    while queue:
        current = queue.pop(0)
        for ref in current.implements:
            iface = ref.resolve_class()
            if iface is None or iface.full_name in seen:
                continue
            seen.add(iface.full_name)
            result.append(iface)
            if iface.full_name not in visited:
                visited.add(iface.full_name)
                queue.append(iface)
    return result
