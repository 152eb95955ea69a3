"""Bean properties derived from getter/setter naming conventions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from javamodel.model import BeanProperty

if TYPE_CHECKING:
    from javamodel.model import JavaClass, JavaMethod


def _decapitalize(name: str) -> str:
    return name[:1].lower() + name[1:]


def _accessor_property(method: JavaMethod) -> str | None:
    """Property name if *method* is ``getX()``/``isX()``, else None."""
    if method.parameters or method.returns is None:
        return None
    name = method.name
    if name.startswith("get") and len(name) > 3 and not method.returns.is_void:
        return _decapitalize(name[3:])
    if (
        name.startswith("is")
        and len(name) > 2
        and method.returns.name == "boolean"
        and not method.returns.is_array
    ):
        return _decapitalize(name[2:])
    return None


def _mutator_property(method: JavaMethod) -> str | None:
    """Property name if *method* is ``void setX(v)``, else None."""
    if len(method.parameters) != 1 or method.returns is None or not method.returns.is_void:
        return None
    name = method.name
    if name.startswith("set") and len(name) > 3:
        return _decapitalize(name[3:])
    return None


def bean_properties(cls: JavaClass) -> list[BeanProperty]:
    """Group *cls*'s accessors and mutators by property name.

    Static methods qualify like instance methods.  Properties appear in the
    order their first method is declared.
    """
    found: dict[str, BeanProperty] = {}
    for method in cls.methods:
        if method.constructor:
            continue
        name = _accessor_property(method)
        if name is not None:
            prop = found.setdefault(name, BeanProperty(name))
            if prop.accessor is None:
                prop.accessor = method
            continue
        name = _mutator_property(method)
        if name is not None:
            prop = found.setdefault(name, BeanProperty(name))
            if prop.mutator is None:
                prop.mutator = method
    return list(found.values())
