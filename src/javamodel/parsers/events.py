"""Declaration events emitted by parser backends for one compilation unit."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TypeName:
    """A type as written: dotted name without generic arguments."""

    name: str
    dimensions: int = 0


@dataclass
class ImportDecl:
    name: str  # without the trailing ".*"
    static: bool = False
    wildcard: bool = False


@dataclass
class FieldDecl:
    name: str
    type: TypeName
    modifiers: list[str] = field(default_factory=list)


@dataclass
class ParamDecl:
    name: str
    type: TypeName
    varargs: bool = False  # "..." is counted in type.dimensions


@dataclass
class MethodDecl:
    name: str
    returns: TypeName | None  # None for constructors
    params: list[ParamDecl] = field(default_factory=list)
    modifiers: list[str] = field(default_factory=list)
    constructor: bool = False
    exceptions: list[TypeName] = field(default_factory=list)


@dataclass
class TypeDecl:
    kind: str  # "class", "interface", "enum", "annotation"
    name: str
    modifiers: list[str] = field(default_factory=list)
    superclass: TypeName | None = None
    interfaces: list[TypeName] = field(default_factory=list)
    fields: list[FieldDecl] = field(default_factory=list)
    methods: list[MethodDecl] = field(default_factory=list)
    nested: list[TypeDecl] = field(default_factory=list)
    line: int | None = None


@dataclass
class UnitDecl:
    package: str = ""
    imports: list[ImportDecl] = field(default_factory=list)
    types: list[TypeDecl] = field(default_factory=list)


# Canonical modifier order, used to make backend output deterministic.
MODIFIER_ORDER = (
    "public",
    "protected",
    "private",
    "abstract",
    "static",
    "final",
    "sealed",
    "non-sealed",
    "transient",
    "volatile",
    "synchronized",
    "native",
    "strictfp",
    "default",
)


def ordered_modifiers(modifiers) -> list[str]:
    """Known modifiers from *modifiers* in canonical order."""
    present = set(modifiers or ())
    return [m for m in MODIFIER_ORDER if m in present]
