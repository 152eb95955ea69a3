"""Structural model of Java source: units, classes, members and type references."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Sequence

from javamodel.resolution import resolve_type_name

if TYPE_CHECKING:
    from javamodel.registry import Registry

OBJECT = "java.lang.Object"

PRIMITIVES = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"}
)


class TypeRef:
    """A named, possibly-array, possibly-unresolved reference to a type.

    The reference only remembers the name as written, the source unit it
    appeared in and the class whose body it appeared in (``scope``, None at
    the top level of the unit).  ``is_resolved`` and ``full_name`` ask the
    owning unit on every call, so a reference follows resolvers and sources
    registered after it was created.
    """

    def __init__(
        self,
        name: str,
        dimensions: int = 0,
        owner: SourceUnit | None = None,
        scope: JavaClass | None = None,
    ) -> None:
        self.name = name
        self.dimensions = dimensions
        self._owner = weakref.ref(owner) if owner is not None else None
        self._scope = weakref.ref(scope) if scope is not None else None

    @property
    def owner(self) -> SourceUnit | None:
        return self._owner() if self._owner is not None else None

    @property
    def scope(self) -> JavaClass | None:
        return self._scope() if self._scope is not None else None

    def _resolved_name(self) -> str | None:
        if self.name in PRIMITIVES:
            return self.name
        owner = self.owner
        if owner is None:
            return None
        return owner.resolve_type(self.name, self.scope)

    @property
    def value(self) -> str:
        """The name exactly as written in the source."""
        return self.name

    @property
    def full_name(self) -> str:
        """Fully-qualified name, or the literal name when unresolved."""
        return self._resolved_name() or self.name

    @property
    def is_resolved(self) -> bool:
        return self._resolved_name() is not None

    @property
    def is_array(self) -> bool:
        return self.dimensions > 0

    @property
    def is_primitive(self) -> bool:
        return self.name in PRIMITIVES

    @property
    def is_void(self) -> bool:
        return self.name == "void" and self.dimensions == 0

    @property
    def component_type(self) -> TypeRef | None:
        if not self.is_array:
            return None
        return TypeRef(self.name, self.dimensions - 1, self.owner, self.scope)

    def resolve_class(self) -> JavaClass | None:
        """Return the class this reference points at, if the registry knows it."""
        if self.is_array or self.is_primitive:
            return None
        owner = self.owner
        if owner is None or owner.registry is None:
            return None
        resolved = self._resolved_name()
        if resolved is None:
            return None
        return owner.registry.get_class_by_name(resolved)

    def __str__(self) -> str:
        return self.full_name + "[]" * self.dimensions

    def __repr__(self) -> str:
        return f"TypeRef({self.name!r}, dimensions={self.dimensions})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeRef):
            return NotImplemented
        return (self.full_name, self.dimensions) == (other.full_name, other.dimensions)

    __hash__ = None  # type: ignore[assignment]

    def __getstate__(self) -> dict:
        return {
            "name": self.name,
            "dimensions": self.dimensions,
            "owner": self.owner,
            "scope": self.scope,
        }

    def __setstate__(self, state: dict) -> None:
        self.name = state["name"]
        self.dimensions = state["dimensions"]
        owner = state["owner"]
        self._owner = weakref.ref(owner) if owner is not None else None
        scope = state.get("scope")
        self._scope = weakref.ref(scope) if scope is not None else None


class _Modified:
    """Modifier queries shared by classes and members."""

    modifiers: list[str]

    def has_modifier(self, modifier: str) -> bool:
        return modifier in self.modifiers

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers

    @property
    def is_protected(self) -> bool:
        return "protected" in self.modifiers

    @property
    def is_private(self) -> bool:
        return "private" in self.modifiers

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers

    @property
    def is_final(self) -> bool:
        return "final" in self.modifiers

    @property
    def is_abstract(self) -> bool:
        return "abstract" in self.modifiers


@dataclass(eq=False)
class JavaField(_Modified):
    """A field (or enum constant) of a class."""

    name: str
    type: TypeRef
    modifiers: list[str] = field(default_factory=list)
    parent: JavaClass | None = field(default=None, repr=False)


@dataclass(eq=False)
class JavaParameter:
    name: str
    type: TypeRef
    varargs: bool = False


@dataclass(eq=False)
class JavaMethod(_Modified):
    """A method or constructor.  Constructors have no return type."""

    name: str
    returns: TypeRef | None = None
    parameters: list[JavaParameter] = field(default_factory=list)
    modifiers: list[str] = field(default_factory=list)
    constructor: bool = False
    exceptions: list[TypeRef] = field(default_factory=list)
    parent: JavaClass | None = field(default=None, repr=False)

    @property
    def parameter_types(self) -> list[TypeRef]:
        return [p.type for p in self.parameters]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(str(t) for t in self.parameter_types)})"

    def matches(self, name: str, param_types: Sequence[TypeRef | str] | None) -> bool:
        """Exact signature match on name and parameter types."""
        if name != self.name:
            return False
        wanted = list(param_types or [])
        if len(wanted) != len(self.parameters):
            return False
        return all(_same_type(p.type, w) for p, w in zip(self.parameters, wanted))


def _same_type(declared: TypeRef, wanted: TypeRef | str) -> bool:
    if isinstance(wanted, TypeRef):
        if declared.dimensions != wanted.dimensions:
            return False
        return declared.full_name == wanted.full_name or declared.value == wanted.value
    suffix = "[]" * declared.dimensions
    return wanted in (declared.full_name + suffix, declared.value + suffix)


@dataclass(eq=False)
class BeanProperty:
    """An accessor/mutator pair sharing a property name."""

    name: str
    accessor: JavaMethod | None = None
    mutator: JavaMethod | None = None

    @property
    def type(self) -> TypeRef | None:
        if self.accessor is not None:
            return self.accessor.returns
        if self.mutator is not None:
            return self.mutator.parameters[0].type
        return None


@dataclass(eq=False)
class JavaClass(_Modified):
    """A class, interface, enum or annotation declaration.

    Nested classes are owned by their enclosing class (``parent``); top-level
    classes by their source unit.  ``superclass`` is the declared reference
    only; see :meth:`get_superclass` for the implicit ``java.lang.Object``.
    """

    name: str
    kind: str = "class"  # "class", "interface", "enum", "annotation"
    modifiers: list[str] = field(default_factory=list)
    superclass: TypeRef | None = None
    implements: list[TypeRef] = field(default_factory=list)
    fields: list[JavaField] = field(default_factory=list)
    methods: list[JavaMethod] = field(default_factory=list)
    nested_classes: list[JavaClass] = field(default_factory=list)
    source: SourceUnit | None = field(default=None, repr=False)
    parent: JavaClass | None = field(default=None, repr=False)
    line: int | None = None

    @property
    def is_interface(self) -> bool:
        return self.kind in ("interface", "annotation")

    @property
    def is_enum(self) -> bool:
        return self.kind == "enum"

    @property
    def is_annotation(self) -> bool:
        return self.kind == "annotation"

    @property
    def package(self) -> str:
        return self.source.package if self.source is not None else ""

    @property
    def full_name(self) -> str:
        if self.parent is not None:
            return f"{self.parent.full_name}.{self.name}"
        if self.package:
            return f"{self.package}.{self.name}"
        return self.name

    @property
    def registry(self) -> Registry | None:
        return self.source.registry if self.source is not None else None

    @property
    def constructors(self) -> list[JavaMethod]:
        return [m for m in self.methods if m.constructor]

    def get_superclass(self) -> TypeRef | None:
        """Declared superclass, or ``java.lang.Object`` for plain classes.

        Interfaces never have a superclass, and neither does the root object
        type itself.
        """
        if self.superclass is not None:
            return self.superclass
        if self.is_interface or self.full_name == OBJECT:
            return None
        return TypeRef(OBJECT, owner=self.source)

    def get_super_java_class(self) -> JavaClass | None:
        ref = self.get_superclass()
        return ref.resolve_class() if ref is not None else None

    def get_field_by_name(self, name: str) -> JavaField | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def get_methods_by_name(self, name: str) -> list[JavaMethod]:
        return [m for m in self.methods if m.name == name]

    def get_method_by_signature(
        self, name: str, param_types: Sequence[TypeRef | str] | None = None
    ) -> JavaMethod | None:
        for method in self.methods:
            if method.matches(name, param_types):
                return method
        return None

    def get_nested_class_by_name(self, name: str) -> JavaClass | None:
        head, _, rest = name.partition(".")
        for nested in self.nested_classes:
            if nested.name == head:
                return nested.get_nested_class_by_name(rest) if rest else nested
        return None

    def iter_classes(self) -> Iterator[JavaClass]:
        """Yield this class and every nested class, depth first."""
        yield self
        for nested in self.nested_classes:
            yield from nested.iter_classes()

    def is_a(self, fqn: str) -> bool:
        from javamodel.hierarchy import is_a

        return is_a(self, fqn)

    @property
    def bean_properties(self) -> list[BeanProperty]:
        from javamodel.beans import bean_properties

        return bean_properties(self)

    def get_property(self, name: str) -> BeanProperty | None:
        for prop in self.bean_properties:
            if prop.name == name:
                return prop
        return None

    def get_derived_classes(self) -> list[JavaClass]:
        """Registered source classes that are-a this class, excluding itself."""
        registry = self.registry
        if registry is None:
            return []
        fqn = self.full_name
        return registry.search(lambda c: c is not self and c.is_a(fqn))


@dataclass(eq=False)
class SourceUnit:
    """One compilation unit: package, imports and the classes it declares.

    Imports are stored as written: ``a.b.C`` for single-type imports and
    ``a.b.*`` for on-demand imports.  ``registry`` is the only field that
    changes after assembly.
    """

    package: str = ""
    imports: list[str] = field(default_factory=list)
    static_imports: list[str] = field(default_factory=list)
    classes: list[JavaClass] = field(default_factory=list)
    origin: str | None = None
    registry: Registry | None = field(default=None, repr=False)

    def resolve_type(self, name: str, scope: JavaClass | None = None) -> str | None:
        """Fully-qualified name for *name* in this unit's context, or None.

        *scope* is the class whose body the name appears in; its member
        classes and those of its enclosing classes are visible by simple name.
        """
        return resolve_type_name(name, self, scope)

    def iter_classes(self) -> Iterator[JavaClass]:
        for cls in self.classes:
            yield from cls.iter_classes()

    def get_class_by_name(self, name: str) -> JavaClass | None:
        """Look up a class declared in this unit by simple or dotted name."""
        for cls in self.iter_classes():
            if name in (cls.name, cls.full_name):
                return cls
        return None
