"""Structural model of Java source with import-aware type resolution."""

from javamodel.errors import JavaModelError, ParseError, PersistenceError
from javamodel.model import (
    OBJECT,
    BeanProperty,
    JavaClass,
    JavaField,
    JavaMethod,
    JavaParameter,
    SourceUnit,
    TypeRef,
)
from javamodel.pipeline import attach_default_resolvers, build_registry
from javamodel.registry import Registry
from javamodel.resolvers import CatalogResolver, JavapResolver, Resolver

__all__ = [
    "OBJECT",
    "BeanProperty",
    "CatalogResolver",
    "JavaClass",
    "JavaField",
    "JavaMethod",
    "JavaModelError",
    "JavaParameter",
    "JavapResolver",
    "ParseError",
    "PersistenceError",
    "Registry",
    "Resolver",
    "SourceUnit",
    "TypeRef",
    "attach_default_resolvers",
    "build_registry",
]
