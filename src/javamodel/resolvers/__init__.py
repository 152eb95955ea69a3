"""External resolvers for types outside the parsed sources."""

from javamodel.resolvers.base import Resolver, class_from_entry, split_qualified_name
from javamodel.resolvers.catalog import CatalogResolver
from javamodel.resolvers.javap import JavapResolver, parse_javap_output

__all__ = [
    "CatalogResolver",
    "JavapResolver",
    "Resolver",
    "class_from_entry",
    "parse_javap_output",
    "split_qualified_name",
]
