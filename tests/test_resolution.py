from __future__ import annotations

from javamodel import CatalogResolver


def _type_of(registry, fqn, field):
    return registry.get_class_by_name(fqn).get_field_by_name(field).type


def test_wildcard_imports_in_declaration_order(registry):
    registry.add_resolver(CatalogResolver({"a.Thing": {}, "b.Thing": {}}))
    registry.add_source("package x; import b.*; import a.*; class T { Thing t; }")
    assert _type_of(registry, "x.T", "t").full_name == "b.Thing"


def test_unconfirmed_wildcard_name_stays_unresolved(registry):
    registry.add_source("package x; import a.*; class T { Thing t; }")
    ref = _type_of(registry, "x.T", "t")
    assert not ref.is_resolved
    assert ref.full_name == "Thing"
    assert str(ref) == "Thing"


def test_single_type_import_is_trusted(registry):
    registry.add_source("package x; import q.Missing; class T { Missing m; }")
    ref = _type_of(registry, "x.T", "m")
    assert ref.is_resolved
    assert ref.full_name == "q.Missing"
    assert ref.resolve_class() is None


def test_same_package_wins_over_single_import(registry):
    registry.add_source("package p; class B {}")
    registry.add_source("package p; import q.B; class A { B b; }")
    assert _type_of(registry, "p.A", "b").full_name == "p.B"


def test_single_import_wins_over_wildcard(registry):
    registry.add_resolver(CatalogResolver({"w.Item": {}}))
    registry.add_source("package x; import w.*; import s.Item; class T { Item i; }")
    assert _type_of(registry, "x.T", "i").full_name == "s.Item"


def test_java_lang_fallback(jdk_registry, registry):
    source = "package x; class T { String s; }"
    jdk_registry.add_source(source)
    registry.add_source(source)

    assert _type_of(jdk_registry, "x.T", "s").full_name == "java.lang.String"
    assert not _type_of(registry, "x.T", "s").is_resolved


def test_nested_class_by_simple_name(registry):
    registry.add_source(
        """
        package x;
        class Outer {
            Inner inner;
            static class Inner { Outer back; }
        }
        """
    )
    assert _type_of(registry, "x.Outer", "inner").full_name == "x.Outer.Inner"
    assert _type_of(registry, "x.Outer.Inner", "back").full_name == "x.Outer"


def test_dotted_name_resolves_head(jdk_registry):
    jdk_registry.add_source("package x; import java.util.Map; class T { Map.Entry e; }")
    ref = _type_of(jdk_registry, "x.T", "e")
    assert ref.full_name == "java.util.Map.Entry"
    assert ref.resolve_class().kind == "interface"


def test_fully_qualified_name_is_kept(jdk_registry):
    jdk_registry.add_source("package x; class T { java.util.List items; }")
    assert _type_of(jdk_registry, "x.T", "items").full_name == "java.util.List"


def test_default_package(registry):
    registry.add_source("class Helper {}")
    registry.add_source("class User { Helper h; }")
    assert registry.get_class_by_name("Helper").full_name == "Helper"
    assert _type_of(registry, "User", "h").full_name == "Helper"


def test_static_imports_are_ignored(registry):
    registry.add_source("package x; import static q.Util.max; class T { max m; }")
    unit = registry.get_sources()[0]
    assert unit.static_imports == ["q.Util.max"]
    assert unit.imports == []
    assert not _type_of(registry, "x.T", "m").is_resolved


def test_resolution_does_not_mutate(registry):
    registry.add_source("package x; import a.*; class T { Thing t; }")
    unit = registry.get_sources()[0]
    before = (list(unit.imports), unit.package, len(registry.get_classes()))

    unit.resolve_type("Thing")
    unit.resolve_type("Thing")

    assert (list(unit.imports), unit.package, len(registry.get_classes())) == before


def test_sibling_nested_class_does_not_hide_package_class(registry):
    registry.add_source("package p; public class B {}")
    registry.add_source("package p; class A { static class B {} } class C extends B { B field; }")
    c = registry.get_class_by_name("p.C")

    assert c.superclass.full_name == "p.B"
    assert c.get_field_by_name("field").type.full_name == "p.B"


def test_enclosing_members_are_in_scope(registry):
    registry.add_source("package p; public class Base {}")
    registry.add_source(
        """
        package p;
        class Outer {
            static class Base {}
            static class Impl extends Base {
                Base other;
            }
        }
        """
    )
    impl = registry.get_class_by_name("p.Outer.Impl")

    assert impl.superclass.full_name == "p.Outer.Base"
    assert impl.get_field_by_name("other").type.full_name == "p.Outer.Base"
    assert impl.superclass.scope is registry.get_class_by_name("p.Outer")


def test_short_names_skip_exact_lookup(registry, recording_resolver):
    resolver = recording_resolver({"java.lang.String": {}})
    registry.add_resolver(resolver)
    registry.add_source("package x; class T { String s; }")

    assert _type_of(registry, "x.T", "s").full_name == "java.lang.String"
    assert resolver.calls == ["x.String", "java.lang.String"]
