from __future__ import annotations

import pytest


@pytest.fixture
def property_class(jdk_registry):
    jdk_registry.add_source(
        """
        package x;
        public class PropertyClass {
            public static String getFoo() { return null; }
            public boolean isBar() { return true; }
            public void setBar(boolean bar) {}
            public void setOnlyWrite(int value) {}
            public Boolean isBoxed() { return null; }
            public String get() { return null; }
            public void getNothing() {}
            public int getIndexed(int i) { return i; }
            public int setReturning(int i) { return i; }
            public PropertyClass() {}
        }
        """
    )
    return jdk_registry.get_class_by_name("x.PropertyClass")


def test_property_names_in_declaration_order(property_class):
    assert [p.name for p in property_class.bean_properties] == ["foo", "bar", "onlyWrite"]


def test_static_accessor_forms_a_property(property_class):
    foo = property_class.get_property("foo")
    assert foo.accessor.is_static
    assert foo.mutator is None
    assert foo.type.full_name == "java.lang.String"


def test_accessor_and_mutator_pair(property_class):
    bar = property_class.get_property("bar")
    assert bar.accessor.name == "isBar"
    assert bar.mutator.name == "setBar"
    assert str(bar.type) == "boolean"


def test_mutator_only(property_class):
    prop = property_class.get_property("onlyWrite")
    assert prop.accessor is None
    assert prop.type.full_name == "int"


def test_non_conforming_methods_are_ignored(property_class):
    for name in ("boxed", "", "nothing", "indexed", "returning"):
        assert property_class.get_property(name) is None
