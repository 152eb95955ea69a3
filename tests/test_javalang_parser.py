from __future__ import annotations

import pytest

from javamodel import ParseError
from javamodel.parsers import JavalangParser, get_parser

SOURCE = """\
package com.example.shapes;

import java.util.List;
import java.util.*;
import static java.lang.Math.max;

/** A shape. */
public abstract class Shape<T extends Number> implements Comparable<Shape<T>>, java.io.Serializable {
    public static final int SIDES = 0;
    private List<String> tags, labels[];
    protected Map.Entry<String, T> entry;

    public Shape(String name, int... sizes) throws IllegalArgumentException {}

    public abstract double area();

    public <R> List<R> map(java.util.function.Function<T, R> fn) { return null; }

    public static class Builder {
        private Builder next;
    }

    public enum Kind implements Runnable {
        ROUND, SQUARE;
        public void run() {}
    }

    interface Visitor extends Runnable, Comparable<Visitor> {}

    @interface Marker {
        String value();
        int priority() default 1;
    }
}
"""


@pytest.fixture
def unit():
    return JavalangParser().parse(SOURCE, origin="Shape.java")


def test_package_and_imports(unit):
    assert unit.package == "com.example.shapes"
    assert [(i.name, i.static, i.wildcard) for i in unit.imports] == [
        ("java.util.List", False, False),
        ("java.util", False, True),
        ("java.lang.Math.max", True, False),
    ]


def test_class_header(unit):
    (shape,) = unit.types
    assert shape.kind == "class"
    assert shape.name == "Shape"
    assert shape.modifiers == ["public", "abstract"]
    assert shape.superclass is None
    assert [i.name for i in shape.interfaces] == ["Comparable", "java.io.Serializable"]


def test_fields(unit):
    shape = unit.types[0]
    fields = {f.name: f for f in shape.fields}

    assert fields["SIDES"].modifiers == ["public", "static", "final"]
    assert fields["SIDES"].type.name == "int"
    assert (fields["tags"].type.name, fields["tags"].type.dimensions) == ("List", 0)
    assert fields["labels"].type.dimensions == 1
    assert fields["entry"].type.name == "Map.Entry"


def test_methods_and_constructors(unit):
    shape = unit.types[0]
    ctor, area, map_method = shape.methods

    assert ctor.constructor and ctor.returns is None
    assert [(p.name, p.type.name, p.varargs) for p in ctor.params] == [
        ("name", "String", False),
        ("sizes", "int", True),
    ]
    assert ctor.params[1].type.dimensions == 1
    assert [e.name for e in ctor.exceptions] == ["IllegalArgumentException"]
    assert area.returns.name == "double"
    assert area.modifiers == ["public", "abstract"]
    assert map_method.returns.name == "List"
    assert map_method.params[0].type.name == "java.util.function.Function"


def test_nested_types(unit):
    builder, kind, visitor, marker = unit.types[0].nested

    assert builder.kind == "class"
    assert builder.modifiers == ["public", "static"]
    assert builder.fields[0].type.name == "Builder"

    assert kind.kind == "enum"
    assert [f.name for f in kind.fields] == ["ROUND", "SQUARE"]
    assert kind.fields[0].type.name == "Kind"
    assert [m.name for m in kind.methods] == ["run"]
    assert [i.name for i in kind.interfaces] == ["Runnable"]

    assert visitor.kind == "interface"
    assert [i.name for i in visitor.interfaces] == ["Runnable", "Comparable"]

    assert marker.kind == "annotation"
    assert [m.name for m in marker.methods] == ["value", "priority"]


def test_syntax_error_location():
    with pytest.raises(ParseError) as excinfo:
        JavalangParser().parse("package a;\n\nclass A { int x = ; }\n", origin="A.java")
    error = excinfo.value
    assert error.line == 3
    assert error.origin == "A.java"
    assert str(error).startswith("A.java:3")


def test_get_parser_default():
    assert get_parser().name == "javalang"
