from __future__ import annotations

import io
import pickle

import pytest

from javamodel import CatalogResolver, PersistenceError, Registry
from javamodel.persistence import FORMAT, VERSION

SOURCES = [
    """
    package p;
    import java.util.List;
    public interface Z extends List {}
    """,
    """
    package p;
    public class Outer extends Base {
        private int count;
        public Outer(String name) {}
        public static class Inner { Outer back; }
    }
    """,
    "package p; public abstract class Base implements Z {}",
]


def _shape(cls):
    return (
        cls.full_name,
        cls.kind,
        cls.modifiers,
        cls.superclass.full_name if cls.superclass else None,
        [i.full_name for i in cls.implements],
        [(f.name, str(f.type), f.modifiers) for f in cls.fields],
        [(m.signature, str(m.returns) if m.returns else None) for m in cls.methods],
    )


@pytest.fixture
def populated(jdk_registry):
    for text in SOURCES:
        jdk_registry.add_source(text)
    return jdk_registry


def test_round_trip_through_file(populated, tmp_path):
    path = tmp_path / "model.pickle"
    populated.save(path)

    loaded = Registry.load(path)
    loaded.add_resolver(CatalogResolver.jdk())

    assert [u.origin for u in loaded.get_sources()] == [u.origin for u in populated.get_sources()]
    for cls in populated.get_classes():
        assert _shape(loaded.get_class_by_name(cls.full_name)) == _shape(cls)
    assert loaded.get_class_by_name("p.Missing") is None
    assert not (tmp_path / "model.pickle.tmp").exists()


def test_round_trip_through_stream(populated):
    buffer = io.BytesIO()
    populated.save(buffer)
    buffer.seek(0)

    loaded = Registry.load(buffer)

    assert len(loaded.get_classes()) == len(populated.get_classes())


def test_graph_shape_is_preserved(populated):
    loaded = pickle.loads(pickle.dumps(populated))
    outer = loaded.get_class_by_name("p.Outer")
    inner = loaded.get_class_by_name("p.Outer.Inner")

    assert inner.parent is outer
    assert outer.source is inner.source
    assert outer.source.registry is loaded
    assert inner.get_field_by_name("back").type.resolve_class() is outer
    assert outer.is_a("p.Base")


def test_resolvers_are_not_saved(populated):
    buffer = io.BytesIO()
    populated.save(buffer)
    buffer.seek(0)
    loaded = Registry.load(buffer)
    z = loaded.get_class_by_name("p.Z")

    assert loaded.resolvers == ()
    assert not z.is_a("java.util.List")
    assert loaded.get_class_by_name("java.util.List") is None

    loaded.add_resolver(CatalogResolver.jdk())

    assert z.is_a("java.util.List")
    assert loaded.get_class_by_name("p.Outer").is_a("java.util.Collection")


def test_loaded_registry_accepts_new_sources(populated):
    loaded = pickle.loads(pickle.dumps(populated))
    loaded.add_source("package p; class Extra extends Outer {}")
    assert loaded.get_class_by_name("p.Extra").is_a("p.Base")


def test_corrupt_data(tmp_path):
    path = tmp_path / "broken.pickle"
    path.write_bytes(b"\x00not a pickle")
    with pytest.raises(PersistenceError):
        Registry.load(path)


def test_wrong_header():
    buffer = io.BytesIO(pickle.dumps({"format": "other", "version": VERSION}))
    with pytest.raises(PersistenceError, match="Not a saved"):
        Registry.load(buffer)


def test_wrong_version():
    buffer = io.BytesIO(pickle.dumps({"format": FORMAT, "version": VERSION + 1}))
    with pytest.raises(PersistenceError, match="version"):
        Registry.load(buffer)


def test_missing_file(tmp_path):
    with pytest.raises(PersistenceError):
        Registry.load(tmp_path / "absent.pickle")


def test_failed_save_keeps_previous_file(populated, tmp_path):
    path = tmp_path / "model.pickle"
    populated.save(path)
    before = path.read_bytes()

    populated.get_classes()[0].fields.append(lambda: None)

    with pytest.raises(PersistenceError):
        populated.save(path)
    assert path.read_bytes() == before
    assert not (tmp_path / "model.pickle.tmp").exists()
