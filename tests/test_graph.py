import json

import pytest

from conftest import extract

from codegrapher.config import DuplicatePolicy
from codegrapher.errors import OutputError
from codegrapher.graph import GraphStore
from codegrapher.models.records import (
    EntityRecord,
    MethodRecord,
    ParameterRecord,
    PropertyRecord,
)
from codegrapher.output import encode_graph, write_graph


def _entity(name: str, kind: str = "class", **kwargs) -> EntityRecord:
    return EntityRecord(name=name, kind=kind, **kwargs)


def test_replace_policy_keeps_latest_registration():
    store = GraphStore()
    first = store.register(_entity("Foo", properties=[PropertyRecord("a", "Int")]))
    second = store.register(_entity("Foo", kind="struct"))

    assert first is not second
    assert len(store) == 1
    assert store.get("Foo") is second
    assert store.get("Foo").properties == []


def test_merge_policy_unions_members_and_inheritance():
    store = GraphStore(DuplicatePolicy.MERGE)
    store.register(
        _entity(
            "Foo",
            inherited_types=["Base"],
            conformed_protocols=["A"],
            methods=[MethodRecord("one")],
        )
    )
    target = store.register(
        _entity(
            "Foo",
            kind="struct",
            inherited_types=["Base"],
            conformed_protocols=["B", "A"],
            properties=[PropertyRecord("p", "Int")],
            methods=[MethodRecord("two")],
        )
    )

    merged = store.get("Foo")
    assert target is merged
    assert merged.kind == "class"
    assert merged.inherited_types == ["Base"]
    assert merged.conformed_protocols == ["A", "B"]
    assert [m.name for m in merged.methods] == ["one", "two"]
    assert merged.properties == [PropertyRecord("p", "Int")]


def test_merge_policy_collects_extensions_of_same_type():
    store = extract(
        """
        extension Foo: Equatable {
            func a() {}
        }
        extension Foo: Hashable {
            func b() {}
        }
        """,
        policy=DuplicatePolicy.MERGE,
    )

    ext = store.get("Extension_of_Foo")
    assert ext.conformed_protocols == ["Equatable", "Hashable"]
    assert [m.name for m in ext.methods] == ["a", "b"]


def test_replace_policy_drops_earlier_extension():
    store = extract(
        """
        extension Foo: Equatable {
            func a() {}
        }
        extension Foo: Hashable {
            func b() {}
        }
        """
    )

    ext = store.get("Extension_of_Foo")
    assert ext.conformed_protocols == ["Hashable"]
    assert [m.name for m in ext.methods] == ["b"]


def test_merge_from_applies_policy_in_order():
    run = GraphStore()
    first = GraphStore()
    first.register(_entity("Foo", methods=[MethodRecord("old")]))
    first.register(_entity("Bar"))
    second = GraphStore()
    second.register(_entity("Foo", methods=[MethodRecord("new")]))

    run.merge_from(first)
    run.merge_from(second)

    assert run.names() == ["Bar", "Foo"]
    assert [m.name for m in run.get("Foo").methods] == ["new"]
    assert "Bar" in run
    assert "Baz" not in run


def test_encoded_graph_is_sorted_and_omits_absent_fields():
    store = GraphStore()
    store.register(_entity("Zeta"))
    store.register(
        _entity(
            "Alpha",
            inherited_types=["Base"],
            properties=[PropertyRecord("x")],
            methods=[
                MethodRecord(
                    "f",
                    parameters=[
                        ParameterRecord(internal_name="x", type="Int"),
                        ParameterRecord(internal_name="y", external_name="label"),
                    ],
                    calls=["g", "g"],
                )
            ],
        )
    )

    text = encode_graph(store)
    payload = json.loads(text)

    assert list(payload) == ["Alpha", "Zeta"]
    alpha = payload["Alpha"]
    assert alpha == {
        "name": "Alpha",
        "kind": "class",
        "inheritedTypes": ["Base"],
        "conformedProtocols": [],
        "properties": [{"name": "x", "type": "Unknown"}],
        "methods": [
            {
                "name": "f",
                "parameters": [
                    {"internalName": "x", "type": "Int"},
                    {"externalName": "label", "internalName": "y"},
                ],
                "calls": ["g", "g"],
            }
        ],
    }


def test_write_graph_creates_parent_directories(tmp_path):
    store = GraphStore()
    store.register(_entity("Foo"))
    target = tmp_path / "out" / "codegraph.json"

    assert write_graph(store, target) == target
    assert json.loads(target.read_text())["Foo"]["kind"] == "class"


def test_write_graph_reports_unwritable_target(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(OutputError):
        write_graph(GraphStore(), blocker / "codegraph.json")
