"""Tests for reference graph construction and cycle detection."""

from __future__ import annotations

import logging

import pytest

from structschema import CircularReferenceError, ROOT, Schema, ValidationError
from structschema.core.validator import ROOT_NODE, ReferenceGraph, build_reference_graph, find_cycle


def _define_user(schema: Schema) -> None:
    schema.define("user", lambda body: body.string("name"))


def test_empty_schema_is_valid() -> None:
    schema = Schema()

    assert schema.valid() is True
    schema.validate()


def test_direct_circular_reference() -> None:
    schema = Schema()
    _define_user(schema)
    schema.definitions.get("user").add_property("self_ref", schema.reference("user"))

    assert schema.valid() is False
    with pytest.raises(ValidationError, match="Circular reference detected involving 'user'"):
        schema.validate()


def test_direct_circular_reference_declared_in_body() -> None:
    schema = Schema()
    schema.define("node", lambda body: body.array("children", of="node"))

    with pytest.raises(CircularReferenceError) as excinfo:
        schema.validate()

    assert excinfo.value.definition == "node"
    assert excinfo.value.path == ["node", "node"]


def test_indirect_circular_reference() -> None:
    schema = Schema()
    _define_user(schema)
    schema.define("profile", lambda body: body.string("bio"))
    schema.definitions.get("user").add_property("profile", schema.reference("profile"))
    schema.definitions.get("profile").add_property("owner", schema.reference("user"))

    assert schema.valid() is False
    with pytest.raises(ValidationError, match="Circular reference detected involving") as excinfo:
        schema.validate()

    assert excinfo.value.path == ["user", "profile", "user"]
    assert "user -> profile -> user" in str(excinfo.value)


def test_cycle_hidden_in_union_and_array_is_found() -> None:
    schema = Schema()
    schema.define("a", lambda body: body.any_of("next", lambda alt: (alt.reference("b"), alt.null())))
    schema.define("b", lambda body: body.array("items", of="c"))
    schema.define("c", lambda body: body.object("back", of="a"))

    assert schema.valid() is False


def test_no_false_positive_for_chain() -> None:
    schema = Schema()
    schema.define("address", lambda body: body.string("street"))
    schema.define("user", lambda body: body.object("address", of="address"))
    schema.object("owner", of="user")
    schema.object("admin", of="user")

    assert schema.valid() is True
    schema.validate()


def test_diamond_references_are_valid() -> None:
    schema = Schema()
    schema.define("leaf", lambda body: body.string("v"))
    schema.define("left", lambda body: body.object("leaf", of="leaf"))
    schema.define("right", lambda body: body.object("leaf", of="leaf"))
    schema.define("top", lambda body: (body.object("l", of="left"), body.object("r", of="right")))

    assert find_cycle(build_reference_graph(schema)) is None


def test_root_reference_is_exempt() -> None:
    schema = Schema()
    schema.string("element_type", enum=["input", "button"])
    schema.object("sub_schema", of=ROOT)
    schema.define("child", lambda body: body.object("parent", of=ROOT))

    assert schema.valid() is True
    document = schema.to_json_schema()
    assert document["schema"]["properties"]["sub_schema"] == {"$ref": "#"}


def test_reference_graph_shape() -> None:
    schema = Schema()
    schema.define("a", lambda body: (body.object("x", of="b"), body.object("y", of="b")))
    schema.define("b", lambda body: body.string("v"))
    schema.array("items", of="a")
    schema.object("root", of=ROOT)

    graph = build_reference_graph(schema)

    assert graph.edges == {ROOT_NODE: ["a"], "a": ["b"], "b": []}
    assert graph.edge_count == 2
    assert graph.unresolved() == []


def test_unresolved_references_warn_but_do_not_fail(caplog) -> None:
    schema = Schema("Dangling")
    schema.object("home", of="address")

    graph = build_reference_graph(schema)
    assert graph.unresolved() == ["address"]

    with caplog.at_level(logging.WARNING, logger="structschema.core.validator"):
        schema.validate()

    assert any("address" in record.getMessage() for record in caplog.records)


def test_find_cycle_on_bare_graph() -> None:
    graph = ReferenceGraph()
    graph.add_edge("x", "y")
    graph.add_edge("y", "z")
    assert find_cycle(graph) is None

    graph.add_edge("z", "y")
    assert find_cycle(graph) == ["y", "z", "y"]


def test_validation_blocks_document_output() -> None:
    schema = Schema()
    schema.define("user", lambda body: body.object("self_ref", of="user"))

    with pytest.raises(ValidationError):
        schema.to_json_schema()
    with pytest.raises(ValidationError):
        schema.to_json()


def test_revalidation_after_mutation() -> None:
    schema = Schema()
    schema.define("user", lambda body: body.string("name"))
    assert schema.valid() is True

    schema.definitions.get("user").add_property("again", schema.reference("user"))
    assert schema.valid() is False


def _chain(length: int) -> Schema:
    schema = Schema("Chain")
    for i in range(length):
        schema.define(f"d{i}", lambda body, i=i: body.object("next", of=f"d{i + 1}"))
    schema.define(f"d{length}", lambda body: body.string("end"))
    schema.object("head", of="d0")
    return schema


def test_long_reference_chain_is_valid() -> None:
    schema = _chain(1500)

    assert schema.valid() is True
    schema.validate()
    assert len(schema.to_json_schema()["schema"]["$defs"]) == 1501


def test_long_reference_chain_closed_into_cycle() -> None:
    schema = _chain(1500)
    schema.definitions.get("d1500").add_property("back", schema.reference("d0"))

    assert schema.valid() is False
    with pytest.raises(CircularReferenceError) as excinfo:
        schema.validate()

    path = excinfo.value.path
    assert path[0] == path[-1] == "d0"
    assert len(path) == 1502
