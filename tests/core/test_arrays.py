"""Tests for array properties."""

from __future__ import annotations

import logging

import pytest

from structschema import InvalidArrayTypeError, Schema


class PersonSchema(Schema):
    def declare(self) -> None:
        self.string("name")
        self.integer("age")


def test_arrays_of_primitive_kinds() -> None:
    schema = Schema()
    schema.array("strings", of="string", description="String array")
    schema.array("numbers", of="number")
    schema.array("integers", of="integer")
    schema.array("booleans", of="boolean")

    props = {name: d.to_schema() for name, d in schema.properties.items()}
    assert props["strings"] == {"type": "array", "description": "String array", "items": {"type": "string"}}
    assert props["numbers"] == {"type": "array", "items": {"type": "number"}}
    assert props["integers"] == {"type": "array", "items": {"type": "integer"}}
    assert props["booleans"] == {"type": "array", "items": {"type": "boolean"}}


def test_array_item_count_constraints() -> None:
    schema = Schema()
    schema.array("strings", of="string", min_items=1, max_items=10)

    assert schema.properties["strings"].to_schema() == {
        "type": "array",
        "items": {"type": "string"},
        "minItems": 1,
        "maxItems": 10,
    }


def test_array_of_object_body() -> None:
    schema = Schema()

    def item(body):
        body.string("name")
        body.integer("value")

    schema.array("items", lambda alt: alt.object(item))

    assert schema.properties["items"].to_schema()["items"] == {
        "type": "object",
        "properties": {"name": {"type": "string"}, "value": {"type": "integer"}},
        "required": ["name", "value"],
        "additionalProperties": False,
    }


def test_array_body_uses_first_alternative() -> None:
    schema = Schema()

    def items(alt):
        alt.string()
        alt.number()

    schema.array("values", body=items)

    assert schema.properties["values"].to_schema() == {"type": "array", "items": {"type": "string"}}


def test_array_of_union_items() -> None:
    schema = Schema()
    schema.array("items", body=lambda alt: alt.any_of(lambda u: (u.string(), u.number())))

    union = schema.properties["items"].to_schema()["items"]
    assert [option["type"] for option in union["anyOf"]] == ["string", "number"]


def test_array_of_definition_name() -> None:
    schema = Schema()
    schema.define("product", lambda body: (body.string("name"), body.number("price")))
    schema.array("products", of="product")

    assert schema.properties["products"].to_schema() == {
        "type": "array",
        "items": {"$ref": "#/$defs/product"},
    }


def test_array_of_undefined_name_is_accepted_at_build_time() -> None:
    schema = Schema()
    schema.array("items", of="undefined_reference")

    assert schema.properties["items"].to_schema()["items"] == {"$ref": "#/$defs/undefined_reference"}


def test_array_of_schema_class_inlines_items() -> None:
    schema = Schema()
    schema.array("team_members", of=PersonSchema, description="List of team members")

    assert schema.properties["team_members"].to_schema() == {
        "type": "array",
        "description": "List of team members",
        "items": {
            "type": "object",
            "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
            "required": ["name", "age"],
            "additionalProperties": False,
        },
    }
    assert len(schema.definitions) == 0


@pytest.mark.parametrize("value", [123, 1.5, ("string",), None])
def test_invalid_array_types(value) -> None:
    schema = Schema()
    with pytest.raises(InvalidArrayTypeError, match=r"Invalid array type: "):
        schema.array("items", of=value)
    assert "items" not in schema.properties


def test_invalid_array_type_message_names_value() -> None:
    schema = Schema()
    with pytest.raises(InvalidArrayTypeError) as excinfo:
        schema.array("items", of=123)

    assert str(excinfo.value).startswith("Invalid array type: 123.")
    assert excinfo.value.value == 123


def test_array_body_keeps_first_alternative_and_logs_the_rest(caplog) -> None:
    schema = Schema()

    with caplog.at_level(logging.DEBUG, logger="structschema.core.body"):
        schema.array("values", lambda alt: (alt.string(), alt.integer()))

    assert schema.properties["values"].to_schema()["items"] == {"type": "string"}
    assert any("2 alternatives" in record.getMessage() for record in caplog.records)
