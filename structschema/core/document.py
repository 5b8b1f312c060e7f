"""Assemble the structured-output document for a schema."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from structschema.core.validator import validate

if TYPE_CHECKING:
    from structschema.core.schema import Schema


def assemble_document(schema: "Schema") -> dict:
    """Validate `schema` and return its output document.

    Nothing is returned when validation fails; the validation error propagates.
    """

    validate(schema)

    body: dict = {
        "type": "object",
        "properties": {name: child.to_schema() for name, child in schema.properties.items()},
        "required": list(schema.required),
        "additionalProperties": schema.additional_properties,
    }
    if schema.strict is not None:
        body["strict"] = schema.strict
    if schema.definitions:
        body["$defs"] = schema.definitions.to_schema()

    return {
        "name": schema.name,
        "description": schema.description,
        "schema": body,
    }


def dump_document(document: dict, indent: int | None = 2) -> str:
    """Encode an assembled document as JSON text."""

    return json.dumps(document, ensure_ascii=False, indent=indent)
