"""Primitive node builders.

Each builder is pure: it attaches the options that were given and omits the rest.
Option values are not range- or pattern-checked.
"""

from __future__ import annotations

from typing import Any

from structschema.core.descriptors import (
    PRIMITIVE_KINDS,
    BooleanDescriptor,
    IntegerDescriptor,
    NullDescriptor,
    NumberDescriptor,
    StringDescriptor,
)
from structschema.core.errors import InvalidSchemaTypeError


def string_schema(
    *,
    description: str | None = None,
    enum: Any = None,
    min_length: Any = None,
    max_length: Any = None,
    pattern: Any = None,
    format: Any = None,
) -> StringDescriptor:
    return StringDescriptor(
        enum=enum,
        description=description,
        min_length=min_length,
        max_length=max_length,
        pattern=pattern,
        format=format,
    )


def number_schema(
    *,
    description: str | None = None,
    minimum: Any = None,
    maximum: Any = None,
    multiple_of: Any = None,
) -> NumberDescriptor:
    return NumberDescriptor(
        description=description,
        minimum=minimum,
        maximum=maximum,
        multiple_of=multiple_of,
    )


def integer_schema(
    *,
    description: str | None = None,
    minimum: Any = None,
    maximum: Any = None,
    multiple_of: Any = None,
) -> IntegerDescriptor:
    return IntegerDescriptor(
        description=description,
        minimum=minimum,
        maximum=maximum,
        multiple_of=multiple_of,
    )


def boolean_schema(*, description: str | None = None) -> BooleanDescriptor:
    return BooleanDescriptor(description=description)


def null_schema(*, description: str | None = None) -> NullDescriptor:
    return NullDescriptor(description=description)


_BUILDERS = {
    "string": string_schema,
    "number": number_schema,
    "integer": integer_schema,
    "boolean": boolean_schema,
    "null": null_schema,
}


def is_primitive_kind(value: object) -> bool:
    """Return True if value names one of the primitive kinds."""

    return isinstance(value, str) and value in PRIMITIVE_KINDS


def build_primitive(kind: str, **options: Any):
    """Dispatch to the builder for a primitive kind name."""

    builder = _BUILDERS.get(kind) if isinstance(kind, str) else None
    if builder is None:
        raise InvalidSchemaTypeError(kind)
    return builder(**options)
