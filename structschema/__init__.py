"""Declarative builder for structured-output JSON Schema documents."""

from structschema.core.body import AlternativeListBuilder, ObjectBodyBuilder, SchemaTemplate
from structschema.core.descriptors import ROOT
from structschema.core.errors import (
    CircularReferenceError,
    InvalidArrayTypeError,
    InvalidObjectTypeError,
    InvalidSchemaTypeError,
    SchemaError,
    ValidationError,
)
from structschema.core.schema import UNSET, Schema, schema, template_of

__all__ = [
    "ROOT",
    "UNSET",
    "AlternativeListBuilder",
    "CircularReferenceError",
    "InvalidArrayTypeError",
    "InvalidObjectTypeError",
    "InvalidSchemaTypeError",
    "ObjectBodyBuilder",
    "Schema",
    "SchemaError",
    "SchemaTemplate",
    "ValidationError",
    "schema",
    "template_of",
]
