"""Property descriptor models for schema fragments."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from structschema.core.errors import InvalidSchemaTypeError

ROOT = "root"
ROOT_POINTER = "#"
DEFS_PREFIX = "#/$defs/"

PRIMITIVE_KINDS = ("string", "number", "integer", "boolean", "null")


class _Descriptor(BaseModel):
    """Shared emission behaviour for descriptor kinds."""

    model_config = ConfigDict(populate_by_name=True)

    def to_schema(self) -> dict:
        """Return the JSON Schema fragment with absent options omitted."""

        payload = self.model_dump(by_alias=True, exclude_none=True, exclude={"kind"})
        return {"type": self.kind, **payload}


class StringDescriptor(_Descriptor):
    """String field."""

    kind: Literal["string"] = Field(default="string", frozen=True)
    enum: Any = None
    description: str | None = None
    min_length: Any = Field(default=None, alias="minLength")
    max_length: Any = Field(default=None, alias="maxLength")
    pattern: Any = None
    format: Any = None


class NumberDescriptor(_Descriptor):
    """Floating point field."""

    kind: Literal["number"] = Field(default="number", frozen=True)
    description: str | None = None
    minimum: Any = None
    maximum: Any = None
    multiple_of: Any = Field(default=None, alias="multipleOf")


class IntegerDescriptor(_Descriptor):
    """Integer field."""

    kind: Literal["integer"] = Field(default="integer", frozen=True)
    description: str | None = None
    minimum: Any = None
    maximum: Any = None
    multiple_of: Any = Field(default=None, alias="multipleOf")


class BooleanDescriptor(_Descriptor):
    kind: Literal["boolean"] = Field(default="boolean", frozen=True)
    description: str | None = None


class NullDescriptor(_Descriptor):
    kind: Literal["null"] = Field(default="null", frozen=True)
    description: str | None = None


class ObjectDescriptor(_Descriptor):
    """Object with ordered child properties.

    This is the only descriptor kind that accumulates children while a schema is
    being built.
    """

    kind: Literal["object"] = Field(default="object", frozen=True)
    properties: dict[str, PropertyDescriptor] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    additional_properties: bool | None = False
    description: str | None = None

    def add_property(self, name: str, descriptor: PropertyDescriptor, *, required: bool = True) -> None:
        """Insert or replace a named child and update the required list."""

        self.properties[name] = descriptor
        if required and name not in self.required:
            self.required.append(name)
        elif not required and name in self.required:
            self.required.remove(name)

    def to_schema(self) -> dict:
        out: dict = {
            "type": "object",
            "properties": {name: child.to_schema() for name, child in self.properties.items()},
            "required": list(self.required),
        }
        if self.additional_properties is not None:
            out["additionalProperties"] = self.additional_properties
        if self.description is not None:
            out["description"] = self.description
        return out


class ArrayDescriptor(_Descriptor):
    """Array whose elements follow a single item descriptor."""

    kind: Literal["array"] = Field(default="array", frozen=True)
    description: str | None = None
    items: PropertyDescriptor | None = None
    min_items: Any = Field(default=None, alias="minItems")
    max_items: Any = Field(default=None, alias="maxItems")

    def to_schema(self) -> dict:
        out: dict = {"type": "array"}
        if self.description is not None:
            out["description"] = self.description
        if self.items is not None:
            out["items"] = self.items.to_schema()
        if self.min_items is not None:
            out["minItems"] = self.min_items
        if self.max_items is not None:
            out["maxItems"] = self.max_items
        return out


class AnyOfDescriptor(_Descriptor):
    """Union where any alternative may match; alternatives keep declaration order."""

    kind: Literal["anyOf"] = Field(default="anyOf", frozen=True)
    alternatives: list[PropertyDescriptor] = Field(default_factory=list)
    description: str | None = None

    def to_schema(self) -> dict:
        out: dict = {}
        if self.description is not None:
            out["description"] = self.description
        out[self.kind] = [alt.to_schema() for alt in self.alternatives]
        return out


class OneOfDescriptor(AnyOfDescriptor):
    """Union where exactly one alternative must match."""

    kind: Literal["oneOf"] = Field(default="oneOf", frozen=True)  # type: ignore[assignment]


class RefDescriptor(_Descriptor):
    """Named pointer into `$defs`, or to the root schema.

    The target is resolved by name at validation time, never when the
    reference is created.
    """

    kind: Literal["$ref"] = Field(default="$ref", frozen=True)
    target: str
    description: str | None = None

    @property
    def points_to_root(self) -> bool:
        return self.target == ROOT

    @property
    def pointer(self) -> str:
        if self.points_to_root:
            return ROOT_POINTER
        return f"{DEFS_PREFIX}{self.target}"

    def to_schema(self) -> dict:
        out: dict = {"$ref": self.pointer}
        if self.description is not None:
            out["description"] = self.description
        return out


PropertyDescriptor = Annotated[
    Union[
        StringDescriptor,
        NumberDescriptor,
        IntegerDescriptor,
        BooleanDescriptor,
        NullDescriptor,
        ObjectDescriptor,
        ArrayDescriptor,
        AnyOfDescriptor,
        OneOfDescriptor,
        RefDescriptor,
    ],
    Field(discriminator="kind"),
]

for _model in (ObjectDescriptor, ArrayDescriptor, AnyOfDescriptor, OneOfDescriptor):
    _model.model_rebuild()

_PRIMITIVE_MODELS: dict[str, type[_Descriptor]] = {
    "string": StringDescriptor,
    "number": NumberDescriptor,
    "integer": IntegerDescriptor,
    "boolean": BooleanDescriptor,
    "null": NullDescriptor,
}


def iter_children(descriptor: PropertyDescriptor):
    """Yield the direct child descriptors of a descriptor."""

    if isinstance(descriptor, ObjectDescriptor):
        yield from descriptor.properties.values()
    elif isinstance(descriptor, ArrayDescriptor):
        if descriptor.items is not None:
            yield descriptor.items
    elif isinstance(descriptor, AnyOfDescriptor):
        yield from descriptor.alternatives


def iter_references(descriptor: PropertyDescriptor):
    """Yield every RefDescriptor reachable from a descriptor, depth first."""

    if isinstance(descriptor, RefDescriptor):
        yield descriptor
        return
    for child in iter_children(descriptor):
        yield from iter_references(child)


def _ref_target(pointer: str) -> str:
    if pointer == ROOT_POINTER:
        return ROOT
    if pointer.startswith(DEFS_PREFIX):
        return pointer[len(DEFS_PREFIX):]
    raise InvalidSchemaTypeError(pointer)


def descriptor_from_schema(payload: dict) -> PropertyDescriptor:
    """Parse an emitted JSON Schema fragment back into a descriptor."""

    description = payload.get("description")

    if "$ref" in payload:
        return RefDescriptor(target=_ref_target(payload["$ref"]), description=description)

    for union_key, model in (("anyOf", AnyOfDescriptor), ("oneOf", OneOfDescriptor)):
        if union_key in payload:
            return model(
                alternatives=[descriptor_from_schema(alt) for alt in payload[union_key]],
                description=description,
            )

    kind = payload.get("type")
    if kind == "object":
        return ObjectDescriptor(
            properties={
                name: descriptor_from_schema(child)
                for name, child in payload.get("properties", {}).items()
            },
            required=list(payload.get("required", [])),
            additional_properties=payload.get("additionalProperties"),
            description=description,
        )
    if kind == "array":
        items = payload.get("items")
        return ArrayDescriptor(
            description=description,
            items=descriptor_from_schema(items) if isinstance(items, dict) else None,
            min_items=payload.get("minItems"),
            max_items=payload.get("maxItems"),
        )
    model = _PRIMITIVE_MODELS.get(kind) if isinstance(kind, str) else None
    if model is None:
        raise InvalidSchemaTypeError(kind)
    fields = {key: value for key, value in payload.items() if key != "type"}
    return model.model_validate(fields)
