"""Root schema object and its entry points."""

from __future__ import annotations

from typing import Any, Callable

from structschema.core.body import ObjectBodyBuilder, SchemaTemplate, as_template
from structschema.core.descriptors import ObjectDescriptor, PropertyDescriptor
from structschema.core.document import assemble_document, dump_document
from structschema.core.errors import InvalidObjectTypeError
from structschema.core.registry import DefinitionRegistry
from structschema.core.validator import is_valid, validate


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class Schema(ObjectBodyBuilder):
    """Top-level object schema being built.

    Subclasses configure defaults with class attributes and add properties in
    `declare`. Instances expose the object-body builder interface directly over
    their own properties and definition registry.
    """

    name: str | None = None
    description: str | None = None
    additional_properties: bool = False
    strict: bool | None = True

    def __init__(
        self,
        name: str | None = None,
        *,
        description: str | None = None,
        additional_properties: bool | None = None,
        strict: bool | None = UNSET,
    ) -> None:
        self.name = name or type(self).name or type(self).__name__
        if description is not None:
            self.description = description
        if additional_properties is not None:
            self.additional_properties = additional_properties
        if strict is not UNSET:
            self.strict = strict
        super().__init__(ObjectDescriptor(additional_properties=None), DefinitionRegistry())
        self.declare()

    def declare(self) -> None:
        """Hook for subclasses to declare properties and definitions."""

    @classmethod
    def create(
        cls,
        body: Callable[["Schema"], Any] | None = None,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> "Schema":
        """Build a schema by evaluating `body` against a fresh instance."""

        instance = cls(name)
        if body is not None:
            body(instance)
        if description is not None:
            instance.description = description
        return instance

    def _child_policy(self) -> bool | None:
        return self.additional_properties

    @property
    def properties(self) -> dict[str, PropertyDescriptor]:
        return self._target.properties

    @property
    def required(self) -> list[str]:
        return self._target.required

    @property
    def definitions(self) -> DefinitionRegistry:
        return self._registry

    def template(self) -> SchemaTemplate:
        shape = self._target.model_copy(deep=True)
        shape.additional_properties = self.additional_properties
        return SchemaTemplate(
            name=self.name,
            shape=shape,
            definitions={def_name: d.model_copy(deep=True) for def_name, d in self._registry.items()},
        )

    def valid(self) -> bool:
        """Return True if the schema has no circular references."""

        return is_valid(self)

    def validate(self) -> None:
        """Raise CircularReferenceError if a reference cycle exists."""

        validate(self)

    def to_json_schema(self) -> dict:
        """Validate, then assemble the output document."""

        return assemble_document(self)

    def to_json(self, indent: int | None = 2) -> str:
        return dump_document(self.to_json_schema(), indent=indent)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, properties={list(self.properties)!r}, "
            f"definitions={self._registry.names()!r})"
        )


def template_of(value: Schema | type[Schema] | SchemaTemplate) -> SchemaTemplate:
    """Return the reusable shape of a schema for copy-by-value inlining."""

    template = as_template(value)
    if template is None:
        raise InvalidObjectTypeError(value)
    return template


def schema(
    name: str | None = None,
    body: Callable[[Schema], Any] | None = None,
    *,
    description: str | None = None,
) -> Schema:
    """Helper entry point: build a named schema from a body callable.

    An explicit `description` wins over one set inside the body.
    """

    return Schema.create(body, name=name, description=description)
