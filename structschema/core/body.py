"""Body builders used by composite declarations.

Two explicit builder interfaces are used for callbacks:

- `ObjectBodyBuilder` declares named properties on an object.
- `AlternativeListBuilder` appends unnamed alternatives to a union (or to an
  array item list).

Both share one definition registry with the schema that created them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from structschema.core.builders import (
    boolean_schema,
    build_primitive,
    integer_schema,
    is_primitive_kind,
    null_schema,
    number_schema,
    string_schema,
)
from structschema.core.descriptors import (
    AnyOfDescriptor,
    ArrayDescriptor,
    ObjectDescriptor,
    OneOfDescriptor,
    PropertyDescriptor,
    RefDescriptor,
)
from structschema.core.errors import InvalidArrayTypeError, InvalidObjectTypeError
from structschema.core.registry import DefinitionRegistry

logger = logging.getLogger(__name__)

ObjectBody = Callable[["ObjectBodyBuilder"], Any]
AlternativesBody = Callable[["AlternativeListBuilder"], Any]


@dataclass(frozen=True)
class SchemaTemplate:
    """Snapshot of a schema's shape, used for copy-by-value inlining.

    `definitions` holds the source schema's registry entries so that `$ref`s
    inside the copied shape can be resolved wherever the shape is used.
    """

    name: str
    shape: ObjectDescriptor
    definitions: dict[str, PropertyDescriptor] = field(default_factory=dict)

    def to_descriptor(self, *, description: str | None = None) -> ObjectDescriptor:
        """Return an independent copy of the shape for one use site."""

        copy = self.shape.model_copy(deep=True)
        if description is not None:
            copy.description = description
        return copy


def as_template(value: object) -> SchemaTemplate | None:
    """Coerce a template, schema instance or schema class to a template."""

    if isinstance(value, SchemaTemplate):
        return value
    if isinstance(value, ObjectBodyBuilder):
        return value.template()
    if isinstance(value, type) and issubclass(value, ObjectBodyBuilder):
        return value().template()
    return None


class _BuilderBase:
    def __init__(self, registry: DefinitionRegistry, *, additional_properties: bool | None = False) -> None:
        self._registry = registry
        self._policy = additional_properties

    def _child_policy(self) -> bool | None:
        return self._policy

    def _use_template(self, value: object) -> SchemaTemplate | None:
        """Coerce `value` to a template and register the definitions it carries."""

        template = as_template(value)
        if template is None:
            return None
        for def_name, descriptor in template.definitions.items():
            self._registry.define(def_name, descriptor.model_copy(deep=True))
        return template

    def _object_descriptor(
        self,
        body: ObjectBody | None,
        *,
        of: object = None,
        description: str | None = None,
        additional_properties: bool | None = None,
    ) -> PropertyDescriptor:
        if of is not None:
            if isinstance(of, str):
                return RefDescriptor(target=of, description=description)
            template = self._use_template(of)
            if template is None:
                raise InvalidObjectTypeError(of)
            descriptor = template.to_descriptor(description=description)
            if additional_properties is not None:
                descriptor.additional_properties = additional_properties
            return descriptor

        policy = self._child_policy() if additional_properties is None else additional_properties
        target = ObjectDescriptor(additional_properties=policy, description=description)
        child = ObjectBodyBuilder(target, self._registry, additional_properties=self._child_policy())
        if body is not None:
            body(child)
        if child.referenced is not None and not target.properties:
            return RefDescriptor(
                target=child.referenced.target,
                description=description if description is not None else child.referenced.description,
            )
        return target

    def _array_descriptor(
        self,
        of: object,
        body: AlternativesBody | None,
        *,
        description: str | None = None,
        min_items: Any = None,
        max_items: Any = None,
    ) -> ArrayDescriptor:
        if body is None and callable(of) and not isinstance(of, type):
            of, body = None, of
        return ArrayDescriptor(
            description=description,
            items=self._array_items(of, body),
            min_items=min_items,
            max_items=max_items,
        )

    def _array_items(self, of: object, body: AlternativesBody | None) -> PropertyDescriptor | None:
        if body is not None:
            alternatives = self._collect(body)
            if len(alternatives) > 1:
                logger.debug("Array body appended %d alternatives; using the first as items", len(alternatives))
            return alternatives[0] if alternatives else None
        if is_primitive_kind(of):
            return build_primitive(of)
        if isinstance(of, str):
            return RefDescriptor(target=of)
        template = self._use_template(of)
        if template is not None:
            return template.to_descriptor()
        raise InvalidArrayTypeError(of)

    def _collect(self, body: AlternativesBody) -> list[PropertyDescriptor]:
        collector = AlternativeListBuilder(self._registry, additional_properties=self._child_policy())
        body(collector)
        return collector.alternatives

    def _union_descriptor(
        self,
        model: type[AnyOfDescriptor],
        body: AlternativesBody,
        *,
        description: str | None = None,
        append_null: bool = False,
    ) -> AnyOfDescriptor:
        alternatives = self._collect(body)
        if append_null:
            alternatives.append(null_schema())
        return model(alternatives=alternatives, description=description)

    def reference(self, name: str, *, description: str | None = None) -> RefDescriptor:
        """Return a `$ref` to a definition name (or to the root schema).

        The name is not checked against the registry here.
        """

        return RefDescriptor(target=name, description=description)


class ObjectBodyBuilder(_BuilderBase):
    """Builder that declares named properties onto an object descriptor."""

    def __init__(
        self,
        target: ObjectDescriptor | None = None,
        registry: DefinitionRegistry | None = None,
        *,
        additional_properties: bool | None = False,
    ) -> None:
        super().__init__(
            registry if registry is not None else DefinitionRegistry(),
            additional_properties=additional_properties,
        )
        self._target = target if target is not None else ObjectDescriptor(
            additional_properties=additional_properties
        )
        self.referenced: RefDescriptor | None = None

    def _add(self, name: str, descriptor: PropertyDescriptor, required: bool) -> PropertyDescriptor:
        self._target.add_property(name, descriptor, required=required)
        return descriptor

    def string(
        self,
        name: str,
        description: str | None = None,
        *,
        required: bool = True,
        enum: Any = None,
        min_length: Any = None,
        max_length: Any = None,
        pattern: Any = None,
        format: Any = None,
    ) -> PropertyDescriptor:
        descriptor = string_schema(
            description=description,
            enum=enum,
            min_length=min_length,
            max_length=max_length,
            pattern=pattern,
            format=format,
        )
        return self._add(name, descriptor, required)

    def number(
        self,
        name: str,
        description: str | None = None,
        *,
        required: bool = True,
        minimum: Any = None,
        maximum: Any = None,
        multiple_of: Any = None,
    ) -> PropertyDescriptor:
        descriptor = number_schema(
            description=description, minimum=minimum, maximum=maximum, multiple_of=multiple_of
        )
        return self._add(name, descriptor, required)

    def integer(
        self,
        name: str,
        description: str | None = None,
        *,
        required: bool = True,
        minimum: Any = None,
        maximum: Any = None,
        multiple_of: Any = None,
    ) -> PropertyDescriptor:
        descriptor = integer_schema(
            description=description, minimum=minimum, maximum=maximum, multiple_of=multiple_of
        )
        return self._add(name, descriptor, required)

    def boolean(self, name: str, description: str | None = None, *, required: bool = True) -> PropertyDescriptor:
        return self._add(name, boolean_schema(description=description), required)

    def null(self, name: str, description: str | None = None, *, required: bool = True) -> PropertyDescriptor:
        return self._add(name, null_schema(description=description), required)

    def object(
        self,
        name: str,
        body: ObjectBody | None = None,
        *,
        of: object = None,
        description: str | None = None,
        required: bool = True,
        additional_properties: bool | None = None,
    ) -> PropertyDescriptor:
        """Declare an object property.

        `of` may be a definition name (emits `$ref`), or a template, schema
        instance or schema class (copied inline). Otherwise `body` is evaluated
        against a fresh ObjectBodyBuilder.
        """

        descriptor = self._object_descriptor(
            body, of=of, description=description, additional_properties=additional_properties
        )
        return self._add(name, descriptor, required)

    def array(
        self,
        name: str,
        of: object = None,
        body: AlternativesBody | None = None,
        *,
        description: str | None = None,
        required: bool = True,
        min_items: Any = None,
        max_items: Any = None,
    ) -> PropertyDescriptor:
        """Declare an array property.

        Items come from `of` (primitive kind name, definition name, or template)
        or from the first alternative appended by `body`. Any further
        alternatives are dropped.
        """

        descriptor = self._array_descriptor(
            of, body, description=description, min_items=min_items, max_items=max_items
        )
        return self._add(name, descriptor, required)

    def any_of(
        self,
        name: str,
        body: AlternativesBody,
        *,
        description: str | None = None,
        required: bool = True,
    ) -> PropertyDescriptor:
        descriptor = self._union_descriptor(AnyOfDescriptor, body, description=description)
        return self._add(name, descriptor, required)

    def one_of(
        self,
        name: str,
        body: AlternativesBody,
        *,
        description: str | None = None,
        required: bool = True,
    ) -> PropertyDescriptor:
        descriptor = self._union_descriptor(OneOfDescriptor, body, description=description)
        return self._add(name, descriptor, required)

    def optional(self, name: str, body: AlternativesBody, *, description: str | None = None) -> PropertyDescriptor:
        """Declare `anyOf[<body alternatives>, null]`, left out of `required`."""

        descriptor = self._union_descriptor(
            AnyOfDescriptor, body, description=description, append_null=True
        )
        return self._add(name, descriptor, False)

    def define(
        self,
        name: str,
        body: ObjectBody | None = None,
        *,
        of: object = None,
        description: str | None = None,
    ) -> RefDescriptor:
        """Register a named definition and return a reference to it.

        No property is added to this object.
        """

        if of is not None:
            template = self._use_template(of)
            if template is None:
                raise InvalidObjectTypeError(of)
            descriptor = template.to_descriptor(description=description)
        else:
            descriptor = ObjectDescriptor(
                additional_properties=self._child_policy(), description=description
            )
            if body is not None:
                body(ObjectBodyBuilder(descriptor, self._registry, additional_properties=self._child_policy()))
        self._registry.define(name, descriptor)
        return RefDescriptor(target=name)

    def reference(self, name: str, *, description: str | None = None) -> RefDescriptor:
        ref = super().reference(name, description=description)
        self.referenced = ref
        return ref

    def inline(self, value: object) -> None:
        """Copy another schema's properties and required names into this object."""

        template = self._use_template(value)
        if template is None:
            raise InvalidObjectTypeError(value)
        shape = template.to_descriptor()
        for prop_name, descriptor in shape.properties.items():
            self._target.add_property(prop_name, descriptor, required=prop_name in shape.required)

    def template(self) -> SchemaTemplate:
        """Snapshot the current shape for inlining elsewhere."""

        return SchemaTemplate(
            name="Schema",
            shape=self._target.model_copy(deep=True),
            definitions={name: d.model_copy(deep=True) for name, d in self._registry.items()},
        )


class AlternativeListBuilder(_BuilderBase):
    """Builder whose calls append unnamed alternatives in declaration order."""

    def __init__(self, registry: DefinitionRegistry, *, additional_properties: bool | None = False) -> None:
        super().__init__(registry, additional_properties=additional_properties)
        self.alternatives: list[PropertyDescriptor] = []

    def _append(self, descriptor: PropertyDescriptor) -> PropertyDescriptor:
        self.alternatives.append(descriptor)
        return descriptor

    def string(self, description: str | None = None, **options: Any) -> PropertyDescriptor:
        return self._append(string_schema(description=description, **options))

    def number(self, description: str | None = None, **options: Any) -> PropertyDescriptor:
        return self._append(number_schema(description=description, **options))

    def integer(self, description: str | None = None, **options: Any) -> PropertyDescriptor:
        return self._append(integer_schema(description=description, **options))

    def boolean(self, description: str | None = None, **options: Any) -> PropertyDescriptor:
        return self._append(boolean_schema(description=description, **options))

    def null(self, description: str | None = None, **options: Any) -> PropertyDescriptor:
        return self._append(null_schema(description=description, **options))

    def object(
        self,
        body: ObjectBody | None = None,
        *,
        of: object = None,
        description: str | None = None,
        additional_properties: bool | None = None,
    ) -> PropertyDescriptor:
        return self._append(
            self._object_descriptor(
                body, of=of, description=description, additional_properties=additional_properties
            )
        )

    def array(
        self,
        of: object = None,
        body: AlternativesBody | None = None,
        *,
        description: str | None = None,
        min_items: Any = None,
        max_items: Any = None,
    ) -> PropertyDescriptor:
        return self._append(
            self._array_descriptor(
                of, body, description=description, min_items=min_items, max_items=max_items
            )
        )

    def any_of(self, body: AlternativesBody, *, description: str | None = None) -> PropertyDescriptor:
        return self._append(self._union_descriptor(AnyOfDescriptor, body, description=description))

    def one_of(self, body: AlternativesBody, *, description: str | None = None) -> PropertyDescriptor:
        return self._append(self._union_descriptor(OneOfDescriptor, body, description=description))

    def optional(self, body: AlternativesBody, *, description: str | None = None) -> PropertyDescriptor:
        return self._append(
            self._union_descriptor(AnyOfDescriptor, body, description=description, append_null=True)
        )

    def reference(self, name: str, *, description: str | None = None) -> RefDescriptor:
        ref = super().reference(name, description=description)
        self._append(ref)
        return ref
