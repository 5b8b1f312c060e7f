"""Error taxonomy for schema building and validation."""

from __future__ import annotations


class SchemaError(Exception):
    """Base class for schema builder and validator failures."""

    kind = "schema_error"


class InvalidSchemaTypeError(SchemaError):
    """A builder dispatch received an unknown primitive kind."""

    kind = "invalid_schema_type"

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(self.__str__())

    def __str__(self) -> str:
        return f"Invalid schema type: {self.value!r}."


class InvalidArrayTypeError(SchemaError):
    """An array `of` specification is not a supported form."""

    kind = "invalid_array_type"

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(self.__str__())

    def __str__(self) -> str:
        return (
            f"Invalid array type: {self.value!r}. Must be a primitive type name, "
            "a reference name, a Schema template, or an item body."
        )


class InvalidObjectTypeError(SchemaError):
    """An object `of` specification is not a supported form."""

    kind = "invalid_object_type"

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if isinstance(self.value, type):
            return (
                f"Invalid object type: {self.value.__name__}. "
                "Class must inherit from Schema."
            )
        return (
            f"Invalid object type: {self.value!r}. Must be a name reference, "
            "a Schema class, or a Schema instance."
        )


class ValidationError(SchemaError):
    """Structural defect found while validating a schema before emission."""

    kind = "validation"


class CircularReferenceError(ValidationError):
    """A `$ref` chain between definitions closes on itself."""

    kind = "circular_reference"

    def __init__(self, definition: str, *, path: list[str] | None = None) -> None:
        self.definition = definition
        self.path = list(path or [])
        super().__init__(self.__str__())

    def __str__(self) -> str:
        message = f"Circular reference detected involving '{self.definition}'"
        if len(self.path) > 1:
            message += f" ({' -> '.join(self.path)})"
        return message
