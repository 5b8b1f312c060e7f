"""Named definition table backing `$defs`."""

from __future__ import annotations

import logging

from structschema.core.descriptors import PropertyDescriptor

logger = logging.getLogger(__name__)


class DefinitionRegistry:
    """Insertion-ordered mapping of definition name to descriptor.

    Redefining a name replaces the earlier descriptor in its original slot.
    References are resolved against this table by name only.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, PropertyDescriptor] = {}

    def define(self, name: str, descriptor: PropertyDescriptor) -> PropertyDescriptor:
        """Register or overwrite the definition for `name`."""

        if name in self._definitions:
            logger.debug("Overwriting definition %r", name)
        else:
            logger.debug("Registering definition %r", name)
        self._definitions[name] = descriptor
        return descriptor

    def get(self, name: str) -> PropertyDescriptor | None:
        """Lookup a definition by name."""

        return self._definitions.get(name)

    def names(self) -> list[str]:
        """Return definition names in registration order."""

        return list(self._definitions.keys())

    def items(self):
        return self._definitions.items()

    def to_schema(self) -> dict:
        """Emit the `$defs` mapping."""

        return {name: descriptor.to_schema() for name, descriptor in self._definitions.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self):
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __bool__(self) -> bool:
        return bool(self._definitions)
