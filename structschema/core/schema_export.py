"""Schema export utilities."""

from __future__ import annotations

import importlib
from pathlib import Path

from structschema.core.document import dump_document
from structschema.core.schema import Schema


def load_schema_target(target: str) -> Schema:
    """Resolve ``package.module:attr`` to a Schema instance.

    The attribute may be a Schema instance, a Schema subclass, or a
    zero-argument callable returning a Schema.
    """

    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Schema target must look like 'package.module:attr', got {target!r}")

    module = importlib.import_module(module_name)
    try:
        obj = getattr(module, attr)
    except AttributeError as exc:
        raise ValueError(f"Module {module_name!r} has no attribute {attr!r}") from exc

    if isinstance(obj, type) and issubclass(obj, Schema):
        obj = obj()
    elif callable(obj) and not isinstance(obj, Schema):
        obj = obj()

    if not isinstance(obj, Schema):
        raise ValueError(f"{target!r} did not resolve to a Schema (got {type(obj).__name__})")
    return obj


def export_schema(schema: Schema, out_path: str, *, indent: int | None = 2) -> Path:
    """Validate `schema` and write its document JSON to `out_path`."""

    text = dump_document(schema.to_json_schema(), indent=indent)
    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n", encoding="utf-8")
    return path
