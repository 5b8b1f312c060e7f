"""Validation CLI for declared schemas."""

from __future__ import annotations

import argparse
import logging

from structschema.core.schema_export import load_schema_target


def main(argv: list[str] | None = None) -> int:
    """Check a schema target for circular references."""

    parser = argparse.ArgumentParser(description="Validate a declared schema.")
    parser.add_argument("target", help="Schema target as package.module:attr.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        schema = load_schema_target(args.target)
        schema.validate()
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        print(f"ERROR: {exc}")
        return 1

    print(f"OK: {schema.name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
