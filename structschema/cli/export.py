"""Export a declared schema as structured-output JSON."""

from __future__ import annotations

import argparse
import logging

from structschema.core.document import dump_document
from structschema.core.schema_export import export_schema, load_schema_target


def main(argv: list[str] | None = None) -> int:
    """Run the schema export CLI."""

    parser = argparse.ArgumentParser(description="Export a declared schema as JSON.")
    parser.add_argument("target", help="Schema target as package.module:attr.")
    parser.add_argument("--out", help="Output JSON path. Prints to stdout if omitted.")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        schema = load_schema_target(args.target)
        if args.out:
            path = export_schema(schema, args.out, indent=args.indent)
            print(f"OK: {schema.name} -> {path}")
        else:
            print(dump_document(schema.to_json_schema(), indent=args.indent))
        return 0
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        print(f"ERROR: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
