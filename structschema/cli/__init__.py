"""CLI package for schema tools."""

__all__ = [
    "export",
    "validate",
]
