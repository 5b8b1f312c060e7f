"""Core descriptor model, builders, registry and validator."""

from structschema.core.registry import DefinitionRegistry
from structschema.core.validator import ReferenceGraph, build_reference_graph, find_cycle

__all__ = [
    "DefinitionRegistry",
    "ReferenceGraph",
    "build_reference_graph",
    "find_cycle",
]
