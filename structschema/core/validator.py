"""Reference graph construction and circular reference detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from structschema.core.descriptors import ROOT_POINTER, iter_references
from structschema.core.errors import CircularReferenceError

if TYPE_CHECKING:
    from structschema.core.schema import Schema

logger = logging.getLogger(__name__)

ROOT_NODE = ROOT_POINTER

_WHITE = 0
_GRAY = 1
_BLACK = 2


@dataclass
class ReferenceGraph:
    """Directed `$ref` graph between definitions plus a synthetic root node.

    References to the root schema are not recorded as edges.
    """

    edges: dict[str, list[str]] = field(default_factory=dict)
    defined: list[str] = field(default_factory=list)

    def add_node(self, node: str) -> None:
        self.edges.setdefault(node, [])

    def add_edge(self, src: str, dst: str) -> None:
        targets = self.edges.setdefault(src, [])
        if dst not in targets:
            targets.append(dst)

    def unresolved(self) -> list[str]:
        """Return referenced names with no matching definition, sorted."""

        known = set(self.defined)
        missing = {dst for targets in self.edges.values() for dst in targets if dst not in known}
        return sorted(missing)

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.edges.values())


def build_reference_graph(schema: "Schema") -> ReferenceGraph:
    """Scan root properties and every definition for `$ref` edges."""

    graph = ReferenceGraph(defined=schema.definitions.names())

    graph.add_node(ROOT_NODE)
    for descriptor in schema.properties.values():
        for ref in iter_references(descriptor):
            if not ref.points_to_root:
                graph.add_edge(ROOT_NODE, ref.target)

    for name, descriptor in schema.definitions.items():
        graph.add_node(name)
        for ref in iter_references(descriptor):
            if not ref.points_to_root:
                graph.add_edge(name, ref.target)

    logger.debug(
        "Built reference graph for %r: %d nodes, %d edges",
        schema.name,
        len(graph.edges),
        graph.edge_count,
    )
    return graph


def find_cycle(graph: ReferenceGraph) -> list[str] | None:
    """Return the first reference cycle found, or None.

    The returned path starts and ends at the definition where the cycle was
    re-entered, e.g. ``["user", "profile", "user"]``. The walk keeps its own
    stack, so long reference chains do not hit the interpreter recursion limit.
    """

    color: dict[str, int] = {}

    for start in graph.edges:
        if color.get(start, _WHITE) != _WHITE:
            continue
        path: list[str] = [start]
        stack: list[tuple[str, Iterator[str]]] = [(start, iter(graph.edges.get(start, ())))]
        color[start] = _GRAY
        while stack:
            node, targets = stack[-1]
            target = next(targets, None)
            if target is None:
                stack.pop()
                path.pop()
                color[node] = _BLACK
                continue
            state = color.get(target, _WHITE)
            if state == _GRAY:
                return path[path.index(target):] + [target]
            if state == _WHITE:
                color[target] = _GRAY
                path.append(target)
                stack.append((target, iter(graph.edges.get(target, ()))))
    return None


def validate(schema: "Schema") -> None:
    """Raise CircularReferenceError if the schema's references form a cycle."""

    graph = build_reference_graph(schema)
    cycle = find_cycle(graph)
    if cycle is not None:
        raise CircularReferenceError(cycle[0], path=cycle)

    missing = graph.unresolved()
    if missing:
        logger.warning("Schema %r references undefined definitions: %s", schema.name, missing)


def is_valid(schema: "Schema") -> bool:
    """Return whether `validate` would pass, without raising."""

    return find_cycle(build_reference_graph(schema)) is None
