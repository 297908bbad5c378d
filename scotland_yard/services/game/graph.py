"""Transport graph interface consumed by the engine.

The engine only ever asks for the edges leaving a node. TransportGraph is a
small undirected adjacency map that satisfies the interface for tests and
simple hosts; real maps can supply any object with the same methods.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from scotland_yard.schemas.game_engine import Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edge:
    source: int
    destination: int
    transport: Transport


class GraphProvider(Protocol):
    def edges_from(self, node: int) -> frozenset[Edge]: ...

    def is_empty(self) -> bool: ...


class TransportGraph:
    """Undirected multigraph of board locations joined by transport links."""

    def __init__(self) -> None:
        self._edges: dict[int, set[Edge]] = {}

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[int, int, Transport | str]]) -> "TransportGraph":
        """Build a graph from (node_a, node_b, transport) triples."""
        graph = cls()
        for node_a, node_b, transport in edges:
            graph.add_edge(node_a, node_b, Transport(transport))
        logger.debug("Built transport graph: nodes=%d", len(graph))
        return graph

    def add_node(self, node: int) -> None:
        if node <= 0:
            raise ValueError(f"Location ids must be positive, got {node}")
        self._edges.setdefault(node, set())

    def add_edge(self, node_a: int, node_b: int, transport: Transport) -> None:
        self.add_node(node_a)
        self.add_node(node_b)
        self._edges[node_a].add(Edge(node_a, node_b, transport))
        self._edges[node_b].add(Edge(node_b, node_a, transport))

    def edges_from(self, node: int) -> frozenset[Edge]:
        return frozenset(self._edges.get(node, ()))

    @property
    def nodes(self) -> frozenset[int]:
        return frozenset(self._edges)

    def is_empty(self) -> bool:
        return not self._edges

    def __len__(self) -> int:
        return len(self._edges)

    def __contains__(self, node: object) -> bool:
        return node in self._edges
