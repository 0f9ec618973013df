"""Transport graph and game setup for the pursuit game engine.

The board is represented as a static attributed graph:
- Nodes represent locations players can stand on
- Edges connect two locations and carry the set of transports between them
- Topology is immutable once built; the game setup pairs it with the
  ordered reveal schedule
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import networkx as nx

from .constants import Transport


# Type aliases for clarity
NodeId = int
EdgeId = tuple[int, int]  # Canonical form: (min_id, max_id)

TRANSPORTS_ATTR = "transports"


def make_edge_id(node_a: int, node_b: int) -> EdgeId:
    """Create a canonical edge ID from two node IDs.

    Edge IDs are always stored with the smaller node ID first
    to ensure consistent lookups regardless of direction.
    """
    return (min(node_a, node_b), max(node_a, node_b))


class TransportGraph:
    """Immutable undirected graph of locations joined by transports.

    Wraps a frozen NetworkX graph. Each edge stores a frozenset of
    Transport values under the ``transports`` attribute; queries are
    symmetric, so ``transports_between(a, b) == transports_between(b, a)``.
    """

    def __init__(self, graph: nx.Graph):
        """Freeze a copy of the given graph.

        Args:
            graph: Undirected graph whose edges carry a ``transports`` set.

        Raises:
            ValueError: If the graph is directed or an edge has no transports.
        """
        if graph.is_directed():
            raise ValueError("Transport graph must be undirected")
        frozen = nx.Graph()
        frozen.add_nodes_from(graph.nodes)
        for node_a, node_b, data in graph.edges(data=True):
            transports = frozenset(data.get(TRANSPORTS_ATTR, ()))
            if not transports:
                raise ValueError(f"Edge {make_edge_id(node_a, node_b)} has no transports")
            frozen.add_edge(node_a, node_b, **{TRANSPORTS_ATTR: transports})
        self._graph = nx.freeze(frozen)

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[NodeId, NodeId, Iterable[Transport]]],
        nodes: Iterable[NodeId] = (),
    ) -> TransportGraph:
        """Build a graph from ``(node_a, node_b, transports)`` triples.

        Transports listed for the same pair more than once are merged.
        Extra isolated nodes may be supplied via ``nodes``.
        """
        graph = nx.Graph()
        graph.add_nodes_from(nodes)
        for node_a, node_b, transports in edges:
            existing = graph.edges[node_a, node_b][TRANSPORTS_ATTR] if graph.has_edge(node_a, node_b) else frozenset()
            graph.add_edge(node_a, node_b, **{TRANSPORTS_ATTR: existing | frozenset(transports)})
        return cls(graph)

    @property
    def graph(self) -> nx.Graph:
        """The underlying frozen NetworkX graph."""
        return self._graph

    def nodes(self) -> frozenset[NodeId]:
        """Return all locations on the board."""
        return frozenset(self._graph.nodes)

    def has_node(self, node_id: NodeId) -> bool:
        """Check if a location exists on the board."""
        return self._graph.has_node(node_id)

    def number_of_edges(self) -> int:
        """Return the number of connected location pairs."""
        return self._graph.number_of_edges()

    def is_empty(self) -> bool:
        """Check if the board has no edges to travel along."""
        return self._graph.number_of_edges() == 0

    def adjacent_nodes(self, node_id: NodeId) -> frozenset[NodeId]:
        """Get all locations directly connected to a given location.

        Unknown locations have no neighbours.
        """
        if not self._graph.has_node(node_id):
            return frozenset()
        return frozenset(self._graph.neighbors(node_id))

    def transports_between(self, node_a: NodeId, node_b: NodeId) -> frozenset[Transport]:
        """Get the transports joining two locations (empty if not adjacent)."""
        if not self._graph.has_edge(node_a, node_b):
            return frozenset()
        return self._graph.edges[node_a, node_b][TRANSPORTS_ATTR]

    def edges(self) -> dict[EdgeId, frozenset[Transport]]:
        """Return every edge keyed by its canonical ID."""
        return {
            make_edge_id(node_a, node_b): data[TRANSPORTS_ATTR]
            for node_a, node_b, data in self._graph.edges(data=True)
        }

    def is_connected(self) -> bool:
        """Check if every location can reach every other location."""
        if self._graph.number_of_nodes() <= 1:
            return True
        return nx.is_connected(self._graph)

    def __repr__(self) -> str:
        return (
            f"TransportGraph(nodes={self._graph.number_of_nodes()}, "
            f"edges={self._graph.number_of_edges()})"
        )


@dataclass(frozen=True)
class GameSetup:
    """The fixed parameters of a game: the board and the reveal schedule.

    Attributes:
        graph: The transport graph.
        rounds: One flag per round; True means Mr X's location is revealed
            in that round's travel log entry.
    """

    graph: TransportGraph
    rounds: tuple[bool, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but always store a tuple
        object.__setattr__(self, "rounds", tuple(bool(flag) for flag in self.rounds))

    @property
    def total_rounds(self) -> int:
        """Number of rounds in the schedule."""
        return len(self.rounds)

    def is_reveal_round(self, round_index: int) -> bool:
        """Check if the given (0-indexed) round reveals Mr X.

        Rounds outside the schedule are never reveal rounds.
        """
        return 0 <= round_index < len(self.rounds) and self.rounds[round_index]
