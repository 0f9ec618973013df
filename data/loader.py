"""Map data loader for the pursuit game engine.

Loads and validates a transport map and reveal schedule from JSON files,
converting them into GameSetup instances ready for use in the game.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from core.board import GameSetup, TransportGraph, make_edge_id
from core.config import DEFAULT_SCHEDULE_CONFIG
from core.constants import Transport

logger = logging.getLogger(__name__)


def resource_path(relative_path: str) -> Path:
    """Get the absolute path to a file bundled in the data/ directory."""
    return Path(__file__).parent / relative_path


class SetupLoadError(Exception):
    """Raised when map loading or validation fails."""
    pass


class SetupLoader:
    """Loads and validates map data from JSON files.

    Expected format::

        {
            "nodes": [1, 2, 3],
            "edges": [{"nodes": [1, 2], "transports": ["taxi", "bus"]}],
            "rounds": [false, false, true]
        }

    ``rounds`` may be omitted, in which case the standard schedule is used.
    """

    def __init__(self, strict: bool = True):
        """Initialize the loader.

        Args:
            strict: If True, require every location to be reachable from
                    every other. Set to False for partial or test maps.
        """
        self.strict = strict

    def load_from_file(self, file_path: str | Path) -> GameSetup:
        """Load a setup from a JSON file.

        Args:
            file_path: Path to the JSON map file.

        Returns:
            A GameSetup with the loaded graph and schedule.

        Raises:
            SetupLoadError: If the file cannot be read or parsed.
            SetupLoadError: If validation fails.
        """
        path = Path(file_path)

        if not path.exists():
            raise SetupLoadError(f"Map file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SetupLoadError(f"Invalid JSON in map file: {e}") from e
        except UnicodeDecodeError as e:
            raise SetupLoadError(f"Map file is not valid UTF-8: {e}") from e
        except IOError as e:
            raise SetupLoadError(f"Error reading map file: {e}") from e

        setup = self.load_from_dict(data)
        logger.info(
            "Loaded map %s: %d locations, %d connections, %d rounds",
            path.name,
            len(setup.graph.nodes()),
            setup.graph.number_of_edges(),
            setup.total_rounds,
        )
        return setup

    def load_from_dict(self, data: dict[str, Any]) -> GameSetup:
        """Load a setup from a dictionary.

        Args:
            data: Dictionary containing 'nodes', 'edges' and optionally 'rounds'.

        Returns:
            A GameSetup with the loaded graph and schedule.

        Raises:
            SetupLoadError: If validation fails.
        """
        self._validate_structure(data)

        node_ids: set[int] = set()
        for node_id in data["nodes"]:
            if isinstance(node_id, bool) or not isinstance(node_id, int) or node_id < 0:
                raise SetupLoadError(f"Invalid node ID: {node_id!r}")
            if node_id in node_ids:
                raise SetupLoadError(f"Duplicate node ID: {node_id}")
            node_ids.add(node_id)

        edges = []
        seen_edges = set()
        for edge_data in data["edges"]:
            node_a, node_b, transports = self._parse_edge(edge_data)

            if node_a not in node_ids:
                raise SetupLoadError(f"Edge references unknown node: {node_a}")
            if node_b not in node_ids:
                raise SetupLoadError(f"Edge references unknown node: {node_b}")

            if node_a == node_b:
                raise SetupLoadError(f"Self-loop edge not allowed: [{node_a}, {node_b}]")

            edge_id = make_edge_id(node_a, node_b)
            if edge_id in seen_edges:
                raise SetupLoadError(f"Duplicate edge: {edge_id}")
            seen_edges.add(edge_id)

            edges.append((node_a, node_b, transports))

        graph = TransportGraph.from_edges(edges, nodes=node_ids)
        rounds = self._parse_rounds(data)

        self._validate_graph(graph)

        return GameSetup(graph=graph, rounds=rounds)

    def _validate_structure(self, data: dict[str, Any]) -> None:
        """Validate the basic structure of the map data."""
        if not isinstance(data, dict):
            raise SetupLoadError("Map data must be a dictionary")

        if "nodes" not in data:
            raise SetupLoadError("Map data missing 'nodes' key")

        if "edges" not in data:
            raise SetupLoadError("Map data missing 'edges' key")

        if not isinstance(data["nodes"], list):
            raise SetupLoadError("'nodes' must be a list")

        if not isinstance(data["edges"], list):
            raise SetupLoadError("'edges' must be a list")

        if len(data["nodes"]) == 0:
            raise SetupLoadError("Map must have at least one node")

        if len(data["edges"]) == 0:
            raise SetupLoadError("Map must have at least one edge")

    def _parse_edge(self, edge_data: Any) -> tuple[int, int, frozenset[Transport]]:
        """Parse one edge entry into its endpoints and transports."""
        if not isinstance(edge_data, dict):
            raise SetupLoadError(f"Edge must be a dictionary: {edge_data!r}")

        for field in ("nodes", "transports"):
            if field not in edge_data:
                raise SetupLoadError(f"Edge missing required field: {field}")

        endpoints = edge_data["nodes"]
        if not isinstance(endpoints, list) or len(endpoints) != 2:
            raise SetupLoadError(f"Edge must join exactly two nodes: {endpoints!r}")
        if not all(isinstance(n, int) and not isinstance(n, bool) for n in endpoints):
            raise SetupLoadError(f"Edge endpoints must be node IDs: {endpoints!r}")

        names = edge_data["transports"]
        if not isinstance(names, list) or not names:
            raise SetupLoadError(f"Edge {endpoints} must list at least one transport")

        transports = set()
        for name in names:
            try:
                transports.add(Transport(name))
            except ValueError:
                raise SetupLoadError(
                    f"Invalid transport '{name}' on edge {endpoints}. "
                    f"Valid transports: {', '.join(t.value for t in Transport)}"
                )

        return endpoints[0], endpoints[1], frozenset(transports)

    def _parse_rounds(self, data: dict[str, Any]) -> tuple[bool, ...]:
        """Parse the reveal schedule, falling back to the standard one."""
        if "rounds" not in data:
            return DEFAULT_SCHEDULE_CONFIG.rounds()

        rounds = data["rounds"]
        if not isinstance(rounds, list):
            raise SetupLoadError("'rounds' must be a list")
        if len(rounds) == 0:
            raise SetupLoadError("Round schedule must have at least one round")
        for i, flag in enumerate(rounds):
            if not isinstance(flag, bool):
                raise SetupLoadError(f"Round {i + 1} reveal flag must be true or false")
        return tuple(rounds)

    def _validate_graph(self, graph: TransportGraph) -> None:
        """Validate the complete graph structure."""
        if self.strict and not graph.is_connected():
            raise SetupLoadError("Map is not connected")


def load_setup(file_path: str | Path, strict: bool = True) -> GameSetup:
    """Convenience function to load a setup from a file.

    Args:
        file_path: Path to the JSON map file.
        strict: If True, enforce strict validation.

    Returns:
        A GameSetup with the loaded graph and schedule.
    """
    loader = SetupLoader(strict=strict)
    return loader.load_from_file(file_path)


def load_default_setup() -> GameSetup:
    """Load the bundled default map.

    Returns:
        A GameSetup with the default map and the standard schedule.

    Raises:
        SetupLoadError: If the default map file is missing or invalid.
    """
    default_path = resource_path("default_map.json")
    return load_setup(default_path, strict=True)


def get_setup_stats(setup: GameSetup) -> dict[str, Any]:
    """Get statistics about a game setup.

    Args:
        setup: The setup to analyze.

    Returns:
        Dictionary with map and schedule statistics.
    """
    transport_counts = {t.value: 0 for t in Transport}
    for transports in setup.graph.edges().values():
        for transport in transports:
            transport_counts[transport.value] += 1

    return {
        "num_nodes": len(setup.graph.nodes()),
        "num_edges": setup.graph.number_of_edges(),
        "edges_by_transport": transport_counts,
        "num_rounds": setup.total_rounds,
        "reveal_rounds": [i + 1 for i, flag in enumerate(setup.rounds) if flag],
    }
