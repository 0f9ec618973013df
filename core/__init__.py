"""Core data models for the pursuit game engine."""

from .constants import (
    Piece,
    Ticket,
    Transport,
    EVADER_ONLY_TICKETS,
    DETECTIVE_PIECES,
    MAX_DETECTIVES,
)

from .config import (
    TicketConfig,
    ScheduleConfig,
    DEFAULT_TICKET_CONFIG,
    DEFAULT_SCHEDULE_CONFIG,
)

from .board import (
    NodeId,
    EdgeId,
    make_edge_id,
    TransportGraph,
    GameSetup,
)

from .components import TicketInventory

from .player import Player, make_mr_x, make_detective

from .moves import (
    SingleMove,
    DoubleMove,
    Move,
    legs,
    tickets_used,
    final_destination,
    move_sort_key,
)

from .travel_log import LogEntry, log_entries_for, last_known_location

__all__ = [
    # Constants
    "Piece",
    "Ticket",
    "Transport",
    "EVADER_ONLY_TICKETS",
    "DETECTIVE_PIECES",
    "MAX_DETECTIVES",
    # Config
    "TicketConfig",
    "ScheduleConfig",
    "DEFAULT_TICKET_CONFIG",
    "DEFAULT_SCHEDULE_CONFIG",
    # Board
    "NodeId",
    "EdgeId",
    "make_edge_id",
    "TransportGraph",
    "GameSetup",
    # Components
    "TicketInventory",
    # Player
    "Player",
    "make_mr_x",
    "make_detective",
    # Moves
    "SingleMove",
    "DoubleMove",
    "Move",
    "legs",
    "tickets_used",
    "final_destination",
    "move_sort_key",
    # Travel log
    "LogEntry",
    "log_entries_for",
    "last_known_location",
]
