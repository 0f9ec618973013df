"""Player model for the pursuit game engine.

Each player is a piece standing on a location with a ticket inventory.
Players are immutable values; moving or spending tickets returns a new
Player.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from .board import NodeId
from .components import TicketInventory
from .config import DEFAULT_TICKET_CONFIG, TicketConfig
from .constants import Piece, Ticket


@dataclass(frozen=True)
class Player:
    """Represents a piece in play.

    Attributes:
        piece: Which piece this player controls.
        location: The node the piece currently stands on.
        tickets: Tickets currently held.
    """

    piece: Piece
    location: NodeId
    tickets: TicketInventory = field(default_factory=TicketInventory)

    def is_evader(self) -> bool:
        """Check if this player is Mr X."""
        return self.piece.is_evader()

    def is_pursuer(self) -> bool:
        """Check if this player is a detective."""
        return self.piece.is_pursuer()

    def has(self, ticket: Ticket) -> bool:
        """Check if the player holds at least one ticket of a kind."""
        return self.tickets.has(ticket)

    def has_at_least(self, ticket: Ticket, amount: int) -> bool:
        """Check if the player holds at least ``amount`` tickets of a kind."""
        return self.tickets.has_at_least(ticket, amount)

    def move_to(self, location: NodeId) -> Player:
        """Return this player standing on another location."""
        return replace(self, location=location)

    def spend(self, ticket: Ticket, amount: int = 1) -> Player:
        """Return this player with tickets used up.

        Raises:
            ValueError: If the player does not hold enough tickets.
        """
        return replace(self, tickets=self.tickets.spend(ticket, amount))

    def receive(self, ticket: Ticket, amount: int = 1) -> Player:
        """Return this player with tickets added."""
        return replace(self, tickets=self.tickets.receive(ticket, amount))


def make_mr_x(
    location: NodeId,
    tickets: Optional[Mapping[Ticket, int]] = None,
    config: TicketConfig = DEFAULT_TICKET_CONFIG,
) -> Player:
    """Create Mr X at a location, with default tickets unless given."""
    counts = tickets if tickets is not None else config.mr_x_tickets()
    return Player(piece=Piece.MR_X, location=location, tickets=TicketInventory(counts))


def make_detective(
    piece: Piece,
    location: NodeId,
    tickets: Optional[Mapping[Ticket, int]] = None,
    config: TicketConfig = DEFAULT_TICKET_CONFIG,
) -> Player:
    """Create a detective at a location, with default tickets unless given.

    Raises:
        ValueError: If ``piece`` is Mr X.
    """
    if not piece.is_pursuer():
        raise ValueError(f"{piece.value} is not a detective piece")
    counts = tickets if tickets is not None else config.detective_tickets()
    return Player(piece=piece, location=location, tickets=TicketInventory(counts))
