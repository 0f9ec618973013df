"""Move types for the pursuit game engine.

A move is a closed union of two value types:
- SingleMove: one leg along one edge using one ticket
- DoubleMove: Mr X's two legs in one turn, paid with a double ticket

Moves compare by value, so a set of moves is deduplicated by ticket kind
and route. Code that needs to tell the two apart matches on the type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .board import NodeId
from .constants import Piece, Ticket


@dataclass(frozen=True)
class SingleMove:
    """Travel from ``source`` to ``destination`` using ``ticket``."""

    piece: Piece
    source: NodeId
    ticket: Ticket
    destination: NodeId

    def __str__(self) -> str:
        return f"{self.piece.value}: {self.source} -[{self.ticket.value}]-> {self.destination}"


@dataclass(frozen=True)
class DoubleMove:
    """Two consecutive legs in one turn.

    ``source`` is always the mover's location when the move was generated;
    ``destination1`` is the intermediate stop.
    """

    piece: Piece
    source: NodeId
    ticket1: Ticket
    destination1: NodeId
    ticket2: Ticket
    destination2: NodeId

    def __str__(self) -> str:
        return (
            f"{self.piece.value}: {self.source} -[{self.ticket1.value}]-> {self.destination1}"
            f" -[{self.ticket2.value}]-> {self.destination2}"
        )


Move = Union[SingleMove, DoubleMove]


def legs(move: Move) -> tuple[tuple[Ticket, NodeId], ...]:
    """Return the ``(ticket, destination)`` pair of each leg, in order."""
    match move:
        case SingleMove(ticket=ticket, destination=destination):
            return ((ticket, destination),)
        case DoubleMove(ticket1=t1, destination1=d1, ticket2=t2, destination2=d2):
            return ((t1, d1), (t2, d2))
    raise TypeError(f"Not a move: {move!r}")


def tickets_used(move: Move) -> tuple[Ticket, ...]:
    """Return every ticket the move consumes, including the double ticket."""
    match move:
        case SingleMove(ticket=ticket):
            return (ticket,)
        case DoubleMove(ticket1=t1, ticket2=t2):
            return (t1, t2, Ticket.DOUBLE)
    raise TypeError(f"Not a move: {move!r}")


def final_destination(move: Move) -> NodeId:
    """Return where the mover ends up."""
    match move:
        case SingleMove(destination=destination):
            return destination
        case DoubleMove(destination2=destination):
            return destination
    raise TypeError(f"Not a move: {move!r}")


def move_sort_key(move: Move) -> tuple:
    """Deterministic ordering key (single moves first, then by route)."""
    route = [move.source]
    for ticket, destination in legs(move):
        route.extend((destination, ticket.value))
    return (move.piece.value, len(route), tuple(route))
