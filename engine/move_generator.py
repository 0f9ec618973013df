"""Move Generator - Enumerates every legal move for a piece.

The move generator is used by:
1. GameState to cache the moves available to the pieces still to move
2. The win evaluator to detect stuck pieces
3. Callers that want to preview another piece's options

Occupancy is a snapshot of detective locations taken before the move:
no piece may end a leg on a detective, while Mr X never blocks anyone
(a detective landing on Mr X is a capture, not an illegal move).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, AbstractSet

from core.board import GameSetup, NodeId
from core.constants import Piece, Ticket
from core.moves import DoubleMove, Move, SingleMove
from core.player import Player

if TYPE_CHECKING:
    from .game_state import GameState


@dataclass(frozen=True)
class MoveGenerator:
    """Generates legal moves over a fixed game setup.

    Stateless apart from the setup; every method is a pure function of
    its arguments.
    """

    setup: GameSetup

    def legal_moves(self, state: GameState, piece: Piece) -> frozenset[Move]:
        """Generate every legal move for ``piece`` in ``state``.

        Pieces not in the game have no moves.
        """
        player = state.get_player(piece)
        if player is None:
            return frozenset()
        occupied = frozenset(d.location for d in state.detectives)
        return self.moves_for(player, occupied, state.round_index)

    def moves_for(
        self,
        player: Player,
        occupied: AbstractSet[NodeId],
        round_index: int,
    ) -> frozenset[Move]:
        """Generate single and double moves for a player.

        Args:
            player: The mover.
            occupied: Detective locations before the move.
            round_index: Current round (0-indexed), used to decide whether
                enough rounds remain for a double move.
        """
        singles = self.single_moves(player, player.location, occupied)
        doubles = self.double_moves(player, occupied, round_index, singles)
        return frozenset(singles) | doubles

    def single_moves(
        self,
        player: Player,
        source: NodeId,
        occupied: AbstractSet[NodeId],
    ) -> frozenset[SingleMove]:
        """Generate the single moves a player could make from ``source``."""
        graph = self.setup.graph
        moves: set[SingleMove] = set()

        for destination in graph.adjacent_nodes(source):
            if destination in occupied:
                continue

            for transport in graph.transports_between(source, destination):
                ticket = transport.required_ticket
                if player.has(ticket):
                    moves.add(SingleMove(player.piece, source, ticket, destination))

            # A secret ticket works on any edge regardless of transport
            if player.has(Ticket.SECRET):
                moves.add(SingleMove(player.piece, source, Ticket.SECRET, destination))

        return frozenset(moves)

    def double_moves(
        self,
        player: Player,
        occupied: AbstractSet[NodeId],
        round_index: int,
        first_legs: frozenset[SingleMove] | None = None,
    ) -> frozenset[DoubleMove]:
        """Generate the double moves available to a player.

        Only Mr X may move twice, needs a double ticket, and needs at least
        two rounds left in the schedule. The second leg is generated from
        the first leg's destination against the same occupancy snapshot; a
        second leg reusing the first leg's ticket kind needs two of it.
        """
        rounds_left = self.setup.total_rounds - round_index
        if not player.is_evader() or not player.has(Ticket.DOUBLE) or rounds_left < 2:
            return frozenset()

        if first_legs is None:
            first_legs = self.single_moves(player, player.location, occupied)

        moves: set[DoubleMove] = set()
        for first in first_legs:
            for second in self.single_moves(player, first.destination, occupied):
                needed = 2 if second.ticket == first.ticket else 1
                if not player.has_at_least(second.ticket, needed):
                    continue
                moves.add(
                    DoubleMove(
                        piece=player.piece,
                        source=first.source,
                        ticket1=first.ticket,
                        destination1=first.destination,
                        ticket2=second.ticket,
                        destination2=second.destination,
                    )
                )

        return frozenset(moves)


def legal_moves(state: GameState, piece: Piece) -> frozenset[Move]:
    """Convenience function to get the legal moves of a piece.

    Creates a MoveGenerator for the state's setup and generates moves.
    """
    return MoveGenerator(setup=state.setup).legal_moves(state, piece)
