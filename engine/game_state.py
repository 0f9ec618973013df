"""Game state for the pursuit game engine.

GameState is an immutable snapshot of a game in progress. It combines the
setup, the players, Mr X's travel log, the round counter and the set of
pieces still owed a move this round. The moves available to those pieces
and the winner are computed eagerly when a state is built.

advance() never mutates a state; it returns the next snapshot, so older
states stay valid for inspection or rewinding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Optional

from core.board import GameSetup, NodeId
from core.components import TicketInventory
from core.constants import EVADER_ONLY_TICKETS, Piece
from core.moves import DoubleMove, Move, SingleMove, final_destination, move_sort_key, tickets_used
from core.player import Player
from core.travel_log import LogEntry, log_entries_for

from .move_generator import MoveGenerator
from .win_evaluator import evaluate_winner

logger = logging.getLogger(__name__)


class ConstructionError(ValueError):
    """Raised when the initial players or setup are invalid."""
    pass


class IllegalMoveError(ValueError):
    """Raised when advancing with a move that is not currently available."""
    pass


MR_X_ONLY = frozenset({Piece.MR_X})


@dataclass(frozen=True, eq=False)
class GameState:
    """The complete game state at one point in time.

    Attributes:
        setup: The board graph and reveal schedule.
        remaining: Pieces still to move in the current round.
        log: Mr X's travel log, one entry per leg travelled.
        mr_x: The Mr X player.
        detectives: The detective players, in turn order.
        round_index: Current round (0-indexed into ``setup.rounds``).
        available_moves: Legal moves for the pieces in ``remaining``
            (empty once the game is over).
        winner: Winning pieces (empty while the game is ongoing).
    """

    setup: GameSetup
    remaining: frozenset[Piece]
    log: tuple[LogEntry, ...]
    mr_x: Player
    detectives: tuple[Player, ...]
    round_index: int = 0
    available_moves: frozenset[Move] = field(init=False, repr=False)
    winner: frozenset[Piece] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        winner = evaluate_winner(self)
        moves = frozenset() if winner else self._generate_moves()
        object.__setattr__(self, "winner", winner)
        object.__setattr__(self, "available_moves", moves)

    @classmethod
    def create_initial_state(
        cls,
        setup: GameSetup,
        mr_x: Player,
        detectives: Iterable[Player],
    ) -> GameState:
        """Create the first state of a game, Mr X to move in round 0.

        Args:
            setup: The board graph and reveal schedule.
            mr_x: The Mr X player.
            detectives: The detective players, in turn order.

        Raises:
            ConstructionError: If any player or the setup is invalid.
        """
        if setup is None:
            raise ConstructionError("Game setup is missing")
        if mr_x is None:
            raise ConstructionError("Mr X is missing")
        if detectives is None:
            raise ConstructionError("Detective list is missing")
        detectives = tuple(detectives)

        if not mr_x.is_evader():
            raise ConstructionError(f"{mr_x.piece.value} cannot play as Mr X")

        pieces_taken: set[Piece] = set()
        locations_taken: set[NodeId] = set()
        for detective in detectives:
            if detective is None:
                raise ConstructionError("Detective is missing")
            if not detective.is_pursuer():
                raise ConstructionError("Mr X cannot play as a detective")
            if detective.piece in pieces_taken:
                raise ConstructionError(f"Duplicate detective: {detective.piece.value}")
            pieces_taken.add(detective.piece)
            if detective.location in locations_taken:
                raise ConstructionError(
                    f"Two detectives share location {detective.location}"
                )
            locations_taken.add(detective.location)
            for ticket in EVADER_ONLY_TICKETS:
                if detective.has(ticket):
                    raise ConstructionError(
                        f"Detective {detective.piece.value} holds a {ticket.value} ticket"
                    )

        if not setup.rounds:
            raise ConstructionError("Round schedule is empty")
        if setup.graph.is_empty():
            raise ConstructionError("Transport graph is empty")
        for player in (mr_x, *detectives):
            if not setup.graph.has_node(player.location):
                raise ConstructionError(
                    f"{player.piece.value} starts off the board at {player.location}"
                )

        return cls(
            setup=setup,
            remaining=MR_X_ONLY,
            log=(),
            mr_x=mr_x,
            detectives=detectives,
        )

    # -------------------------------------------------------------------------
    # Move generation
    # -------------------------------------------------------------------------

    def _generate_moves(self) -> frozenset[Move]:
        generator = MoveGenerator(setup=self.setup)
        occupied = self._occupied()
        moves: set[Move] = set()
        for player in self.players():
            if player.piece in self.remaining:
                moves |= generator.moves_for(player, occupied, self.round_index)
        return frozenset(moves)

    def _occupied(self) -> frozenset[NodeId]:
        return frozenset(d.location for d in self.detectives)

    # -------------------------------------------------------------------------
    # Transition
    # -------------------------------------------------------------------------

    def advance(self, move: Move) -> GameState:
        """Apply a move and return the resulting state.

        Raises:
            IllegalMoveError: If the game is over or the move is not
                currently available. This state is left untouched.
        """
        if self.winner:
            raise IllegalMoveError(f"Game is over, cannot play {move}")
        if move not in self.available_moves:
            raise IllegalMoveError(f"Illegal move: {move}")

        if move.piece.is_evader():
            next_state = self._advance_mr_x(move)
        else:
            next_state = self._advance_detective(move)

        logger.debug(
            "Applied %s; round %d, remaining %s",
            move,
            next_state.round_index,
            sorted(p.value for p in next_state.remaining),
        )
        return next_state

    def _advance_mr_x(self, move: Move) -> GameState:
        mr_x = self.mr_x
        for ticket in tickets_used(move):
            mr_x = mr_x.spend(ticket)
        mr_x = mr_x.move_to(final_destination(move))

        log = self.log + log_entries_for(self.setup, move, self.round_index)

        # Detectives without a legal move sit the round out. If none can
        # move, remaining stays empty and Mr X has won.
        generator = MoveGenerator(setup=self.setup)
        occupied = self._occupied()
        remaining = frozenset(
            d.piece for d in self.detectives
            if generator.moves_for(d, occupied, self.round_index)
        )

        return replace(self, remaining=remaining, log=log, mr_x=mr_x)

    def _advance_detective(self, move: Move) -> GameState:
        match move:
            case DoubleMove():
                raise IllegalMoveError(f"Detectives cannot make double moves: {move}")
            case SingleMove(piece=piece, ticket=ticket, destination=destination):
                pass

        detectives = tuple(
            d.spend(ticket).move_to(destination) if d.piece == piece else d
            for d in self.detectives
        )
        # Tickets spent by detectives are handed to Mr X
        mr_x = self.mr_x.receive(ticket)

        generator = MoveGenerator(setup=self.setup)
        occupied = frozenset(d.location for d in detectives)
        remaining = frozenset(
            d.piece for d in detectives
            if d.piece in self.remaining and d.piece != piece
            and generator.moves_for(d, occupied, self.round_index)
        )
        round_index = self.round_index
        if not remaining:
            # The log holds one entry per round played so far
            remaining, round_index = MR_X_ONLY, len(self.log)

        return replace(
            self,
            remaining=remaining,
            mr_x=mr_x,
            detectives=detectives,
            round_index=round_index,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def players(self) -> tuple[Player, ...]:
        """All players, Mr X first then detectives in turn order."""
        return (self.mr_x, *self.detectives)

    def get_player(self, piece: Piece) -> Optional[Player]:
        """Get the player controlling a piece, or None if not in the game."""
        for player in self.players():
            if player.piece == piece:
                return player
        return None

    def get_setup(self) -> GameSetup:
        return self.setup

    def get_players(self) -> frozenset[Piece]:
        """Return every piece in the game."""
        return frozenset(p.piece for p in self.players())

    def get_detective_location(self, piece: Piece) -> Optional[NodeId]:
        """Return a detective's location; Mr X's is never exposed here."""
        for detective in self.detectives:
            if detective.piece == piece:
                return detective.location
        return None

    def get_player_tickets(self, piece: Piece) -> Optional[TicketInventory]:
        """Return a read-only view of a piece's tickets."""
        player = self.get_player(piece)
        return player.tickets if player is not None else None

    def get_travel_log(self) -> tuple[LogEntry, ...]:
        return self.log

    def get_available_moves(self) -> frozenset[Move]:
        return self.available_moves

    def get_winner(self) -> frozenset[Piece]:
        return self.winner

    def is_game_over(self) -> bool:
        """Check if the game has a winner."""
        return bool(self.winner)

    def is_mr_x_turn(self) -> bool:
        """Check if Mr X is the piece to move."""
        return self.remaining == MR_X_ONLY

    # -------------------------------------------------------------------------
    # Serialization and string representation
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the state to a dictionary for debugging.

        Note: Mr X's true location is included; this is not a player view.
        """
        return {
            "round_index": self.round_index,
            "remaining": sorted(p.value for p in self.remaining),
            "winner": sorted(p.value for p in self.winner),
            "players": [
                {
                    "piece": p.piece.value,
                    "location": p.location,
                    "tickets": {t.value: n for t, n in p.tickets.to_dict().items()},
                }
                for p in self.players()
            ],
            "log": [
                {"ticket": entry.ticket.value, "location": entry.location}
                for entry in self.log
            ],
            "available_moves": [
                str(m) for m in sorted(self.available_moves, key=move_sort_key)
            ],
        }

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        lines = [
            f"GameState(round={self.round_index}/{self.setup.total_rounds}, "
            f"remaining={sorted(p.value for p in self.remaining)})",
        ]
        for p in self.players():
            lines.append(f"  {p.piece.value}: at {p.location}, {p.tickets!r}")
        lines.append(f"  Log entries: {len(self.log)}")
        lines.append(f"  Available moves: {len(self.available_moves)}")
        if self.winner:
            lines.append(f"  Winner: {sorted(p.value for p in self.winner)}")
        return "\n".join(lines)
