"""Main game engine for the pursuit game.

The GameEngine is a session wrapper around the immutable GameState. It
provides:
- reset(): Start a new game
- step(): Play a move and advance to the next state
- get_valid_moves(): Return legal moves for the current state
- undo(): Rewind to the previous state

Move legality is enforced by GameState; the engine turns rejected moves
into failed StepResults and keeps every snapshot for rewinding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from core.board import GameSetup
from core.constants import Piece
from core.moves import Move, move_sort_key
from core.player import Player
from data.loader import load_default_setup

from .game_state import GameState, IllegalMoveError

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """Result of playing a move.

    Attributes:
        success: Whether the move was applied.
        state: The game state after the step (unchanged on failure).
        done: Whether the game has ended.
        winner: Winning pieces, empty while the game is ongoing.
        info: Additional information about the step.
    """

    success: bool
    state: GameState
    done: bool
    winner: frozenset[Piece] = frozenset()
    info: dict[str, Any] = field(default_factory=dict)


class GameEngine:
    """Plays a game move by move and keeps its history.

    Usage:
        engine = GameEngine()
        engine.reset(mr_x, detectives)

        while not engine.is_game_over():
            moves = engine.get_valid_moves()
            move = select_move(moves)  # Player input or script
            result = engine.step(move)
    """

    def __init__(self):
        """Initialize the game engine."""
        self._history: list[GameState] = []

    @property
    def state(self) -> GameState:
        """Get the current game state.

        Raises:
            RuntimeError: If the game has not been initialized.
        """
        if not self._history:
            raise RuntimeError("Game not initialized. Call reset() first.")
        return self._history[-1]

    @property
    def history(self) -> tuple[GameState, ...]:
        """Every state of the current game, oldest first."""
        return tuple(self._history)

    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return bool(self._history) and self.state.is_game_over()

    def get_winner(self) -> frozenset[Piece]:
        """Return the winning pieces (empty while the game is ongoing)."""
        return self.state.get_winner()

    # -------------------------------------------------------------------------
    # Game Initialization
    # -------------------------------------------------------------------------

    def reset(
        self,
        mr_x: Player,
        detectives: Iterable[Player],
        setup: Optional[GameSetup] = None,
    ) -> GameState:
        """Start a new game.

        Args:
            mr_x: The Mr X player.
            detectives: The detective players, in turn order.
            setup: Optional custom setup. If None, uses the default map.

        Returns:
            The initial game state.

        Raises:
            ConstructionError: If the players or setup are invalid.
        """
        if setup is None:
            setup = load_default_setup()

        initial = GameState.create_initial_state(setup, mr_x, detectives)
        self._history = [initial]
        logger.info(
            "New game: %d detectives, %d rounds",
            len(initial.detectives),
            setup.total_rounds,
        )
        return initial

    # -------------------------------------------------------------------------
    # Move Execution
    # -------------------------------------------------------------------------

    def step(self, move: Move) -> StepResult:
        """Play a move and advance the game state.

        Args:
            move: The move to play.

        Returns:
            StepResult with the outcome of the move.
        """
        current = self.state
        try:
            next_state = current.advance(move)
        except IllegalMoveError as e:
            logger.warning("Rejected move %s: %s", move, e)
            return StepResult(
                success=False,
                state=current,
                done=current.is_game_over(),
                winner=current.get_winner(),
                info={"error": str(e)},
            )

        self._history.append(next_state)
        if next_state.is_game_over():
            logger.info(
                "Game over in round %d, winner: %s",
                next_state.round_index,
                ", ".join(sorted(p.value for p in next_state.get_winner())),
            )

        return StepResult(
            success=True,
            state=next_state,
            done=next_state.is_game_over(),
            winner=next_state.get_winner(),
            info={
                "move": str(move),
                "round_index": next_state.round_index,
                "remaining": sorted(p.value for p in next_state.remaining),
            },
        )

    def get_valid_moves(self) -> list[Move]:
        """Return the legal moves in a stable order."""
        return sorted(self.state.get_available_moves(), key=move_sort_key)

    def undo(self) -> GameState:
        """Rewind to the state before the last move.

        Raises:
            RuntimeError: If no move has been played yet.
        """
        if len(self._history) <= 1:
            raise RuntimeError("Nothing to undo")
        self._history.pop()
        return self.state
