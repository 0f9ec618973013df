"""Game engine for the pursuit game.

This module provides the game logic including:
- Legal move generation over the transport graph
- The immutable game state and its transition function
- Win condition evaluation
- A session wrapper for playing a game move by move
"""

from .move_generator import (
    MoveGenerator,
    legal_moves,
)

from .win_evaluator import evaluate_winner

from .game_state import (
    GameState,
    ConstructionError,
    IllegalMoveError,
)

from .game_engine import (
    GameEngine,
    StepResult,
)

__all__ = [
    # Move generation
    "MoveGenerator",
    "legal_moves",
    # Win evaluation
    "evaluate_winner",
    # Game state
    "GameState",
    "ConstructionError",
    "IllegalMoveError",
    # Game engine
    "GameEngine",
    "StepResult",
]
