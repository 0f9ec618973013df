"""Win condition evaluation.

The winner is a pure function of a game state. Conditions are checked in
a fixed order:
1. A detective standing on Mr X's location: the detectives win.
2. Mr X has moved but no detective has a legal reply (nobody is left to
   move): Mr X wins.
3. On Mr X's turn:
   - the reveal schedule is used up: Mr X wins
   - Mr X cannot move: the detectives win
Anything else means the game goes on (empty winner set).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.constants import Piece

from .move_generator import MoveGenerator

if TYPE_CHECKING:
    from .game_state import GameState


def evaluate_winner(state: GameState) -> frozenset[Piece]:
    """Return the set of winning pieces, empty while the game is ongoing."""
    detectives = frozenset(d.piece for d in state.detectives)
    mr_x = state.mr_x

    if any(d.location == mr_x.location for d in state.detectives):
        return detectives

    if not state.remaining:
        return frozenset({Piece.MR_X})

    if state.remaining != frozenset({Piece.MR_X}):
        return frozenset()

    if state.round_index >= state.setup.total_rounds:
        return frozenset({Piece.MR_X})

    generator = MoveGenerator(setup=state.setup)
    occupied = frozenset(d.location for d in state.detectives)
    if not generator.moves_for(mr_x, occupied, state.round_index):
        return detectives

    return frozenset()
