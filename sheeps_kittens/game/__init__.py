"""
Game Module

Rules engine for Sheeps & Kittens: value types, the state transition
functions and move notation.

Key Components:
    - GameState: Immutable snapshot of a game
    - Place / Move / Capture: Move descriptors (GameMove union)
    - create_initial_state, handle_tap, apply_move, forfeit_game
    - get_game_status_text: Turn/outcome text for front-ends

Data Flow:
    GameState + tap or move -> engine -> new GameState (input untouched)
"""

from sheeps_kittens.types import (
    BOARD_SIZE,
    SHEEP_TO_WIN,
    TOTAL_SHEEP,
    Capture,
    GameMove,
    GameState,
    Move,
    Phase,
    Piece,
    Place,
    Position,
    Side,
)
from sheeps_kittens.game.engine import (
    Interaction,
    apply_move,
    create_initial_state,
    forfeit_game,
    get_game_status_text,
    get_interaction_state,
    handle_tap,
    is_legal_move,
    kittens_blocked,
    sheep_have_moves,
)
from sheeps_kittens.game.notation import move_to_notation, notation_to_move

__all__ = [
    'BOARD_SIZE',
    'SHEEP_TO_WIN',
    'TOTAL_SHEEP',
    'Capture',
    'GameMove',
    'GameState',
    'Move',
    'Phase',
    'Piece',
    'Place',
    'Position',
    'Side',
    'Interaction',
    'apply_move',
    'create_initial_state',
    'forfeit_game',
    'get_game_status_text',
    'get_interaction_state',
    'handle_tap',
    'is_legal_move',
    'kittens_blocked',
    'sheep_have_moves',
    'move_to_notation',
    'notation_to_move',
]
