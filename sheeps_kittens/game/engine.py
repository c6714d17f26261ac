"""
Rules Engine

Pure state transitions for Sheeps & Kittens. Nothing here mutates its
input or raises on bad game input: an illegal tap or move returns the
input state object unchanged, so callers can detect "nothing happened"
with `new_state is state` and surface their own feedback.

Turn Flow:
    Placement phase: Sheep place one sheep per turn, Kittens move.
    Movement phase (after the 20th sheep): both sides move pieces.

Win Checks (in priority order, after every move):
    1. sheep_captured >= 5                     -> Kittens win
    2. every kitten has no legal move          -> Sheep win (any phase)
    3. Movement phase, Sheep to move, and no
       sheep has an empty neighbour            -> Kittens win (stalemate)

Tap Protocol:
    Movement is entered with two taps: the first selects one of the side's
    pieces (caching its legal destinations), the second picks a
    destination. Tapping the selected piece again deselects it, tapping
    another own piece re-selects. Placement is a single tap.
"""

from dataclasses import replace
from enum import Enum
from sheeps_kittens.board.topology import (
    NEIGHBORS,
    CaptureTarget,
    get_capture_targets,
    get_valid_moves_for_piece,
    is_in_bounds,
)
from sheeps_kittens.types import (
    BOARD_SIZE,
    SHEEP_TO_WIN,
    TOTAL_SHEEP,
    Board,
    Capture,
    GameMove,
    GameState,
    Move,
    Phase,
    Piece,
    Place,
    Side,
    board_with,
    empty_board,
)

KITTEN_START_POSITIONS = ((0, 0), (0, 4), (4, 0), (4, 4))


class Interaction(Enum):
    """Where a state sits in the tap protocol."""
    AWAITING_PLACEMENT = "awaiting_placement"
    AWAITING_SELECTION = "awaiting_selection"
    AWAITING_DESTINATION = "awaiting_destination"
    TERMINAL = "terminal"


def kittens_blocked(board: Board) -> bool:
    """True if no kitten on the board has a step or a capture."""
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            if board[r][c] is Piece.KITTEN and get_valid_moves_for_piece(board, r, c, Piece.KITTEN):
                return False
    return True


def sheep_have_moves(board: Board) -> bool:
    """True if at least one sheep has an empty neighbour."""
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            if board[r][c] is not Piece.SHEEP:
                continue
            for nr, nc in NEIGHBORS[(r, c)]:
                if board[nr][nc] is Piece.EMPTY:
                    return True
    return False


def create_initial_state() -> GameState:
    """Kittens on the four corners, Sheep to place first."""
    board = board_with(empty_board(), {pos: Piece.KITTEN for pos in KITTEN_START_POSITIONS})
    return GameState(board=board)


def get_interaction_state(state: GameState) -> Interaction:
    if state.winner is not None:
        return Interaction.TERMINAL
    if state.turn is Side.SHEEP and state.phase is Phase.PLACEMENT:
        return Interaction.AWAITING_PLACEMENT
    if state.selected_piece is not None:
        return Interaction.AWAITING_DESTINATION
    return Interaction.AWAITING_SELECTION


def is_legal_move(state: GameState, move: GameMove) -> bool:
    """
    Check a move descriptor against the current state.

    Args:
        state: Position to check against
        move: Place, Move or Capture

    Returns:
        bool: True if the side to move may play it right now
    """
    if state.winner is not None:
        return False

    board = state.board

    if isinstance(move, Place):
        return (
            state.turn is Side.SHEEP
            and state.phase is Phase.PLACEMENT
            and is_in_bounds(*move.to)
            and board[move.to[0]][move.to[1]] is Piece.EMPTY
        )

    if not (is_in_bounds(*move.source) and is_in_bounds(*move.to)):
        return False

    if isinstance(move, Move):
        if state.turn is Side.SHEEP and state.phase is Phase.PLACEMENT:
            return False
        sr, sc = move.source
        return (
            board[sr][sc] is state.turn.piece
            and move.to in NEIGHBORS[move.source]
            and board[move.to[0]][move.to[1]] is Piece.EMPTY
        )

    if isinstance(move, Capture):
        if state.turn is not Side.KITTEN:
            return False
        targets = get_capture_targets(board, *move.source)
        return CaptureTarget(move.to, move.captured) in targets

    return False


def _play(state: GameState, move: GameMove) -> GameState:
    """Apply an already validated move and run the win checks."""
    sheep_placed = state.sheep_placed
    sheep_captured = state.sheep_captured
    phase = state.phase

    if isinstance(move, Place):
        board = board_with(state.board, {move.to: Piece.SHEEP})
        sheep_placed += 1
        if sheep_placed >= TOTAL_SHEEP:
            phase = Phase.MOVEMENT
    elif isinstance(move, Move):
        piece = state.board[move.source[0]][move.source[1]]
        board = board_with(state.board, {move.source: Piece.EMPTY, move.to: piece})
    else:
        board = board_with(
            state.board,
            {move.source: Piece.EMPTY, move.captured: Piece.EMPTY, move.to: Piece.KITTEN},
        )
        sheep_captured += 1

    next_turn = state.turn.opponent

    winner = None
    if sheep_captured >= SHEEP_TO_WIN:
        winner = Side.KITTEN
    elif kittens_blocked(board):
        winner = Side.SHEEP
    elif phase is Phase.MOVEMENT and next_turn is Side.SHEEP and not sheep_have_moves(board):
        winner = Side.KITTEN

    return replace(
        state,
        board=board,
        turn=next_turn,
        phase=phase,
        sheep_placed=sheep_placed,
        sheep_captured=sheep_captured,
        selected_piece=None,
        valid_moves=(),
        winner=winner,
        forfeited_by=None,
        last_move=move,
    )


def apply_move(state: GameState, move: GameMove) -> GameState:
    """
    Apply a move directly, bypassing the tap protocol.

    Used by the search and for replaying recorded games. Illegal moves and
    moves on a finished game return the state unchanged.

    Args:
        state: Current state
        move: Move to play

    Returns:
        GameState: Next state, or `state` itself if the move is rejected
    """
    if not is_legal_move(state, move):
        return state
    return _play(state, move)


def handle_tap(state: GameState, row: int, col: int) -> GameState:
    """
    Advance the tap protocol with a tap at (row, col).

    Args:
        state: Current state
        row: Tapped row
        col: Tapped column

    Returns:
        GameState: Next state, or `state` itself when the tap means nothing
        in the current situation
    """
    if state.winner is not None or not is_in_bounds(row, col):
        return state

    tapped = state.board[row][col]
    pos = (row, col)

    if state.turn is Side.SHEEP and state.phase is Phase.PLACEMENT:
        if tapped is not Piece.EMPTY:
            return state
        return _play(state, Place(pos))

    if tapped is state.turn.piece:
        if state.selected_piece == pos:
            return replace(state, selected_piece=None, valid_moves=())
        moves = get_valid_moves_for_piece(state.board, row, col, tapped)
        if not moves:
            return state
        return replace(state, selected_piece=pos, valid_moves=tuple(moves))

    if state.selected_piece is None or pos not in state.valid_moves:
        return state

    source = state.selected_piece
    if state.turn is Side.KITTEN:
        for target in get_capture_targets(state.board, *source):
            if target.to == pos:
                return _play(state, Capture(source, pos, target.captured))

    return _play(state, Move(source, pos))


def forfeit_game(state: GameState) -> GameState:
    """The side to move concedes. No-op on a finished game."""
    if state.winner is not None:
        return state
    return replace(
        state,
        winner=state.turn.opponent,
        forfeited_by=state.turn,
        selected_piece=None,
        valid_moves=(),
    )


def get_game_status_text(state: GameState) -> str:
    """Human-readable description of the turn or the outcome."""
    if state.forfeited_by is Side.SHEEP:
        return "Sheeps forfeited! Kittens win!"
    if state.forfeited_by is Side.KITTEN:
        return "Kittens forfeited! Sheeps win!"
    if state.winner is Side.SHEEP:
        return "Sheeps win! All kittens are blocked!"
    if state.winner is Side.KITTEN:
        return "Kittens win! Captured 5 sheeps!"

    interaction = get_interaction_state(state)

    if state.turn is Side.SHEEP:
        if interaction is Interaction.AWAITING_PLACEMENT:
            return f"Sheep's turn - Place a sheep ({state.sheep_placed}/{TOTAL_SHEEP})"
        if interaction is Interaction.AWAITING_DESTINATION:
            return "Sheep's turn - Tap where to move"
        return "Sheep's turn - Select a sheep to move"

    if interaction is Interaction.AWAITING_DESTINATION:
        return "Kitty's turn - Tap where to move"
    return "Kitty's turn - Select a kitty"
