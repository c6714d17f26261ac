"""
Board Representation

Conversions between the engine's board tuples and external forms:

    - Text: compact board strings for the protocol and puzzle definitions,
      plus a multi-line ASCII rendering for logs and terminals.
    - Tensors: numpy feature planes for analysis tools and learned
      evaluators.

Board String Format:
    Five rows of five characters joined by "/", top row first.
        "."  empty
        "S"  sheep
        "K"  kitten
    Starting position: "K...K/...../...../...../K...K"

2-Channel Representation (board_to_tensor):
    0: Sheep
    1: Kittens

6-Channel Representation (state_to_tensor):
    0-1: Same as above
    2: Diagonal nodes (1 where (row + col) is even)
    3: Side to move (all 1s if Sheep, all 0s if Kittens)
    4: Placement progress (sheep_placed / 20 everywhere)
    5: Capture progress (sheep_captured / 5 everywhere)

Each piece channel is a 5*5 binary mask where 1 indicates piece presence.
"""

import numpy as np
from sheeps_kittens.board.topology import has_diagonals
from sheeps_kittens.types import (
    BOARD_SIZE,
    SHEEP_TO_WIN,
    TOTAL_SHEEP,
    Board,
    GameState,
    Piece,
    Side,
)

PIECE_TO_CHAR = {
    Piece.EMPTY: ".",
    Piece.SHEEP: "S",
    Piece.KITTEN: "K",
}
CHAR_TO_PIECE = {v: k for k, v in PIECE_TO_CHAR.items()}

PIECE_TO_CHANNEL = {
    Piece.SHEEP: 0,
    Piece.KITTEN: 1,
}

# Constant plane, shared by every state_to_tensor call
DIAGONAL_MASK = np.array(
    [[1.0 if has_diagonals(r, c) else 0.0 for c in range(BOARD_SIZE)] for r in range(BOARD_SIZE)],
    dtype=np.float32,
)


def board_to_string(board: Board) -> str:
    return "/".join("".join(PIECE_TO_CHAR[piece] for piece in row) for row in board)


def string_to_board(text: str) -> Board:
    """
    Parse a board string.

    Args:
        text: Board string such as "K...K/...../..S../...../K...K"

    Returns:
        Board tuple

    Raises:
        ValueError: If the string does not have 5 rows of 5 valid characters
    """
    rows = text.strip().split("/")
    if len(rows) != BOARD_SIZE:
        raise ValueError(f"Board string needs {BOARD_SIZE} rows, got {len(rows)}: {text!r}")

    board = []
    for row in rows:
        if len(row) != BOARD_SIZE:
            raise ValueError(f"Board row needs {BOARD_SIZE} cells, got {len(row)}: {row!r}")
        try:
            board.append(tuple(CHAR_TO_PIECE[ch.upper()] for ch in row))
        except KeyError as e:
            raise ValueError(f"Invalid board character {e.args[0]!r} in row {row!r}") from None

    return tuple(board)


def render_board(board: Board) -> str:
    """
    Multi-line ASCII drawing with row and column indices.

        0 1 2 3 4
      0 K . . . K
      1 . . . . .
      ...
    """
    lines = ["  " + " ".join(str(c) for c in range(BOARD_SIZE))]
    for r, row in enumerate(board):
        lines.append(f"{r} " + " ".join(PIECE_TO_CHAR[piece] for piece in row))
    return "\n".join(lines)


def board_to_tensor(board: Board) -> np.ndarray:
    """
    Convert a board to a 2-channel tensor representation.

    Args:
        board: Board tuple

    Returns:
        numpy array of shape (2, 5, 5) with dtype float32
        - Binary values: 1.0 piece exists, 0.0 no piece
    """
    tensor = np.zeros((2, BOARD_SIZE, BOARD_SIZE), dtype=np.float32)

    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            channel = PIECE_TO_CHANNEL.get(board[r][c])
            if channel is not None:
                tensor[channel, r, c] = 1.0

    return tensor


def tensor_to_board(tensor: np.ndarray) -> Board:
    """
    Convert a 2-channel tensor back to a board. Inverse of board_to_tensor().

    Args:
        tensor: numpy array of shape (2, 5, 5)

    Returns:
        Board tuple

    Raises:
        ValueError: If tensor has invalid shape or a cell holds both pieces
    """
    if tensor.shape != (2, BOARD_SIZE, BOARD_SIZE):
        raise ValueError(f"Invalid tensor shape: {tensor.shape}. Expected (2, 5, 5)")

    occupied = tensor > 0.5
    if np.any(occupied[0] & occupied[1]):
        r, c = np.argwhere(occupied[0] & occupied[1])[0]
        raise ValueError(f"Sheep and kitten on the same cell ({r}, {c})")

    rows = []
    for r in range(BOARD_SIZE):
        row = []
        for c in range(BOARD_SIZE):
            if occupied[0, r, c]:
                row.append(Piece.SHEEP)
            elif occupied[1, r, c]:
                row.append(Piece.KITTEN)
            else:
                row.append(Piece.EMPTY)
        rows.append(tuple(row))

    return tuple(rows)


def state_to_tensor(state: GameState) -> np.ndarray:
    """
    Convert a game state to the 6-channel tensor with metadata planes.

    Args:
        state: Game state

    Returns:
        numpy array of shape (6, 5, 5) with dtype float32
    """
    tensor_2 = board_to_tensor(state.board)

    metadata = np.zeros((4, BOARD_SIZE, BOARD_SIZE), dtype=np.float32)
    metadata[0] = DIAGONAL_MASK

    if state.turn is Side.SHEEP:
        metadata[1, :, :] = 1.0

    metadata[2, :, :] = state.sheep_placed / TOTAL_SHEEP
    metadata[3, :, :] = state.sheep_captured / SHEEP_TO_WIN

    return np.concatenate([tensor_2, metadata], axis=0)
