"""
Board Module

Board topology (adjacency with conditional diagonals, captures, per-piece
moves) and board representations (text and tensor forms).

Key Components:
    - get_neighbors / get_capture_targets / get_valid_moves_for_piece
    - board_to_string / string_to_board / render_board
    - board_to_tensor / state_to_tensor: numpy feature planes

Data Flow:
    Board tuple -> board_to_tensor() -> (2, 5, 5) numpy array
"""

from sheeps_kittens.board.topology import (
    CaptureTarget,
    get_capture_targets,
    get_neighbors,
    get_valid_moves_for_piece,
    has_diagonals,
    is_in_bounds,
)
from sheeps_kittens.board.representation import (
    board_to_string,
    board_to_tensor,
    render_board,
    state_to_tensor,
    string_to_board,
    tensor_to_board,
)

__all__ = [
    'CaptureTarget',
    'get_capture_targets',
    'get_neighbors',
    'get_valid_moves_for_piece',
    'has_diagonals',
    'is_in_bounds',
    'board_to_string',
    'board_to_tensor',
    'render_board',
    'state_to_tensor',
    'string_to_board',
    'tensor_to_board',
]
