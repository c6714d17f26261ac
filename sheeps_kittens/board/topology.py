r"""
Board Topology and Per-Piece Move Generation

The board is a 5x5 grid of intersections. Every intersection connects to
its orthogonal neighbours. Only "diagonal nodes", where (row + col) is
even, also connect diagonally. That gives 13 diagonal nodes (corners,
centre, edge midpoints and the four inner diagonal points) and 12
orthogonal-only nodes.

    (0,0)-(0,1)-(0,2)-(0,3)-(0,4)
      | \   |   / |  \  |   / |
    (1,0)-(1,1)-(1,2)-(1,3)-(1,4)
      | /   |   \ |  /  |   \ |
    (2,0)-(2,1)-(2,2)-(2,3)-(2,4)
      ...

Capture Rule:
    A kitten jumps over an adjacent sheep onto the empty cell directly
    beyond it. For a diagonal jump BOTH the kitten's cell and the jumped
    cell must be diagonal nodes, because the jump travels along two
    diagonal links.

Neighbour lists are precomputed once, since the topology is fixed.
"""

from typing import Dict, List, NamedTuple, Tuple
from sheeps_kittens.types import BOARD_SIZE, Board, Piece, Position

ORTHOGONAL_DIRECTIONS: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL_DIRECTIONS: Tuple[Position, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class CaptureTarget(NamedTuple):
    """Landing cell of a kitten jump and the sheep it removes."""
    to: Position
    captured: Position


def is_in_bounds(r: int, c: int) -> bool:
    return 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE


def has_diagonals(r: int, c: int) -> bool:
    """True if (r, c) is a diagonal node."""
    return (r + c) % 2 == 0


def directions_for(r: int, c: int) -> Tuple[Position, ...]:
    """All step directions available from (r, c)."""
    if has_diagonals(r, c):
        return ORTHOGONAL_DIRECTIONS + DIAGONAL_DIRECTIONS
    return ORTHOGONAL_DIRECTIONS


def _build_neighbor_table() -> Dict[Position, Tuple[Position, ...]]:
    table = {}
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            table[(r, c)] = tuple(
                (r + dr, c + dc)
                for dr, dc in directions_for(r, c)
                if is_in_bounds(r + dr, c + dc)
            )
    return table


NEIGHBORS = _build_neighbor_table()


def get_neighbors(r: int, c: int) -> List[Position]:
    """
    Get every intersection connected to (r, c).

    Orthogonal neighbours come first (N, S, W, E), followed by diagonal
    neighbours when (r, c) is a diagonal node.

    Args:
        r: Row index (0-4)
        c: Column index (0-4)

    Returns:
        List of 3 to 8 positions. Corners give 3, edge midpoints 5,
        the centre and inner diagonal nodes 8. Odd cells give 3 on an edge
        and 4 inside.
    """
    return list(NEIGHBORS[(r, c)])


def get_capture_targets(board: Board, r: int, c: int) -> List[CaptureTarget]:
    """
    Get the captures available to the kitten at (r, c).

    Args:
        board: Current board
        r: Row of the kitten
        c: Column of the kitten

    Returns:
        List of CaptureTarget(to, captured). Empty if (r, c) does not hold a
        kitten. At most 8 entries.
    """
    targets = []
    if board[r][c] is not Piece.KITTEN:
        return targets

    for dr, dc in directions_for(r, c):
        mid_r, mid_c = r + dr, c + dc
        dest_r, dest_c = r + 2 * dr, c + 2 * dc

        if not (is_in_bounds(mid_r, mid_c) and is_in_bounds(dest_r, dest_c)):
            continue
        if board[mid_r][mid_c] is not Piece.SHEEP or board[dest_r][dest_c] is not Piece.EMPTY:
            continue

        # Diagonal jumps also need the mid -> dest diagonal link
        is_diagonal = dr != 0 and dc != 0
        if is_diagonal and not has_diagonals(mid_r, mid_c):
            continue

        targets.append(CaptureTarget((dest_r, dest_c), (mid_r, mid_c)))

    return targets


def get_valid_moves_for_piece(board: Board, r: int, c: int, piece: Piece) -> List[Position]:
    """
    Get all legal destinations for a piece of the given type at (r, c).

    Empty neighbours are always legal. Kittens additionally get their
    capture landing squares; sheep never capture.

    Args:
        board: Current board
        r: Row of the piece
        c: Column of the piece
        piece: Piece type to generate moves for

    Returns:
        List of destination positions (steps first, then captures)
    """
    moves = [pos for pos in NEIGHBORS[(r, c)] if board[pos[0]][pos[1]] is Piece.EMPTY]
    if piece is Piece.KITTEN:
        moves.extend(target.to for target in get_capture_targets(board, r, c))
    return moves
