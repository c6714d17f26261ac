"""
Move Notation

Compact text form for moves, used by the text protocol, puzzle suite and
benchmark logs. Coordinates are written as two digits, row then column.

    Place    "22"       sheep placed at (2, 2)
    Move     "00-11"    piece steps from (0, 0) to (1, 1)
    Capture  "20x22"    kitten jumps from (2, 0) to (2, 2) over (2, 1)

Parsing only checks the format and board bounds, not legality. Use
engine.is_legal_move() for that.
"""

from sheeps_kittens.board.topology import is_in_bounds
from sheeps_kittens.types import Capture, GameMove, Move, Place, Position


def position_to_notation(pos: Position) -> str:
    return f"{pos[0]}{pos[1]}"


def notation_to_position(text: str) -> Position:
    """
    Parse a two-digit coordinate such as "14".

    Raises:
        ValueError: If text is not two digits on the board
    """
    if len(text) != 2 or not text.isdigit():
        raise ValueError(f"Invalid coordinate: {text!r}")
    r, c = int(text[0]), int(text[1])
    if not is_in_bounds(r, c):
        raise ValueError(f"Coordinate off the board: {text!r}")
    return r, c


def move_to_notation(move: GameMove) -> str:
    if isinstance(move, Place):
        return position_to_notation(move.to)
    if isinstance(move, Capture):
        return f"{position_to_notation(move.source)}x{position_to_notation(move.to)}"
    return f"{position_to_notation(move.source)}-{position_to_notation(move.to)}"


def notation_to_move(text: str) -> GameMove:
    """
    Parse a move string.

    Args:
        text: "rc", "rc-rc" or "rcxrc"

    Returns:
        Place, Move or Capture. The captured cell of a capture is the
        midpoint of the jump.

    Raises:
        ValueError: On malformed text, off-board coordinates, or a capture
            that does not span exactly two cells in a straight line
    """
    text = text.strip().lower()

    if len(text) == 2:
        return Place(notation_to_position(text))

    if len(text) != 5 or text[2] not in "-x":
        raise ValueError(f"Invalid move: {text!r}")

    source = notation_to_position(text[:2])
    to = notation_to_position(text[3:])

    if text[2] == "-":
        return Move(source, to)

    dr, dc = to[0] - source[0], to[1] - source[1]
    if abs(dr) not in (0, 2) or abs(dc) not in (0, 2) or (dr, dc) == (0, 0):
        raise ValueError(f"Capture must jump exactly two cells: {text!r}")
    captured = (source[0] + dr // 2, source[1] + dc // 2)
    return Capture(source, to, captured)
