"""
Core Game Types

This module defines the value types shared by the rules engine and the
search: pieces, sides, phases, move descriptors and the game state itself.

Every type here is immutable. The rules engine never mutates a GameState;
each transition builds a new one with dataclasses.replace(), so a previous
state can be kept around safely for replay, diffing or hypothetical search.

Board Orientation:
    - Row 0 = top edge, Row 4 = bottom edge
    - Column 0 = left edge, Column 4 = right edge
    - Kittens start on the four corners
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

BOARD_SIZE = 5
TOTAL_SHEEP = 20  # Placement ends once this many sheep are on the board
SHEEP_TO_WIN = 5  # Captures needed for a Kitten win

Position = Tuple[int, int]


class Piece(Enum):
    """Content of a single board intersection."""
    EMPTY = "empty"
    SHEEP = "sheep"
    KITTEN = "kitten"


class Side(Enum):
    """
    A player side. Used both for whose turn it is and for outcomes
    (winner, forfeitedBy).
    """
    SHEEP = "sheep"
    KITTEN = "kitten"

    @property
    def piece(self) -> Piece:
        """Board piece owned by this side."""
        return Piece.SHEEP if self is Side.SHEEP else Piece.KITTEN

    @property
    def opponent(self) -> "Side":
        return Side.KITTEN if self is Side.SHEEP else Side.SHEEP


class Phase(Enum):
    """Game phase. PLACEMENT switches to MOVEMENT once and never reverts."""
    PLACEMENT = "placement"
    MOVEMENT = "movement"


Board = Tuple[Tuple[Piece, ...], ...]


@dataclass(frozen=True)
class Place:
    """Sheep placement onto an empty intersection."""
    to: Position

    @property
    def kind(self) -> str:
        return "place"


@dataclass(frozen=True)
class Move:
    """Step from one intersection to an adjacent empty one."""
    source: Position
    to: Position

    @property
    def kind(self) -> str:
        return "move"


@dataclass(frozen=True)
class Capture:
    """
    Kitten jump over an adjacent sheep.

    Attributes:
        source: Kitten's starting position
        to: Landing position (two steps away)
        captured: Jumped sheep, always the midpoint of source and to
    """
    source: Position
    to: Position
    captured: Position

    @property
    def kind(self) -> str:
        return "capture"


GameMove = Union[Place, Move, Capture]


def empty_board() -> Board:
    """Return a board with every intersection empty."""
    return tuple(tuple(Piece.EMPTY for _ in range(BOARD_SIZE)) for _ in range(BOARD_SIZE))


def board_with(board: Board, changes: dict) -> Board:
    """
    Return a copy of board with some cells replaced.

    Args:
        board: Board to copy
        changes: Mapping of Position -> Piece

    Returns:
        New board tuple; the input is left untouched
    """
    rows = [list(row) for row in board]
    for (r, c), piece in changes.items():
        rows[r][c] = piece
    return tuple(tuple(row) for row in rows)


@dataclass(frozen=True)
class GameState:
    """
    Complete, immutable snapshot of a game.

    Attributes:
        board: 5x5 grid of Piece values, indexed board[row][col]
        turn: Side to move
        phase: PLACEMENT or MOVEMENT
        sheep_placed: Sheep placed so far (0..20)
        sheep_captured: Sheep removed by capture so far (0..5)
        selected_piece: Piece picked in the first tap of a move, if any
        valid_moves: Legal destinations of selected_piece (empty if none)
        winner: Winning side once the game is over
        forfeited_by: Side that conceded, when the game ended by forfeit
        last_move: Most recently applied move
    """
    board: Board = field(default_factory=empty_board)
    turn: Side = Side.SHEEP
    phase: Phase = Phase.PLACEMENT
    sheep_placed: int = 0
    sheep_captured: int = 0
    selected_piece: Optional[Position] = None
    valid_moves: Tuple[Position, ...] = ()
    winner: Optional[Side] = None
    forfeited_by: Optional[Side] = None
    last_move: Optional[GameMove] = None

    def piece_at(self, pos: Position) -> Piece:
        r, c = pos
        return self.board[r][c]

    @property
    def is_over(self) -> bool:
        return self.winner is not None
