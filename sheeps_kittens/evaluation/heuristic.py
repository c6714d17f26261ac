"""
Heuristic Evaluation

Hand-tuned linear evaluation used by every difficulty level. The weights
below set how the computer opponent plays at each search depth, so changing
any of them changes the feel of easy/medium/hard.

Evaluation Components (Kittens' perspective):
    - Captures: +100 per captured sheep
    - Per kitten:
        mobility       +10 per legal move (steps and jumps)
        threats        +30 per available capture
        centralization +(4 - manhattan distance to centre) * 3
        near-trapped   -25 if the kitten has at most one move
    - Placement phase: -2 per sheep placed
    - Movement phase: -5 per sheep adjacent to a kitten
"""

import numpy as np
from sheeps_kittens.board.topology import NEIGHBORS, get_capture_targets, get_valid_moves_for_piece
from sheeps_kittens.evaluation.base import Evaluator
from sheeps_kittens.types import BOARD_SIZE, GameState, Phase, Piece

CAPTURED_SHEEP_VALUE = 100
MOBILITY_WEIGHT = 10
THREAT_WEIGHT = 30
CENTER_WEIGHT = 3
TRAPPED_PENALTY = 25
PLACED_SHEEP_WEIGHT = 2
SURROUNDING_SHEEP_PENALTY = 5

#fmt: off
# Manhattan distance of each intersection from the centre (2, 2)
CENTER_DISTANCE = np.array([
    [4, 3, 2, 3, 4],
    [3, 2, 1, 2, 3],
    [2, 1, 0, 1, 2],
    [3, 2, 1, 2, 3],
    [4, 3, 2, 3, 4],
], dtype=np.int32)
#fmt: on

# Centralization bonus per cell: (4 - distance) * 3
CENTER_TABLE = (4 - CENTER_DISTANCE) * CENTER_WEIGHT


class HeuristicEvaluator(Evaluator):
    """
    Linear evaluation over captures, kitten mobility and placement progress.

    Attributes:
        center_table: Per-cell centralization bonus for kittens
    """

    def __init__(self):
        self.center_table = CENTER_TABLE

    def evaluate_kitten(self, state: GameState, r: int, c: int) -> int:
        """
        Score the contribution of the kitten at (r, c).

        Args:
            state: Game state
            r: Row of the kitten
            c: Column of the kitten

        Returns:
            int: Mobility, threat and centralization terms minus the
            near-trapped penalty
        """
        moves = get_valid_moves_for_piece(state.board, r, c, Piece.KITTEN)
        captures = get_capture_targets(state.board, r, c)

        score = len(moves) * MOBILITY_WEIGHT
        score += len(captures) * THREAT_WEIGHT
        score += int(self.center_table[r, c])

        if len(moves) <= 1:
            score -= TRAPPED_PENALTY

        return score

    def evaluate(self, state: GameState) -> int:
        terminal_score = self.evaluate_terminal(state)
        if terminal_score is not None:
            return terminal_score

        board = state.board
        score = state.sheep_captured * CAPTURED_SHEEP_VALUE

        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if board[r][c] is not Piece.KITTEN:
                    continue

                score += self.evaluate_kitten(state, r, c)

                # Sheep crowding a kitten restrict it once sheep can move
                if state.phase is Phase.MOVEMENT:
                    sheep_around = sum(
                        1 for nr, nc in NEIGHBORS[(r, c)] if board[nr][nc] is Piece.SHEEP
                    )
                    score -= sheep_around * SURROUNDING_SHEEP_PENALTY

        if state.phase is Phase.PLACEMENT:
            score -= state.sheep_placed * PLACED_SHEEP_WEIGHT

        return score


_default_evaluator = HeuristicEvaluator()


def evaluate(state: GameState) -> int:
    """Evaluate a state with the default heuristic evaluator."""
    return _default_evaluator.evaluate(state)
