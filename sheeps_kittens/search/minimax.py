"""
Minimax Search with Alpha-Beta Pruning

This module implements the computer opponent's search. Minimax explores
the game tree to a fixed depth, and alpha-beta pruning skips branches that
cannot change the result.

Key Concepts:
    - Kittens are the maximizing side, Sheep the minimizing side
    - Hypothetical moves go through engine.apply_move(), so the search
      never touches a state in place
    - Move Ordering: captures first, then moves toward the centre, so the
      likely-best moves are searched first and cause more cutoffs

Algorithm Complexity:
    - Minimax: O(b^d) where b=branching factor (up to ~25 during
      placement), d=depth
    - Alpha-Beta: O(b^(d/2)) with perfect move ordering

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Union
from sheeps_kittens.board.topology import NEIGHBORS, get_capture_targets
from sheeps_kittens.evaluation.base import Evaluator
from sheeps_kittens.evaluation.heuristic import HeuristicEvaluator
from sheeps_kittens.game.engine import apply_move
from sheeps_kittens.game.notation import move_to_notation
from sheeps_kittens.search.difficulty import DEPTH_MAP, RANDOM_MOVE_CHANCE, Difficulty
from sheeps_kittens.types import (
    BOARD_SIZE,
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

logger = logging.getLogger(__name__)

BOARD_CENTER = (2, 2)


@dataclass
class SearchResult:
    """
    Outcome of a root search.

    Attributes:
        move: Best move found, None if there was nothing to play
        score: Minimax value of that move (Kittens' perspective)
        nodes: Number of positions visited
    """
    move: Optional[GameMove]
    score: float
    nodes: int


def get_all_moves(state: GameState) -> List[GameMove]:
    """
    Enumerate every legal move for the side to move.

    Args:
        state: Current state

    Returns:
        List of moves in board order. Empty for a finished game.
    """
    if state.winner is not None:
        return []

    board = state.board
    moves: List[GameMove] = []

    if state.turn is Side.SHEEP and state.phase is Phase.PLACEMENT:
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if board[r][c] is Piece.EMPTY:
                    moves.append(Place((r, c)))
        return moves

    piece = state.turn.piece

    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            if board[r][c] is not piece:
                continue

            for nr, nc in NEIGHBORS[(r, c)]:
                if board[nr][nc] is Piece.EMPTY:
                    moves.append(Move((r, c), (nr, nc)))

            if piece is Piece.KITTEN:
                for target in get_capture_targets(board, r, c):
                    moves.append(Capture((r, c), target.to, target.captured))

    return moves


def center_distance(pos: Position) -> int:
    """Manhattan distance from the board centre."""
    return abs(pos[0] - BOARD_CENTER[0]) + abs(pos[1] - BOARD_CENTER[1])


def order_moves(moves: List[GameMove]) -> List[GameMove]:
    """
    Order moves to improve alpha-beta pruning efficiency.

    Ordering Priority:
        1. Captures before non-captures
        2. Destinations closer to the centre first

    The sort is stable, so moves that tie keep their generation order.

    Args:
        moves: Moves to order

    Returns:
        New sorted list (best moves first)
    """
    return sorted(moves, key=lambda move: (not isinstance(move, Capture), center_distance(move.to)))


def minimax(
    state: GameState,
    depth: int,
    alpha: float,
    beta: float,
    maximizing_player: bool,
    evaluator: Evaluator,
    nodes_searched: Optional[List[int]] = None,
) -> float:
    """
    Minimax search with alpha-beta pruning.

    Args:
        state: Position to search
        depth: Remaining search depth (decrements each recursive call)
        alpha: Best score the maximizer (Kittens) can already force
        beta: Best score the minimizer (Sheep) can already force
        maximizing_player: True if Kittens are to move
        evaluator: Position evaluation function
        nodes_searched: Optional mutable list [count] to track positions visited

    Returns:
        float: Value of the position

    Algorithm:
        1. Leaf (depth exhausted) or finished game -> evaluate
        2. No legal moves -> evaluate
        3. For each ordered move:
            a. Apply it to get the child state
            b. Recursively search (depth - 1)
            c. Update alpha/beta
            d. Prune if beta <= alpha
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    if depth <= 0 or state.winner is not None:
        return evaluator.evaluate(state)

    moves = get_all_moves(state)
    if not moves:
        return evaluator.evaluate(state)

    ordered_moves = order_moves(moves)

    if maximizing_player:
        max_eval = -float("inf")
        for move in ordered_moves:
            child = apply_move(state, move)
            eval_score = minimax(
                child,
                depth - 1,
                alpha,
                beta,
                child.turn is Side.KITTEN,
                evaluator,
                nodes_searched,
            )
            max_eval = max(max_eval, eval_score)
            alpha = max(alpha, eval_score)
            if beta <= alpha:
                break
        return max_eval

    else:
        min_eval = float("inf")
        for move in ordered_moves:
            child = apply_move(state, move)
            eval_score = minimax(
                child,
                depth - 1,
                alpha,
                beta,
                child.turn is Side.KITTEN,
                evaluator,
                nodes_searched,
            )
            min_eval = min(min_eval, eval_score)
            beta = min(beta, eval_score)
            if beta <= alpha:
                break
        return min_eval


def search_root(
    state: GameState,
    depth: int,
    evaluator: Optional[Evaluator] = None,
) -> SearchResult:
    """
    Search every root move and pick the best one for the side to move.

    Each root move gets a full-window search, so scores are exact. On ties
    the earlier move in search order is kept.

    Args:
        state: Current position
        depth: Search depth in plies, at least 1
        evaluator: Position evaluator (default: HeuristicEvaluator)

    Returns:
        SearchResult with the chosen move, its score and nodes visited

    Raises:
        ValueError: If depth is less than 1
    """
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")

    evaluator = evaluator if evaluator else HeuristicEvaluator()

    moves = get_all_moves(state)
    if not moves:
        return SearchResult(move=None, score=evaluator.evaluate(state), nodes=0)

    maximizing = state.turn is Side.KITTEN
    best_move = None
    best_score = -float("inf") if maximizing else float("inf")
    nodes = [0]

    for move in order_moves(moves):
        child = apply_move(state, move)
        score = minimax(
            child,
            depth - 1,
            -float("inf"),
            float("inf"),
            child.turn is Side.KITTEN,
            evaluator,
            nodes,
        )

        logger.debug(f"Move: {move_to_notation(move)}, Score: {score}")

        if maximizing:
            if score > best_score:
                best_score = score
                best_move = move
        else:
            if score < best_score:
                best_score = score
                best_move = move

    logger.info(
        f"Search depth={depth} side={state.turn.value}: best={move_to_notation(best_move)} "
        f"score={best_score} nodes={nodes[0]}"
    )

    return SearchResult(move=best_move, score=best_score, nodes=nodes[0])


def choose_move(
    state: GameState,
    difficulty: Union[Difficulty, str],
    evaluator: Optional[Evaluator] = None,
    rng: Optional[random.Random] = None,
) -> SearchResult:
    """
    Choose the computer's move at a difficulty level, with search details.

    With probability RANDOM_MOVE_CHANCE[difficulty] a uniformly random
    legal move is returned without searching (nodes=0, score of the
    current position). Otherwise the root is searched to DEPTH_MAP[difficulty].

    Args:
        state: Current position
        difficulty: Difficulty or its name ("easy", "medium", "hard")
        evaluator: Position evaluator (default: HeuristicEvaluator)
        rng: Random source for the random-move chance (default: fresh Random)

    Returns:
        SearchResult; move is None if the side to move has no legal move

    Raises:
        ValueError: If difficulty is not a known level
    """
    difficulty = Difficulty(difficulty)
    evaluator = evaluator if evaluator else HeuristicEvaluator()

    moves = get_all_moves(state)
    if not moves:
        return SearchResult(move=None, score=evaluator.evaluate(state), nodes=0)

    rng = rng if rng is not None else random.Random()

    random_chance = RANDOM_MOVE_CHANCE[difficulty]
    if random_chance > 0 and rng.random() < random_chance:
        move = rng.choice(moves)
        logger.debug(f"Random move at {difficulty.value}: {move_to_notation(move)}")
        return SearchResult(move=move, score=evaluator.evaluate(state), nodes=0)

    return search_root(state, DEPTH_MAP[difficulty], evaluator)


def find_best_move(
    state: GameState,
    difficulty: Union[Difficulty, str],
    evaluator: Optional[Evaluator] = None,
    rng: Optional[random.Random] = None,
) -> Optional[GameMove]:
    """
    Choose the computer's move at a difficulty level.

    Args:
        state: Current position
        difficulty: Difficulty or its name ("easy", "medium", "hard")
        evaluator: Position evaluator (default: HeuristicEvaluator)
        rng: Random source for the random-move chance (default: fresh Random)

    Returns:
        The move to play, or None if the side to move has no legal move

    Raises:
        ValueError: If difficulty is not a known level
    """
    return choose_move(state, difficulty, evaluator, rng).move
