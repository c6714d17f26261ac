"""
Engine Testing and Benchmarking

This module provides a tactical puzzle suite and AI-vs-AI self-play for
measuring how well the search plays at each difficulty.

Puzzle Suite:
    Small positions with a known best move, one per basic tactic:
       - Capture the fifth sheep to win outright
       - Place the sheep that blocks the last free kitten
       - Take a free capture
       - Cover the landing cell behind a threatened sheep

Self-Play:
    play_match() pits two difficulty levels against each other from the
    starting position. run_self_play() repeats matches and aggregates win
    rates, which is the practical way to check that "hard" beats "easy".

Evaluation Metrics:
    - Correct Moves: Number of puzzles where the engine found a best move
    - Time per Position: Average thinking time
    - Nodes Searched: Total nodes visited
    - Win rate per side and average game length for self-play

Position Export:
    save_match_positions() writes the positions of self-play games as
    numpy feature planes with the final result, for offline analysis.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
import numpy as np
from tqdm import tqdm
from sheeps_kittens.board.representation import state_to_tensor, string_to_board, tensor_to_board
from sheeps_kittens.evaluation.base import Evaluator
from sheeps_kittens.evaluation.heuristic import HeuristicEvaluator
from sheeps_kittens.game.engine import apply_move, create_initial_state
from sheeps_kittens.game.notation import move_to_notation, notation_to_move
from sheeps_kittens.search.difficulty import Difficulty
from sheeps_kittens.search.minimax import choose_move, search_root
from sheeps_kittens.types import BOARD_SIZE, TOTAL_SHEEP, GameState, Phase, Side

logger = logging.getLogger(__name__)


@dataclass
class PuzzlePosition:
    """
    A test position with expected best move(s).

    Attributes:
        id: Position identifier (e.g., "SK.01")
        board: Board string (rows joined by "/")
        turn: Side to move
        placed: Sheep placed so far
        captured: Sheep captured so far
        best_moves: Acceptable best moves in move notation
        description: Human-readable description of the position
    """
    id: str
    board: str
    turn: Side
    placed: int
    captured: int
    best_moves: List[str]
    description: str = ""

    def to_state(self) -> GameState:
        """Build the game state this puzzle describes."""
        return GameState(
            board=string_to_board(self.board),
            turn=self.turn,
            phase=Phase.MOVEMENT if self.placed >= TOTAL_SHEEP else Phase.PLACEMENT,
            sheep_placed=self.placed,
            sheep_captured=self.captured,
        )


@dataclass
class PuzzleResult:
    """
    Result of searching a single puzzle.

    Attributes:
        position: The puzzle
        found_move: Move the engine found (notation, "" if none)
        score: Search score for the move
        correct: Whether the engine found a best move
        time_taken: Time spent searching (seconds)
        nodes_searched: Number of nodes visited
        depth: Search depth used
    """
    position: PuzzlePosition
    found_move: str
    score: float
    correct: bool
    time_taken: float
    nodes_searched: int = 0
    depth: int = 0


# ============================================================================
# Puzzle Suite
# ============================================================================

PUZZLE_POSITIONS = [
    PuzzlePosition(
        id="SK.01",
        board="KS..K/..S../.SSS./..S../K...K",
        turn=Side.KITTEN,
        placed=10,
        captured=4,
        best_moves=["00x02"],
        description="Kittens jump the sheep on 01 for the fifth capture",
    ),
    PuzzlePosition(
        id="SK.02",
        board="K.SSK/SS.SS/S.S.S/SS.SS/KSSSK",
        turn=Side.SHEEP,
        placed=16,
        captured=0,
        best_moves=["01", "21", "12"],
        description="Sheep fill 01 to block every kitten, or force the block with 21 or 12",
    ),
    PuzzlePosition(
        id="SK.03",
        board="KS..K/...../...../...../K...K",
        turn=Side.KITTEN,
        placed=1,
        captured=0,
        best_moves=["00x02"],
        description="Kittens take the undefended sheep on 01",
    ),
    PuzzlePosition(
        id="SK.04",
        board="KS..K/...../...../...../K...K",
        turn=Side.SHEEP,
        placed=1,
        captured=0,
        best_moves=["02"],
        description="Sheep cover 02 so the sheep on 01 cannot be jumped",
    ),
]


def evaluate_puzzle(
    position: PuzzlePosition,
    depth: int,
    evaluator: Optional[Evaluator] = None,
    verbose: bool = False,
) -> PuzzleResult:
    """
    Search a single puzzle position.

    Args:
        position: Puzzle to evaluate
        depth: Search depth
        evaluator: Position evaluator (default: HeuristicEvaluator)
        verbose: If True, print detailed output

    Returns:
        PuzzleResult with the engine's move and whether it was correct

    Raises:
        ValueError: If the puzzle board string is malformed or depth < 1
    """
    evaluator = evaluator if evaluator else HeuristicEvaluator()
    state = position.to_state()

    if verbose:
        print(f"\nTesting {position.id}: {position.description}")
        print(f"Board: {position.board} ({position.turn.value} to move)")
        print(f"Expected moves: {position.best_moves}")

    start_time = time.time()
    result = search_root(state, depth, evaluator)
    time_taken = time.time() - start_time

    found_move = move_to_notation(result.move) if result.move is not None else ""
    correct = found_move in position.best_moves

    if verbose:
        print(f"Engine found: {found_move or 'none'} (score: {result.score})")
        print(f"Nodes searched: {result.nodes:,}")
        print(f"Time: {time_taken:.2f}s")
        print(f"Result: {'CORRECT' if correct else 'WRONG'}")

    return PuzzleResult(
        position=position,
        found_move=found_move,
        score=result.score,
        correct=correct,
        time_taken=time_taken,
        nodes_searched=result.nodes,
        depth=depth,
    )


def run_puzzles(
    evaluator: Optional[Evaluator] = None,
    depth: int = 2,
    positions: Optional[List[PuzzlePosition]] = None,
    verbose: bool = True,
) -> Dict[str, Any]:
    """
    Run the puzzle suite.

    Args:
        evaluator: Position evaluator (default: HeuristicEvaluator)
        depth: Search depth (default: 2)
        positions: Puzzles to run (default: PUZZLE_POSITIONS)
        verbose: If True, print detailed results

    Returns:
        Dictionary with test results:
            - score: Number of correct positions
            - total: Total number of positions
            - percentage: Success percentage
            - results: List of PuzzleResult objects
            - avg_time: Average time per position
            - total_time: Total search time
    """
    positions = positions if positions is not None else PUZZLE_POSITIONS

    if verbose:
        print("=" * 70)
        print("SHEEPS & KITTENS PUZZLE SUITE")
        print("=" * 70)

    results = []
    correct_count = 0
    total_time = 0.0

    for position in positions:
        result = evaluate_puzzle(position, depth, evaluator, verbose=verbose)
        results.append(result)

        if result.correct:
            correct_count += 1

        total_time += result.time_taken

    avg_time = total_time / len(positions) if positions else 0
    percentage = (correct_count / len(positions) * 100) if positions else 0

    if verbose:
        print("\n" + "=" * 70)
        print("SUMMARY")
        print("=" * 70)
        print(f"Score: {correct_count}/{len(positions)} ({percentage:.1f}%)")
        print(f"Average time: {avg_time:.2f}s")
        print(f"Total time: {total_time:.2f}s")

    return {
        'score': correct_count,
        'total': len(positions),
        'percentage': percentage,
        'results': results,
        'avg_time': avg_time,
        'total_time': total_time,
    }


# ============================================================================
# Self-Play
# ============================================================================

@dataclass
class MatchResult:
    """
    Outcome of one AI-vs-AI game.

    Attributes:
        winner: Winning side, None if the ply limit was reached
        plies: Number of moves played
        sheep_captured: Sheep captured by the end of the game
        moves: Moves in notation, in order
    """
    winner: Optional[Side]
    plies: int
    sheep_captured: int
    moves: List[str] = field(default_factory=list)


def play_match(
    sheep_difficulty: Union[Difficulty, str],
    kitten_difficulty: Union[Difficulty, str],
    max_plies: int = 200,
    rng: Optional[random.Random] = None,
    evaluator: Optional[Evaluator] = None,
) -> MatchResult:
    """
    Play one game from the starting position between two difficulty levels.

    Args:
        sheep_difficulty: Level playing the Sheep
        kitten_difficulty: Level playing the Kittens
        max_plies: Stop as a draw after this many moves
        rng: Random source for easy-mode random moves
        evaluator: Position evaluator shared by both sides

    Returns:
        MatchResult for the game
    """
    levels = {
        Side.SHEEP: Difficulty(sheep_difficulty),
        Side.KITTEN: Difficulty(kitten_difficulty),
    }
    rng = rng if rng is not None else random.Random()
    evaluator = evaluator if evaluator else HeuristicEvaluator()

    state = create_initial_state()
    moves: List[str] = []

    while state.winner is None and len(moves) < max_plies:
        result = choose_move(state, levels[state.turn], evaluator, rng)
        if result.move is None:
            break

        state = apply_move(state, result.move)
        moves.append(move_to_notation(result.move))

    logger.info(
        f"Match {levels[Side.SHEEP].value} (sheep) vs {levels[Side.KITTEN].value} (kittens): "
        f"winner={state.winner.value if state.winner else 'none'} plies={len(moves)} "
        f"captured={state.sheep_captured}"
    )

    return MatchResult(
        winner=state.winner,
        plies=len(moves),
        sheep_captured=state.sheep_captured,
        moves=moves,
    )


def run_self_play(
    sheep_difficulty: Union[Difficulty, str],
    kitten_difficulty: Union[Difficulty, str],
    games: int = 10,
    max_plies: int = 200,
    seed: Optional[int] = None,
    progress: bool = True,
) -> Dict[str, Any]:
    """
    Play a series of matches and aggregate the results.

    Args:
        sheep_difficulty: Level playing the Sheep
        kitten_difficulty: Level playing the Kittens
        games: Number of games to play
        max_plies: Ply limit per game
        seed: Seed for the shared random source (None for random)
        progress: Show a tqdm progress bar

    Returns:
        Dictionary with:
            - sheep_wins / kitten_wins / draws: Game counts
            - avg_plies: Average game length
            - avg_captured: Average sheep captured per game
            - results: List of MatchResult objects
    """
    rng = random.Random(seed)
    results = []

    for _ in tqdm(
        range(games),
        desc=f"{Difficulty(sheep_difficulty).value} vs {Difficulty(kitten_difficulty).value}",
        disable=not progress,
        leave=False,
    ):
        results.append(play_match(sheep_difficulty, kitten_difficulty, max_plies, rng))

    sheep_wins = sum(1 for r in results if r.winner is Side.SHEEP)
    kitten_wins = sum(1 for r in results if r.winner is Side.KITTEN)

    return {
        'sheep_wins': sheep_wins,
        'kitten_wins': kitten_wins,
        'draws': len(results) - sheep_wins - kitten_wins,
        'avg_plies': sum(r.plies for r in results) / len(results) if results else 0,
        'avg_captured': sum(r.sheep_captured for r in results) / len(results) if results else 0,
        'results': results,
    }


# ============================================================================
# Position Export
# ============================================================================

def _empty_positions() -> Tuple[np.ndarray, np.ndarray]:
    return np.zeros((0, 6, BOARD_SIZE, BOARD_SIZE), dtype=np.float32), np.zeros(0, dtype=np.int8)


def match_positions(result: MatchResult) -> Tuple[np.ndarray, np.ndarray]:
    """
    Replay a match and encode every position before each move.

    Args:
        result: Match to replay

    Returns:
        Tuple of:
            - tensors: (N, 6, 5, 5) float32 feature planes (state_to_tensor)
            - game_results: (N,) int8, 1 Kitten win, -1 Sheep win, 0 unfinished

    Raises:
        ValueError: If a recorded move is not legal in the replayed game
    """
    outcome = {Side.KITTEN: 1, Side.SHEEP: -1, None: 0}[result.winner]

    state = create_initial_state()
    tensors = []

    for text in result.moves:
        tensors.append(state_to_tensor(state))
        next_state = apply_move(state, notation_to_move(text))
        if next_state is state:
            raise ValueError(f"Illegal move in match record: {text}")
        state = next_state

    if not tensors:
        return _empty_positions()

    return np.stack(tensors), np.full(len(tensors), outcome, dtype=np.int8)


def save_match_positions(results: List[MatchResult], output_path: Union[Path, str]) -> int:
    """
    Write the positions of a set of matches to a compressed .npz file.

    The archive holds two arrays: 'tensors' (N, 6, 5, 5) and
    'game_results' (N,), in the layout returned by match_positions().

    Args:
        results: Matches to export
        output_path: Destination .npz file

    Returns:
        Number of positions written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    encoded = [_empty_positions()] + [match_positions(r) for r in results]
    tensors = np.concatenate([t for t, _ in encoded])
    game_results = np.concatenate([g for _, g in encoded])

    np.savez_compressed(output_path, tensors=tensors, game_results=game_results)
    logger.info(f"Wrote {len(tensors):,} positions from {len(results)} games to {output_path}")

    return len(tensors)


def load_match_positions(path: Union[Path, str]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Load and validate positions written by save_match_positions().

    Every board is decoded with tensor_to_board(), so an archive with a
    cell holding both pieces is rejected.

    Args:
        path: .npz file to read

    Returns:
        Tuple of (tensors, game_results)

    Raises:
        ValueError: If the arrays have the wrong shape or a board is invalid
    """
    with np.load(path) as archive:
        tensors = archive['tensors']
        game_results = archive['game_results']

    if tensors.ndim != 4 or tensors.shape[1:] != (6, BOARD_SIZE, BOARD_SIZE):
        raise ValueError(f"Invalid tensors shape: {tensors.shape}. Expected (N, 6, 5, 5)")
    if game_results.shape != (len(tensors),):
        raise ValueError(
            f"Expected {len(tensors)} game results, got shape {game_results.shape}"
        )

    for i, planes in enumerate(tensors):
        try:
            tensor_to_board(planes[:2])
        except ValueError as e:
            raise ValueError(f"Position {i}: {e}") from e

    return tensors, game_results
