"""
Utilities Module

This module provides testing and benchmarking helpers for the search.

Key Components:
    - Puzzle suite: positions with a known best move
    - Self-play: AI-vs-AI matches between difficulty levels
    - Position export: self-play positions as numpy feature planes

Testing Methodology:
    Puzzles check that the search finds basic tactics at a given depth.
    Self-play checks that deeper levels actually win more games.
"""

from sheeps_kittens.utils.testing import (
    PUZZLE_POSITIONS,
    MatchResult,
    PuzzlePosition,
    PuzzleResult,
    evaluate_puzzle,
    load_match_positions,
    match_positions,
    play_match,
    run_puzzles,
    run_self_play,
    save_match_positions,
)

__all__ = [
    'PUZZLE_POSITIONS',
    'MatchResult',
    'PuzzlePosition',
    'PuzzleResult',
    'evaluate_puzzle',
    'load_match_positions',
    'match_positions',
    'play_match',
    'run_puzzles',
    'run_self_play',
    'save_match_positions',
]
