"""
Search Module

This module implements the computer opponent. The algorithm is fixed-depth
minimax with alpha-beta pruning over a swappable evaluator, with the depth
and a random-move chance set by the difficulty level.

Key Components:
    - get_all_moves: Legal move enumeration for the side to move
    - order_moves: Captures first, then centralizing moves
    - minimax: Core search algorithm with alpha-beta pruning
    - search_root / choose_move / find_best_move: Root-level move selection
    - Difficulty: easy / medium / hard
"""

from sheeps_kittens.search.difficulty import Difficulty, DEPTH_MAP, RANDOM_MOVE_CHANCE
from sheeps_kittens.search.minimax import (
    SearchResult,
    choose_move,
    find_best_move,
    get_all_moves,
    minimax,
    order_moves,
    search_root,
)

__all__ = [
    'Difficulty',
    'DEPTH_MAP',
    'RANDOM_MOVE_CHANCE',
    'SearchResult',
    'choose_move',
    'find_best_move',
    'get_all_moves',
    'minimax',
    'order_moves',
    'search_root',
]
