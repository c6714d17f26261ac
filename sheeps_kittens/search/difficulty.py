"""
Difficulty Levels

Each level is a fixed search depth plus a chance of ignoring the search
and playing a uniformly random legal move instead.

    Level    Depth   Random move chance
    easy     2       30%
    medium   4       0%
    hard     6       0%
"""

from enum import Enum


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


DEPTH_MAP = {
    Difficulty.EASY: 2,
    Difficulty.MEDIUM: 4,
    Difficulty.HARD: 6,
}

RANDOM_MOVE_CHANCE = {
    Difficulty.EASY: 0.3,
    Difficulty.MEDIUM: 0.0,
    Difficulty.HARD: 0.0,
}
