"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, we can swap between evaluators without
modifying the search algorithm.

Key Principles:
    1. Evaluators are stateless
    2. evaluate() always returns a score from the Kittens' perspective
    3. Positive = Kitten advantage, Negative = Sheep advantage
    4. Finished games return KITTEN_WIN_SCORE / SHEEP_WIN_SCORE

Convention:
    - Integer scores, one captured sheep = 100
    - Terminal scores dominate every heuristic term
"""

from abc import ABC, abstractmethod
from typing import Optional
from sheeps_kittens.types import GameState, Side

# Evaluation constants
KITTEN_WIN_SCORE = 10000
SHEEP_WIN_SCORE = -10000


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method. This ensures compatibility with the search algorithm.

    Methods:
        evaluate(state): Returns position score (Kittens maximize)
    """

    @abstractmethod
    def evaluate(self, state: GameState) -> int:
        """
        Evaluate a position from the Kittens' perspective.

        Args:
            state: Game state to evaluate

        Returns:
            int: Score, positive favours Kittens
        """
        pass

    def evaluate_terminal(self, state: GameState) -> Optional[int]:
        """
        Score a finished game.

        Args:
            state: Game state

        Returns:
            int: Win score if the game is over
            None: If the game is still running
        """
        if state.winner is Side.KITTEN:
            return KITTEN_WIN_SCORE
        if state.winner is Side.SHEEP:
            return SHEEP_WIN_SCORE
        return None

    def __call__(self, state: GameState) -> int:
        return self.evaluate(state)

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
