"""
Evaluation Module

This module provides position evaluation functions for the engine.
The key design principle is that evaluators are SWAPPABLE - the search
algorithm works with any evaluator that implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - HeuristicEvaluator: Captures, kitten mobility and placement terms

Data Flow:
    GameState -> evaluator.evaluate() -> int
                                         Positive = Kitten advantage
                                         Negative = Sheep advantage
"""

from sheeps_kittens.evaluation.base import Evaluator, KITTEN_WIN_SCORE, SHEEP_WIN_SCORE
from sheeps_kittens.evaluation.heuristic import HeuristicEvaluator, evaluate

__all__ = ['Evaluator', 'HeuristicEvaluator', 'evaluate', 'KITTEN_WIN_SCORE', 'SHEEP_WIN_SCORE']
