"""
Unit Tests for Evaluation Module

Tests for the heuristic evaluator:
    - Exact weights on small hand-computed positions
    - Terminal scores
    - Evaluator interface
"""

import pytest
from sheeps_kittens.board.representation import string_to_board
from sheeps_kittens.evaluation import (
    KITTEN_WIN_SCORE,
    SHEEP_WIN_SCORE,
    Evaluator,
    HeuristicEvaluator,
    evaluate,
)
from sheeps_kittens.game import create_initial_state, forfeit_game, handle_tap
from sheeps_kittens.types import GameState, Phase, Side


def make_state(board: str, phase: Phase, placed: int = 0, captured: int = 0) -> GameState:
    return GameState(
        board=string_to_board(board),
        turn=Side.KITTEN,
        phase=phase,
        sheep_placed=placed,
        sheep_captured=captured,
    )


class TestHeuristicEvaluator:
    """Tests for HeuristicEvaluator."""

    @pytest.fixture
    def evaluator(self):
        return HeuristicEvaluator()

    def test_initial_position(self, evaluator):
        """Four corner kittens with three moves each: 4 * 30."""
        assert evaluator.evaluate(create_initial_state()) == 120

    def test_placed_sheep_penalty(self, evaluator):
        state = handle_tap(create_initial_state(), 2, 2)
        assert evaluator.evaluate(state) == 120 - 2

    def test_captures_count(self, evaluator):
        base = make_state("K...K/...../...../...../K...K", Phase.PLACEMENT)
        captured = make_state("K...K/...../...../...../K...K", Phase.PLACEMENT, captured=2)

        assert evaluator.evaluate(captured) - evaluator.evaluate(base) == 200

    def test_center_kitten_with_threat(self, evaluator):
        """
        Kitten on (2, 2), sheep on (2, 1):
        7 steps + 1 jump = 80, one threat = 30, centre = 12.
        """
        board = "...../...../.SK../...../....."

        assert evaluator.evaluate(make_state(board, Phase.PLACEMENT, placed=3)) == 122 - 6
        assert evaluator.evaluate(make_state(board, Phase.MOVEMENT, placed=20)) == 122 - 5

    def test_trapped_kitten(self, evaluator):
        """Kitten with no moves only gets the -25 penalty."""
        board = "KSS../SS.../S.S../...../....."

        assert evaluator.evaluate(make_state(board, Phase.PLACEMENT, placed=6)) == -25 - 12
        assert evaluator.evaluate(make_state(board, Phase.MOVEMENT, placed=20)) == -25 - 15

    def test_single_move_is_near_trapped(self, evaluator):
        """One legal move still triggers the penalty: 10 - 25."""
        board = "K.S../SS.../S.S../...../....."
        assert evaluator.evaluate(make_state(board, Phase.PLACEMENT, placed=5)) == 10 - 25 - 10

    def test_evaluate_kitten(self, evaluator):
        state = create_initial_state()
        assert evaluator.evaluate_kitten(state, 0, 0) == 30

    def test_terminal_scores(self, evaluator):
        sheep_forfeit = forfeit_game(create_initial_state())
        kitten_forfeit = forfeit_game(handle_tap(create_initial_state(), 2, 2))

        assert evaluator.evaluate(sheep_forfeit) == KITTEN_WIN_SCORE
        assert evaluator.evaluate(kitten_forfeit) == SHEEP_WIN_SCORE
        assert KITTEN_WIN_SCORE == 10000
        assert SHEEP_WIN_SCORE == -10000

    def test_module_level_evaluate(self, evaluator):
        state = handle_tap(create_initial_state(), 1, 1)
        assert evaluate(state) == evaluator.evaluate(state)

    def test_callable(self, evaluator):
        state = create_initial_state()
        assert evaluator(state) == evaluator.evaluate(state)


class TestEvaluatorInterface:
    """Tests for the Evaluator base class."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            Evaluator()

    def test_custom_evaluator(self):
        class CaptureCounter(Evaluator):
            def evaluate(self, state):
                terminal = self.evaluate_terminal(state)
                return terminal if terminal is not None else state.sheep_captured

        evaluator = CaptureCounter()

        assert evaluator.evaluate(create_initial_state()) == 0
        assert evaluator.evaluate_terminal(create_initial_state()) is None
        assert repr(evaluator) == "CaptureCounter()"
