"""
Unit Tests for Benchmark Utilities

Tests for the puzzle suite and self-play helpers.
"""

import random
import numpy as np
import pytest
from sheeps_kittens.board.representation import state_to_tensor
from sheeps_kittens.game import apply_move, create_initial_state, notation_to_move
from sheeps_kittens.types import Phase, Side
from sheeps_kittens.utils import (
    PUZZLE_POSITIONS,
    MatchResult,
    evaluate_puzzle,
    load_match_positions,
    match_positions,
    play_match,
    run_puzzles,
    run_self_play,
    save_match_positions,
)


class TestPuzzles:
    """Tests for the puzzle suite."""

    @pytest.fixture
    def puzzles(self):
        return {p.id: p for p in PUZZLE_POSITIONS}

    def test_to_state(self, puzzles):
        state = puzzles["SK.01"].to_state()

        assert state.turn is Side.KITTEN
        assert state.phase is Phase.PLACEMENT
        assert state.sheep_placed == 10
        assert state.sheep_captured == 4
        assert state.winner is None

    def test_puzzle_moves_are_legal(self, puzzles):
        for puzzle in puzzles.values():
            state = puzzle.to_state()
            for text in puzzle.best_moves:
                assert apply_move(state, notation_to_move(text)) is not state, f"{puzzle.id} {text}"

    @pytest.mark.parametrize("puzzle_id", ["SK.01", "SK.02", "SK.04"])
    def test_solved_at_depth_two(self, puzzles, puzzle_id):
        result = evaluate_puzzle(puzzles[puzzle_id], depth=2)

        assert result.correct, f"{puzzle_id}: got {result.found_move}"
        assert result.nodes_searched > 0
        assert result.depth == 2

    def test_run_puzzles_depth_one(self):
        result = run_puzzles(depth=1, verbose=False)

        assert result['total'] == len(PUZZLE_POSITIONS)
        assert result['score'] == result['total']
        assert result['percentage'] == 100.0

    def test_verbose_output(self, puzzles, capsys):
        evaluate_puzzle(puzzles["SK.01"], depth=1, verbose=True)

        output = capsys.readouterr().out
        assert "SK.01" in output
        assert "CORRECT" in output


class TestSelfPlay:
    """Tests for AI-vs-AI matches."""

    def test_match_replays(self):
        result = play_match("easy", "easy", max_plies=30, rng=random.Random(1))

        assert result.plies == len(result.moves)
        assert result.plies <= 30
        if result.winner is None:
            assert result.plies == 30

        state = create_initial_state()
        for text in result.moves:
            next_state = apply_move(state, notation_to_move(text))
            assert next_state is not state, text
            state = next_state

        assert state.winner == result.winner
        assert state.sheep_captured == result.sheep_captured

    def test_seeded_matches_repeat(self):
        first = play_match("easy", "easy", max_plies=20, rng=random.Random(5))
        second = play_match("easy", "easy", max_plies=20, rng=random.Random(5))

        assert first.moves == second.moves

    def test_run_self_play(self):
        result = run_self_play("easy", "easy", games=2, max_plies=10, seed=0, progress=False)

        assert len(result['results']) == 2
        assert result['sheep_wins'] + result['kitten_wins'] + result['draws'] == 2
        assert result['avg_plies'] <= 10


class TestPositionExport:
    """Tests for exporting self-play positions as feature planes."""

    @pytest.fixture
    def matches(self):
        rng = random.Random(2)
        return [play_match("easy", "easy", max_plies=12, rng=rng) for _ in range(2)]

    def test_match_positions(self, matches):
        tensors, game_results = match_positions(matches[0])

        assert tensors.shape == (matches[0].plies, 6, 5, 5)
        assert tensors.dtype == np.float32
        assert game_results.dtype == np.int8
        np.testing.assert_array_equal(tensors[0], state_to_tensor(create_initial_state()))

        expected = {Side.KITTEN: 1, Side.SHEEP: -1, None: 0}[matches[0].winner]
        assert (game_results == expected).all()

    def test_empty_match(self):
        tensors, game_results = match_positions(MatchResult(winner=None, plies=0, sheep_captured=0))

        assert tensors.shape == (0, 6, 5, 5)
        assert game_results.shape == (0,)

    def test_illegal_record_rejected(self):
        record = MatchResult(winner=None, plies=1, sheep_captured=0, moves=["00-11"])

        with pytest.raises(ValueError, match="00-11"):
            match_positions(record)

    def test_save_and_load(self, matches, tmp_path):
        path = tmp_path / "export" / "positions.npz"

        count = save_match_positions(matches, path)
        tensors, game_results = load_match_positions(path)

        assert count == sum(m.plies for m in matches)
        assert tensors.shape == (count, 6, 5, 5)
        assert game_results.shape == (count,)

    def test_load_rejects_overlapping_pieces(self, tmp_path):
        tensors = np.zeros((1, 6, 5, 5), dtype=np.float32)
        tensors[0, 0, 0, 0] = 1.0
        tensors[0, 1, 0, 0] = 1.0
        path = tmp_path / "bad.npz"
        np.savez(path, tensors=tensors, game_results=np.zeros(1, dtype=np.int8))

        with pytest.raises(ValueError, match="Position 0"):
            load_match_positions(path)

    def test_load_rejects_bad_shape(self, tmp_path):
        path = tmp_path / "bad.npz"
        np.savez(path, tensors=np.zeros((3, 2, 5, 5)), game_results=np.zeros(3, dtype=np.int8))

        with pytest.raises(ValueError, match="shape"):
            load_match_positions(path)
