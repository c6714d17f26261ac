"""
Unit Tests for Board Module

Tests for topology and representations:
    - Diagonal-node parity over every cell
    - Neighbour counts and contents
    - Capture targets, including the diagonal parity rule
    - Board strings, rendering and numpy feature planes
"""

import warnings
from pathlib import Path
import numpy as np
import pytest
from sheeps_kittens.board import topology
from sheeps_kittens.board import (
    CaptureTarget,
    board_to_string,
    board_to_tensor,
    get_capture_targets,
    get_neighbors,
    get_valid_moves_for_piece,
    has_diagonals,
    is_in_bounds,
    render_board,
    state_to_tensor,
    string_to_board,
    tensor_to_board,
)
from sheeps_kittens.board.topology import DIAGONAL_DIRECTIONS
from sheeps_kittens.game import create_initial_state
from sheeps_kittens.types import BOARD_SIZE, GameState, Phase, Piece, Side, board_with, empty_board

ALL_CELLS = [(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]


class TestTopology:
    """Tests for adjacency on the 5x5 grid."""

    def test_module_compiles_without_warnings(self):
        """The ASCII diagram in the module docstring holds no escape sequences."""
        source = Path(topology.__file__).read_text()

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(source, topology.__file__, "exec")

        assert "| \\   |   / |" in topology.__doc__

    @pytest.mark.parametrize("r,c", ALL_CELLS)
    def test_parity_invariant(self, r, c):
        """Every cell is a diagonal node exactly when row + col is even."""
        assert has_diagonals(r, c) == ((r + c) % 2 == 0)

        neighbors = get_neighbors(r, c)
        diagonal = [(nr, nc) for nr, nc in neighbors if nr != r and nc != c]

        if has_diagonals(r, c):
            assert len(diagonal) > 0, f"({r},{c}) should have diagonal neighbours"
        else:
            assert diagonal == [], f"({r},{c}) should be orthogonal only"

    @pytest.mark.parametrize("cell,count", [
        ((0, 0), 3),
        ((0, 1), 3),
        ((2, 2), 8),
        ((0, 2), 5),
        ((1, 0), 3),
        ((1, 1), 8),
        ((1, 2), 4),
        ((4, 4), 3),
    ])
    def test_neighbor_counts(self, cell, count):
        assert len(get_neighbors(*cell)) == count

    def test_neighbors_are_symmetric(self):
        """If a is adjacent to b then b is adjacent to a."""
        for r, c in ALL_CELLS:
            for nr, nc in get_neighbors(r, c):
                assert (r, c) in get_neighbors(nr, nc)

    def test_neighbors_in_bounds(self):
        for r, c in ALL_CELLS:
            for nr, nc in get_neighbors(r, c):
                assert is_in_bounds(nr, nc)

    def test_corner_neighbors(self):
        assert set(get_neighbors(0, 0)) == {(0, 1), (1, 0), (1, 1)}

    def test_neighbors_returns_fresh_list(self):
        neighbors = get_neighbors(2, 2)
        neighbors.clear()
        assert len(get_neighbors(2, 2)) == 8

    def test_is_in_bounds(self):
        assert is_in_bounds(0, 0)
        assert is_in_bounds(4, 4)
        assert not is_in_bounds(-1, 0)
        assert not is_in_bounds(0, 5)


class TestCaptureTargets:
    """Tests for kitten jump generation."""

    def test_orthogonal_capture(self):
        board = board_with(empty_board(), {(2, 0): Piece.KITTEN, (2, 1): Piece.SHEEP})

        targets = get_capture_targets(board, 2, 0)

        assert CaptureTarget(to=(2, 2), captured=(2, 1)) in targets

    def test_diagonal_capture_from_diagonal_node(self):
        board = board_with(empty_board(), {(0, 0): Piece.KITTEN, (1, 1): Piece.SHEEP})

        targets = get_capture_targets(board, 0, 0)

        assert targets == [CaptureTarget(to=(2, 2), captured=(1, 1))]

    def test_no_diagonal_capture_from_odd_cell(self):
        board = board_with(empty_board(), {(0, 1): Piece.KITTEN, (1, 2): Piece.SHEEP})

        assert get_capture_targets(board, 0, 1) == []

    @pytest.mark.parametrize("r,c", ALL_CELLS)
    def test_diagonal_jumps_follow_parity(self, r, c):
        """A diagonal jump exists only from diagonal nodes, for every cell and direction."""
        for dr, dc in DIAGONAL_DIRECTIONS:
            mid, dest = (r + dr, c + dc), (r + 2 * dr, c + 2 * dc)
            if not (is_in_bounds(*mid) and is_in_bounds(*dest)):
                continue

            board = board_with(empty_board(), {(r, c): Piece.KITTEN, mid: Piece.SHEEP})
            found = CaptureTarget(dest, mid) in get_capture_targets(board, r, c)

            assert found == has_diagonals(r, c), f"jump {(r, c)} over {mid} to {dest}"

    def test_blocked_landing(self):
        board = board_with(
            empty_board(),
            {(2, 0): Piece.KITTEN, (2, 1): Piece.SHEEP, (2, 2): Piece.SHEEP},
        )
        assert get_capture_targets(board, 2, 0) == []

    def test_no_jump_over_kitten(self):
        board = board_with(empty_board(), {(2, 0): Piece.KITTEN, (2, 1): Piece.KITTEN})
        assert get_capture_targets(board, 2, 0) == []

    def test_no_jump_off_board(self):
        board = board_with(empty_board(), {(0, 1): Piece.KITTEN, (0, 0): Piece.SHEEP})
        assert get_capture_targets(board, 0, 1) == []

    def test_sheep_never_capture(self):
        board = board_with(empty_board(), {(2, 0): Piece.SHEEP, (2, 1): Piece.SHEEP})
        assert get_capture_targets(board, 2, 0) == []

    def test_center_kitten_surrounded(self):
        """Centre kitten with sheep on all 8 neighbours can jump in every direction."""
        changes = {(2, 2): Piece.KITTEN}
        changes.update({pos: Piece.SHEEP for pos in get_neighbors(2, 2)})
        board = board_with(empty_board(), changes)

        targets = get_capture_targets(board, 2, 2)

        assert len(targets) == 8
        assert {t.to for t in targets} == {
            (0, 0), (0, 2), (0, 4), (2, 0), (2, 4), (4, 0), (4, 2), (4, 4),
        }


class TestValidMoves:
    """Tests for per-piece destinations."""

    def test_kitten_steps_and_jumps(self):
        board = board_with(empty_board(), {(0, 0): Piece.KITTEN, (1, 1): Piece.SHEEP})

        moves = get_valid_moves_for_piece(board, 0, 0, Piece.KITTEN)

        assert moves == [(1, 0), (0, 1), (2, 2)]

    def test_sheep_steps_only(self):
        board = board_with(empty_board(), {(0, 0): Piece.SHEEP, (1, 1): Piece.SHEEP})

        moves = get_valid_moves_for_piece(board, 0, 0, Piece.SHEEP)

        assert moves == [(1, 0), (0, 1)]

    def test_fully_blocked_corner(self):
        state = create_initial_state()
        board = board_with(state.board, {
            pos: Piece.SHEEP for pos in [(0, 1), (1, 0), (1, 1), (0, 2), (2, 0), (2, 2)]
        })
        assert get_valid_moves_for_piece(board, 0, 0, Piece.KITTEN) == []


class TestRepresentation:
    """Tests for board strings and feature planes."""

    @pytest.fixture
    def state(self):
        return create_initial_state()

    def test_initial_board_string(self, state):
        assert board_to_string(state.board) == "K...K/...../...../...../K...K"

    def test_string_round_trip(self):
        text = "KS..K/..S../.SSS./..S../K...K"
        assert board_to_string(string_to_board(text)) == text

    def test_string_is_case_insensitive(self):
        assert string_to_board("k...k/...../..s../...../k...k")[2][2] is Piece.SHEEP

    @pytest.mark.parametrize("text", [
        "K...K/...../...../.....",
        "K...K/...../...../...../K...K/.....",
        "K...K/..../...../...../K...K",
        "K...K/...../..X../...../K...K",
        "",
    ])
    def test_invalid_board_strings(self, text):
        with pytest.raises(ValueError):
            string_to_board(text)

    def test_render_board(self, state):
        lines = render_board(state.board).splitlines()

        assert lines[0] == "  0 1 2 3 4"
        assert lines[1] == "0 K . . . K"
        assert lines[3] == "2 . . . . ."
        assert len(lines) == 6

    def test_board_to_tensor(self, state):
        board = board_with(state.board, {(2, 2): Piece.SHEEP})

        tensor = board_to_tensor(board)

        assert tensor.shape == (2, 5, 5)
        assert tensor.dtype == np.float32
        assert tensor[0].sum() == 1.0
        assert tensor[0, 2, 2] == 1.0
        assert tensor[1].sum() == 4.0
        assert tensor[1, 0, 0] == 1.0

    def test_tensor_to_board_inverts(self):
        board = string_to_board("KS..K/..S../.SSS./..S../K...K")
        assert tensor_to_board(board_to_tensor(board)) == board

    def test_tensor_to_board_bad_shape(self):
        with pytest.raises(ValueError, match="shape"):
            tensor_to_board(np.zeros((3, 5, 5), dtype=np.float32))

    def test_tensor_to_board_double_occupied(self):
        tensor = np.zeros((2, 5, 5), dtype=np.float32)
        tensor[0, 1, 1] = 1.0
        tensor[1, 1, 1] = 1.0

        with pytest.raises(ValueError, match="same cell"):
            tensor_to_board(tensor)

    def test_state_to_tensor_planes(self):
        state = GameState(
            board=string_to_board("K...K/...../..S../...../K...K"),
            turn=Side.SHEEP,
            phase=Phase.PLACEMENT,
            sheep_placed=10,
            sheep_captured=2,
        )

        tensor = state_to_tensor(state)

        assert tensor.shape == (6, 5, 5)
        assert tensor.dtype == np.float32
        assert tensor[2, 0, 0] == 1.0 and tensor[2, 0, 1] == 0.0
        assert tensor[2].sum() == 13.0
        assert np.all(tensor[3] == 1.0)
        assert np.allclose(tensor[4], 0.5)
        assert np.allclose(tensor[5], 0.4)

    def test_state_to_tensor_kitten_to_move(self):
        state = GameState(board=create_initial_state().board, turn=Side.KITTEN)
        assert np.all(state_to_tensor(state)[3] == 0.0)
