"""
Tests for the reducer, spawner and terminal rules.

Tests:
- Whole-board moves in each direction
- Merge ordering for RIGHT/DOWN
- No-op detection
- Deterministic spawning
- Win/loss evaluation
"""

import random

import pytest

from ..engine_core.board import Board, Direction
from ..engine_core.reducer import apply_move, legal_directions
from ..engine_core.spawner import Spawner, SequenceRandom
from ..engine_core.rules import GameStatus, evaluate, is_lost, is_won


class TestApplyMove:
    """Tests for sliding the whole board."""

    def test_left(self):
        board = Board.from_rows([
            [2, 2, 2, 0],
            [0, 4, 0, 4],
            [8, 0, 0, 0],
            [0, 0, 0, 2],
        ])
        outcome = apply_move(board, Direction.LEFT)

        assert outcome.changed
        assert outcome.board.to_rows() == [
            [4, 2, 0, 0],
            [8, 0, 0, 0],
            [8, 0, 0, 0],
            [2, 0, 0, 0],
        ]
        assert outcome.gained == 4 + 8
        assert outcome.merges == 2

    def test_right_merges_from_right_edge(self):
        """Three 2s sliding right merge the two nearest the right edge."""
        board = Board.from_rows([
            [2, 2, 2, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        outcome = apply_move(board, Direction.RIGHT)

        assert outcome.board.to_rows()[0] == [0, 0, 2, 4]
        assert outcome.gained == 4

    def test_up(self):
        board = Board.from_rows([
            [0, 0, 0, 0],
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [4, 0, 0, 0],
        ])
        outcome = apply_move(board, Direction.UP)

        assert [row[0] for row in outcome.board.to_rows()] == [4, 4, 0, 0]
        assert outcome.gained == 4

    def test_down_merges_from_bottom_edge(self):
        """A column of 2,2,2 sliding down merges the bottom pair."""
        board = Board.from_rows([
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [2, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        outcome = apply_move(board, Direction.DOWN)

        assert [row[0] for row in outcome.board.to_rows()] == [0, 0, 2, 4]

    def test_lines_are_independent(self):
        """A merge in one row never pulls tiles from another."""
        board = Board.from_rows([
            [2, 2, 0, 0],
            [2, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        outcome = apply_move(board, Direction.LEFT)

        assert outcome.board.to_rows()[0] == [4, 0, 0, 0]
        assert outcome.board.to_rows()[1] == [2, 0, 0, 0]

    def test_noop_move(self):
        """A compacted, unmergeable board does not change."""
        board = Board.from_rows([
            [4, 2, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        outcome = apply_move(board, Direction.LEFT)

        assert not outcome.changed
        assert outcome.gained == 0
        assert outcome.board == board

    def test_input_board_untouched(self):
        board = Board.from_rows([[2, 2], [0, 0]])
        apply_move(board, Direction.LEFT)
        assert board.to_rows() == [[2, 2], [0, 0]]

    def test_score_never_exceeds_total(self):
        """Merging conserves the tile total and gains at most that total."""
        rng = random.Random(3)
        for _ in range(50):
            rows = [[rng.choice([0, 2, 2, 4, 8]) for _ in range(4)] for _ in range(4)]
            board = Board.from_rows(rows)
            for direction in Direction:
                outcome = apply_move(board, direction)
                assert outcome.board.total() == board.total()
                assert outcome.board.tile_count() == board.tile_count() - outcome.merges
                assert outcome.gained <= board.total()

    def test_legal_directions(self):
        board = Board.from_rows([
            [2, 4, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        assert set(legal_directions(board)) == {Direction.RIGHT, Direction.DOWN}


class TestSpawner:
    """Tests for tile spawning."""

    def test_spawns_two_in_chosen_cell(self):
        board = Board.from_rows([[2, 0], [0, 0]])
        spawner = Spawner(SequenceRandom([1]))

        new_board, position = spawner.spawn(board)

        assert position == (1, 0)
        assert new_board.to_rows() == [[2, 0], [2, 0]]

    def test_exactly_one_new_tile(self):
        board = Board.empty()
        spawner = Spawner(random.Random(11))

        new_board, _ = spawner.spawn(board)

        assert new_board.tile_count() == 1
        assert new_board.max_tile() == 2

    def test_full_board_is_skipped(self, locked_board):
        spawner = Spawner(SequenceRandom([0]))

        new_board, position = spawner.spawn(locked_board)

        assert position is None
        assert new_board == locked_board

    def test_sequence_random_wraps(self):
        rng = SequenceRandom([5, 1])
        assert [rng.randrange(3) for _ in range(4)] == [2, 1, 2, 1]

    def test_sequence_random_needs_values(self):
        with pytest.raises(ValueError):
            SequenceRandom([])


class TestRules:
    """Tests for win/loss evaluation."""

    def test_win_on_2048(self, almost_won_board):
        won = almost_won_board.with_cell(0, 0, 2048).with_cell(0, 1, 0)
        assert is_won(won)
        assert evaluate(won) == GameStatus.WON

    def test_larger_tile_alone_is_not_a_win(self):
        board = Board.from_rows([[4096, 0], [0, 0]])
        assert evaluate(board) == GameStatus.ACTIVE

    def test_locked_board_is_lost(self, locked_board):
        assert is_lost(locked_board)
        assert evaluate(locked_board) == GameStatus.LOST

    def test_full_board_with_pair_is_active(self):
        """A full board is not lost while a merge remains."""
        board = Board.from_rows([
            [2, 4, 2, 4],
            [4, 2, 4, 2],
            [2, 4, 2, 4],
            [4, 2, 4, 4],
        ])
        assert evaluate(board) == GameStatus.ACTIVE

    def test_no_pairs_with_empty_cell_is_active(self):
        """No neighbours match, but there is room to move."""
        board = Board.from_rows([
            [2, 4, 2, 4],
            [4, 2, 4, 2],
            [2, 4, 2, 4],
            [4, 2, 4, 0],
        ])
        assert evaluate(board) == GameStatus.ACTIVE

    def test_win_takes_precedence_over_loss(self):
        board = Board.from_rows([[2048, 4], [4, 2]])
        assert evaluate(board) == GameStatus.WON
