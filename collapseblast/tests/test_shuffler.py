import logging
import random
from collections import Counter

import pytest

from collapseblast.game.board import Board
from collapseblast.game.deadlock import DeadlockDetector
from collapseblast.game.group_finder import GroupFinder
from collapseblast.game.shuffler import MAX_GUARANTEE_ATTEMPTS, Shuffler
from .conftest import RANDOM_SEEDS, board_from_config, occupied_positions, random_board


def make_shuffler(board: Board, seed: int = 0) -> Shuffler:
    detector = DeadlockDetector(board, GroupFinder(board))
    return Shuffler(board, detector, random.Random(seed))


def color_counts(board: Board) -> Counter:
    return Counter(board.color_at(row, col) for row, col in occupied_positions(board))


class TestFisherYates:
    """Test the permutation step on its own"""

    def test_permutation_keeps_values(self):
        shuffler = make_shuffler(Board(1, 1))
        values = list(range(50))
        shuffler._fisher_yates(values)
        assert sorted(values) == list(range(50))

    def test_permutation_changes_order(self):
        shuffler = make_shuffler(Board(1, 1), seed=3)
        values = list(range(50))
        shuffler._fisher_yates(values)
        assert values != list(range(50))


class TestShuffle:
    """Test shuffling and the move guarantee"""

    def test_occupancy_is_preserved(self):
        board = random_board(6, 6, 5, seed=1, empty_ratio=0.3)
        before = occupied_positions(board)
        make_shuffler(board).shuffle()
        assert occupied_positions(board) == before

    @pytest.mark.parametrize("seed", RANDOM_SEEDS)
    def test_permutation_preserves_color_multiset(self, seed, monkeypatch):
        # many colors make the board deadlock after permuting; with pair forcing
        # disabled the board holds exactly what the write-back produced
        board = random_board(5, 5, 25, seed)
        before = color_counts(board)
        shuffler = make_shuffler(board, seed)
        monkeypatch.setattr(shuffler, "_create_valid_pair", lambda: False)

        result = shuffler.shuffle()

        assert result.permuted
        assert result.forced_pairs == 0
        assert color_counts(board) == before

    @pytest.mark.parametrize("seed", RANDOM_SEEDS)
    def test_guarantee_pass_changes_at_most_one_cell_per_pair(self, seed):
        board = random_board(5, 5, 25, seed)
        before = color_counts(board)
        result = make_shuffler(board, seed).shuffle()

        after = color_counts(board)
        assert sum(after.values()) == sum(before.values())
        changed = sum((before - after).values())
        assert changed <= result.forced_pairs

    @pytest.mark.parametrize("seed", RANDOM_SEEDS)
    def test_board_is_solvable_after_shuffle(self, seed):
        # many colors make a deadlocked permutation very likely
        board = random_board(5, 6, 30, seed)
        result = make_shuffler(board, seed).shuffle()

        detector = DeadlockDetector(board, GroupFinder(board))
        assert result.permuted
        assert result.solvable
        assert not result.guarantee_exceeded
        assert not detector.fast_check()
        assert not detector.exhaustive_check()

    def test_checkerboard_gets_a_forced_pair(self):
        board = Board.from_rows([[0, 1], [1, 0]])
        result = make_shuffler(board).shuffle()
        assert not DeadlockDetector(board, GroupFinder(board)).fast_check()
        assert result.solvable

    def test_all_distinct_colors_forces_exactly_one_pair(self):
        board = Board.from_rows([[0, 1, 2], [3, 4, 5]])
        result = make_shuffler(board, seed=11).shuffle()
        assert result.forced_pairs == 1
        assert len(color_counts(board)) == 5

    def test_not_enough_blocks(self, caplog):
        board = board_from_config("single_block")
        with caplog.at_level(logging.WARNING):
            result = make_shuffler(board).shuffle()
        assert not result.permuted
        assert not result.solvable
        assert board.to_rows() == [[None, None], [2, None]]
        assert "Not enough blocks" in caplog.text

    def test_isolated_blocks_exceed_guarantee(self, caplog):
        board = board_from_config("holes_3x3")
        with caplog.at_level(logging.WARNING):
            result = make_shuffler(board).shuffle()
        assert result.permuted
        assert result.guarantee_exceeded
        assert not result.solvable
        assert result.forced_pairs == 0
        assert occupied_positions(board) == {(0, 0), (0, 2), (1, 1), (2, 0), (2, 2)}
        assert str(MAX_GUARANTEE_ATTEMPTS) in caplog.text
