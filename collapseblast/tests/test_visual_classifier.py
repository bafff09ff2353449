import pytest

from collapseblast.game.board import Board, Cell
from collapseblast.game.game_config import DisplayTier, GameConfig
from collapseblast.game.group_finder import GroupFinder
from collapseblast.game.visual_classifier import VisualClassifier
from .conftest import board_from_config


def make_classifier(board: Board, thresholds=(4, 7, 9)) -> VisualClassifier:
    a, b, c = thresholds
    config = GameConfig(
        num_rows=board.row_count,
        num_cols=board.column_count,
        num_colors=4,
        threshold_a=a,
        threshold_b=b,
        threshold_c=c,
    )
    return VisualClassifier(board, GroupFinder(board), config)


def strip_board(length: int, color: int = 0) -> Board:
    """One row with a group of the given length followed by a different color"""
    return Board.from_rows([[color] * length + [color + 1]])


class TestClassify:
    """Test mapping group sizes to display tiers"""

    @pytest.mark.parametrize(
        "size,tier",
        [
            (2, DisplayTier.DEFAULT),
            (4, DisplayTier.DEFAULT),
            (5, DisplayTier.TIER1),
            (7, DisplayTier.TIER1),
            (8, DisplayTier.TIER2),
            (9, DisplayTier.TIER2),
            (10, DisplayTier.TIER3),
        ],
    )
    def test_every_member_gets_the_group_tier(self, size, tier):
        board = strip_board(size)
        tiers = make_classifier(board).classify()
        assert all(tiers[0, col] == tier for col in range(size))
        # the trailing single block stays default
        assert tiers[0, size] == DisplayTier.DEFAULT

    def test_empty_and_single_cells_are_default(self):
        tiers = make_classifier(board_from_config("holes_3x3"), (1, 2, 3)).classify()
        assert (tiers == DisplayTier.DEFAULT).all()

    def test_mixed_board(self):
        board = board_from_config("complex_4x4")
        tiers = make_classifier(board, (2, 3, 4)).classify()
        assert tiers[1, 1] == DisplayTier.TIER3  # group of 5
        assert tiers[2, 2] == DisplayTier.TIER2  # group of 4
        assert tiers[0, 0] == DisplayTier.TIER1  # group of 3
        assert tiers[3, 1] == DisplayTier.DEFAULT  # group of 2
        assert tiers[3, 0] == DisplayTier.DEFAULT  # single


class TestUpdatePositions:
    """Test recomputing tiers for a subset of the board"""

    def test_update_after_board_change(self):
        board = strip_board(5)
        classifier = make_classifier(board)
        tiers = classifier.classify()
        assert tiers[0, 0] == DisplayTier.TIER1

        board.set(0, 4, Cell(3))
        classifier.update_positions(tiers, [(0, 0), (0, 1)])
        assert all(tiers[0, col] == DisplayTier.DEFAULT for col in range(4))

    def test_update_resets_emptied_cells(self):
        board = strip_board(5)
        classifier = make_classifier(board)
        tiers = classifier.classify()
        assert tiers[0, 0] == DisplayTier.TIER1

        board.clear(0, 0)
        classifier.update_positions(tiers, [(0, 0)])
        assert tiers[0, 0] == DisplayTier.DEFAULT
        assert (tiers == classifier.classify())[0, 0]

    def test_update_ignores_out_of_range(self):
        board = strip_board(2)
        classifier = make_classifier(board)
        tiers = classifier.classify()
        classifier.update_positions(tiers, [(5, 5), (-1, 0)])
        assert (tiers == classifier.classify()).all()
