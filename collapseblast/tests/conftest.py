"""
Shared test utilities for collapseblast tests.

Layouts are lists of rows with row 0 (the bottom row) first; None marks an
empty cell.
"""

import random

from collapseblast.game.board import Board

TEST_BOARD_CONFIGS = {
    "empty_2x2": [[None, None], [None, None]],
    "single_color_2x2": [[0, 0], [0, 0]],
    "checkerboard_2x2": [[0, 1], [1, 0]],
    "checkerboard_3x3": [[0, 1, 0], [1, 0, 1], [0, 1, 0]],
    # bottom row [0, 1, 1], middle [1, 0, 1], top [0, 1, 0]
    "worked_example_3x3": [[0, 1, 1], [1, 0, 1], [0, 1, 0]],
    "complex_4x4": [[1, 1, 2, 3],
                    [1, 2, 2, 3],
                    [2, 2, 3, 3],
                    [3, 1, 1, 2]],
    "holes_3x3": [[0, None, 1], [None, 2, None], [1, None, 0]],
    "single_block": [[None, None], [2, None]],
}

RANDOM_SEEDS = list(range(20))


def board_from_config(name: str) -> Board:
    return Board.from_rows(TEST_BOARD_CONFIGS[name])


def random_board(
    rows: int, cols: int, num_colors: int, seed: int, empty_ratio: float = 0.0
) -> Board:
    """Random board, optionally with a share of cells left empty"""
    rng = random.Random(seed)
    layout = [
        [None if rng.random() < empty_ratio else rng.randrange(num_colors) for _ in range(cols)]
        for _ in range(rows)
    ]
    return Board.from_rows(layout)


def occupied_positions(board: Board) -> set[tuple[int, int]]:
    return {
        (row, col)
        for row in range(board.row_count)
        for col in range(board.column_count)
        if not board.is_empty(row, col)
    }


def has_same_colored_neighbour(board: Board, row: int, col: int) -> bool:
    color = board.color_at(row, col)
    for dr, dc in [(-1, 0), (1, 0), (0, -1), (0, 1)]:
        if color is not None and board.color_at(row + dr, col + dc) == color:
            return True
    return False


def assert_column_settled(board: Board, col: int):
    """Assert that every block in the column sits below every empty cell"""
    seen_empty = False
    for row in range(board.row_count):
        if board.is_empty(row, col):
            seen_empty = True
        else:
            assert not seen_empty, f"Column {col} has a gap below row {row}"


def assert_colors_in_range(board: Board, num_colors: int):
    for row in range(board.row_count):
        for col in range(board.column_count):
            color = board.color_at(row, col)
            assert board.is_empty(row, col) == (color is None)
            if color is not None:
                assert 0 <= color < num_colors, f"Color {color} at ({row}, {col}) out of range"
