import numpy as np
import pytest

from sim2048.board import Board
from sim2048.scoring import (
    ScoreFunction,
    get_score_function,
    score_free_space,
    score_free_space_sortedness,
    sortedness,
)

from conftest import make_board, random_boards


def transforms(board: Board):
    grid = board.grid
    for k in range(4):
        rotated = np.rot90(grid, k)
        yield Board(rotated.ravel())
        yield Board(rotated[:, ::-1].ravel())


def test_free_space(mixed_board, stuck_board):
    assert score_free_space(mixed_board) == 6
    assert score_free_space(stuck_board) == 0
    assert score_free_space(Board()) == 16


def test_sortedness_of_a_fully_ordered_board():
    b = make_board([2, 4, 8, 16,
                    4, 8, 16, 32,
                    8, 16, 32, 64,
                    16, 32, 64, 128])
    assert sortedness(b) == 24


def test_sortedness_does_not_depend_on_orientation():
    for b in random_boards(50, seed=9):
        expected = sortedness(b)
        for twin in transforms(b):
            assert sortedness(twin) == expected


def test_sorted_board_beats_scrambled_board():
    ordered = make_board([0, 0, 0, 0,
                          0, 0, 0, 2,
                          0, 0, 4, 8,
                          4, 16, 32, 64])
    scrambled = make_board([0, 0, 0, 0,
                            0, 0, 0, 2,
                            0, 0, 64, 8,
                            4, 32, 4, 16])
    assert score_free_space(ordered) == score_free_space(scrambled)
    assert score_free_space_sortedness(ordered) > score_free_space_sortedness(scrambled)


def test_sortedness_score_includes_board_score():
    b = make_board([2] + [0] * 15)
    twin = make_board([2] + [0] * 15, score=100)
    assert score_free_space_sortedness(twin) - score_free_space_sortedness(b) == 100


def test_get_score_function():
    assert get_score_function(ScoreFunction.FREE_SPACE) is score_free_space
    assert get_score_function("free_space_sortedness") is score_free_space_sortedness
    with pytest.raises(ValueError):
        get_score_function("nope")
