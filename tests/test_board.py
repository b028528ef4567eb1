import numpy as np
import pytest

from sim2048.board import DIRECTIONS, Board, Direction
from sim2048.engine import GamePlayer

from conftest import make_board, random_boards

COUNTING = Board(list(range(16)))


def test_row_access():
    assert COUNTING.row(0) == (0, 1, 2, 3)
    assert COUNTING.row(2) == (8, 9, 10, 11)
    assert COUNTING.row(0, reverse=True) == (3, 2, 1, 0)
    assert COUNTING.row(2, reverse=True) == (11, 10, 9, 8)


def test_col_access():
    assert COUNTING.col(2) == (2, 6, 10, 14)
    assert COUNTING.col(3) == (3, 7, 11, 15)
    assert COUNTING.col(2, reverse=True) == (14, 10, 6, 2)
    assert COUNTING.col(3, reverse=True) == (15, 11, 7, 3)


@pytest.mark.parametrize("reverse", [False, True])
def test_set_row_and_col_use_the_same_convention(reverse):
    b = Board()
    b.set_row(1, (2, 4, 8, 16), reverse)
    assert b.row(1, reverse) == (2, 4, 8, 16)
    b.set_col(3, (32, 64, 128, 256), reverse)
    assert b.col(3, reverse) == (32, 64, 128, 256)


def test_directional_rows_slide_towards_index_three():
    assert COUNTING.directional_row(0, Direction.RIGHT) == (0, 1, 2, 3)
    assert COUNTING.directional_row(0, Direction.LEFT) == (3, 2, 1, 0)
    assert COUNTING.directional_row(1, Direction.DOWN) == (1, 5, 9, 13)
    assert COUNTING.directional_row(1, Direction.UP) == (13, 9, 5, 1)


@pytest.mark.parametrize("direction", DIRECTIONS)
def test_oriented_matches_directional_rows(direction):
    lines = COUNTING.oriented(direction)
    for n in range(4):
        assert tuple(lines[n]) == COUNTING.directional_row(n, direction)


@pytest.mark.parametrize("direction", DIRECTIONS)
def test_set_directional_row_round_trips(direction):
    b = Board()
    b.set_directional_row(2, (0, 2, 4, 8), direction)
    assert b.directional_row(2, direction) == (0, 2, 4, 8)


def test_is_valid_move_on_known_board():
    b = make_board([0, 2, 4, 8] * 4)
    assert not b.is_valid_move(Direction.RIGHT)
    assert b.is_valid_move(Direction.LEFT)
    assert b.is_valid_move(Direction.UP)
    assert b.is_valid_move(Direction.DOWN)


def test_empty_lines_are_not_valid_moves():
    assert not Board().is_valid_move(Direction.UP)
    assert Board().valid_moves() == []


def test_is_valid_move_agrees_with_transition():
    player = GamePlayer(seed=7)
    boards = random_boards(300) + random_boards(100, seed=1, tiles=(0, 2, 4, 8, 16, 32, 64))
    for b in boards:
        for d in DIRECTIONS:
            assert b.is_valid_move(d) == (player.try_play(b, d) is not None), (b, d)


def test_stuck(mixed_board, stuck_board):
    assert not mixed_board.stuck()
    assert stuck_board.stuck()


def test_stuck_iff_full_and_no_valid_move():
    for b in random_boards(300, tiles=(2, 4, 8, 16, 32, 64, 128, 0)):
        expected = b.empty_count() == 0 and not any(b.is_valid_move(d) for d in DIRECTIONS)
        assert b.stuck() == expected


def test_init_places_a_single_two():
    b = Board.init()
    assert b.values[0] == 2
    assert b.empty_count() == 15
    assert b.score == 0

    seeded = Board.init(np.random.default_rng(3))
    assert sorted(seeded.tolist()) == [0] * 15 + [2]


def test_from_values_validates():
    with pytest.raises(ValueError):
        Board.from_values([2] * 15)
    with pytest.raises(ValueError):
        Board.from_values([3] + [0] * 15)
    with pytest.raises(ValueError):
        Board.from_values([1] + [0] * 15)
    with pytest.raises(ValueError):
        Board.from_values([0] * 16, score=-1)


def test_copy_is_independent(mixed_board):
    twin = mixed_board.copy()
    twin.values[0] = 1024
    twin.score = 99
    assert mixed_board.values[0] == 0
    assert mixed_board.score == 0
    assert twin != mixed_board


def test_summaries(mixed_board):
    assert mixed_board.max_tile() == 8
    assert mixed_board.empty_count() == 6
    assert mixed_board == make_board(mixed_board.tolist())


def test_render_ascii(mixed_board):
    text = mixed_board.render_ascii()
    lines = text.splitlines()
    assert len(lines) == 9
    assert lines[0] == "+" + "------+" * 4
    assert "." in lines[1] and "8" in lines[1]
