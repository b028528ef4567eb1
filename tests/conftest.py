import numpy as np
import pytest

from sim2048.board import Board
from sim2048.engine import GamePlayer


def make_board(values, score=0) -> Board:
    return Board.from_values(values, score)


def random_boards(count, seed=0, tiles=(0, 0, 2, 2, 4, 8, 16)):
    """Boards with mixed empties and small tiles, plenty of merges and dead ends."""
    rng = np.random.default_rng(seed)
    return [Board(rng.choice(tiles, size=16)) for _ in range(count)]


@pytest.fixture
def player():
    return GamePlayer(seed=1234)


@pytest.fixture
def mixed_board():
    return make_board([0, 8, 0, 2,
                       4, 8, 2, 2,
                       4, 8, 0, 0,
                       8, 8, 0, 0])


@pytest.fixture
def stuck_board():
    return make_board([2, 8, 16, 32,
                       256, 16, 2, 16,
                       4, 8, 4, 8,
                       2, 4, 2, 4])


@pytest.fixture
def up_only_board():
    # top row empty, no equal neighbours anywhere: only Up changes anything
    return make_board([0, 0, 0, 0,
                       2, 4, 8, 16,
                       4, 8, 16, 32,
                       8, 16, 32, 64])


@pytest.fixture
def left_right_board():
    # one mergeable pair in the top row, everything else locked
    return make_board([2, 2, 4, 8,
                       4, 8, 16, 32,
                       8, 16, 32, 64,
                       16, 32, 64, 128])
