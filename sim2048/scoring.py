"""Board evaluation functions used to rank lookahead leaves."""

from enum import Enum
from typing import Callable, Union

import numpy as np

from .board import Board

ScoreFn = Callable[[Board], int]

# Both structural terms are scaled so that one extra free cell or one extra
# ordered pair outweighs a single small merge's points.
FREE_SPACE_WEIGHT: int = 20
SORTEDNESS_WEIGHT: int = 20


class ScoreFunction(Enum):
    FREE_SPACE = "free_space"
    FREE_SPACE_WITH_SORTEDNESS = "free_space_sortedness"


def score_free_space(board: Board) -> int:
    """Number of empty cells."""
    return board.empty_count()


def sortedness(board: Board) -> int:
    """
    Count of ordered adjacent pairs. Vertical pairs are counted once as
    non-increasing and once as non-decreasing and the better of the two is
    kept; horizontal pairs likewise. The result does not depend on which
    edge the big tiles are piled against.
    """
    grid = board.grid
    upper, lower = grid[:-1, :], grid[1:, :]
    left, right = grid[:, :-1], grid[:, 1:]
    vertical = max(np.count_nonzero(upper >= lower), np.count_nonzero(upper <= lower))
    horizontal = max(np.count_nonzero(left >= right), np.count_nonzero(left <= right))
    return int(vertical + horizontal)


def score_free_space_sortedness(board: Board) -> int:
    """Reward boards with room to move and big tiles stacked towards one edge."""
    return (
        FREE_SPACE_WEIGHT * board.empty_count()
        + SORTEDNESS_WEIGHT * sortedness(board)
        + board.score
    )


_SCORE_FUNCTIONS = {
    ScoreFunction.FREE_SPACE: score_free_space,
    ScoreFunction.FREE_SPACE_WITH_SORTEDNESS: score_free_space_sortedness,
}


def get_score_function(kind: Union[ScoreFunction, str]) -> ScoreFn:
    """Resolve a ScoreFunction member (or its value string) to the callable."""
    if isinstance(kind, str):
        try:
            kind = ScoreFunction(kind)
        except ValueError:
            raise ValueError(f"Unknown score function: {kind}") from None
    return _SCORE_FUNCTIONS[kind]
