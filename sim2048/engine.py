"""
engine.py

The authoritative transition rule: slide/merge the four directional rows,
then spawn one tile. All randomness comes from a caller-owned
numpy Generator, normally held by a GamePlayer (one per game).
"""

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .board import SIZE, Board, Direction, Line

# Default probability of spawning a 2-tile or 4-tile
SPAWN_RATES: Dict[int, float] = {2: 0.9, 4: 0.1}
_SPAWN_VALUES: List[int] = list(SPAWN_RATES.keys())
_SPAWN_WEIGHTS: List[float] = list(SPAWN_RATES.values())


class InvalidMove(Exception):
    """The chosen direction would not change the board."""

    def __init__(self, direction: Direction):
        super().__init__(f"Invalid move: {direction}")
        self.direction = direction


def reduce_row(row: Sequence[int]) -> Tuple[Line, int]:
    """
    Slide/merge one line towards index 3.
    Returns (new_line, gained_score_for_line).
    """
    line = np.asarray(row, dtype=np.int64)
    compressed = line[line != 0][::-1]      # nearest the far edge first
    result = np.zeros_like(line)
    gain = 0
    write_idx = len(line) - 1
    i = 0
    while i < len(compressed):
        v = compressed[i]
        if i + 1 < len(compressed) and v == compressed[i + 1]:
            merged = v * 2
            result[write_idx] = merged
            gain += int(merged)
            i += 2
        else:
            result[write_idx] = v
            i += 1
        write_idx -= 1
    return tuple(int(v) for v in result), gain


def spawn_tile(board: Board, rng: np.random.Generator) -> int:
    """Place a 2 or 4 on a uniformly chosen empty cell; returns the cell index."""
    empties = np.flatnonzero(board.values == 0)
    if len(empties) == 0:
        # a successful move always leaves a gap, so this is a bug upstream
        raise RuntimeError("No empty cell to spawn a tile into")
    idx = int(empties[rng.integers(len(empties))])
    board.values[idx] = rng.choice(_SPAWN_VALUES, p=_SPAWN_WEIGHTS)
    return idx


def apply_inplace(board: Board, direction: Direction, rng: np.random.Generator) -> bool:
    """
    Move `board` in `direction` and spawn a tile. Raises InvalidMove (board
    untouched) if nothing would change.
    """
    rows: List[Line] = []
    gain = 0
    changed = False
    for n in range(SIZE):
        old = board.directional_row(n, direction)
        new, line_gain = reduce_row(old)
        changed = changed or new != old
        rows.append(new)
        gain += line_gain

    if not changed:
        raise InvalidMove(direction)

    for n, new in enumerate(rows):
        board.set_directional_row(n, new, direction)
    board.score += gain
    spawn_tile(board, rng)
    return True


def apply(board: Board, direction: Direction, rng: np.random.Generator) -> Board:
    """Copy-on-write version of apply_inplace; `board` is never modified."""
    new_board = board.copy()
    apply_inplace(new_board, direction, rng)
    return new_board


class GamePlayer:
    """
    Owns the random generator for one game in progress. Never share an
    instance between games running concurrently.
    """

    def __init__(self, seed=None, rng: Optional[np.random.Generator] = None):
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng(seed)

    def new_board(self, random_start: bool = False) -> Board:
        return Board.init(self.rng if random_start else None)

    def play(self, board: Board, direction: Direction) -> Board:
        return apply(board, direction, self.rng)

    def play_inplace(self, board: Board, direction: Direction) -> bool:
        return apply_inplace(board, direction, self.rng)

    def try_play(self, board: Board, direction: Direction) -> Optional[Board]:
        """Like play(), but returns None instead of raising on an invalid move."""
        try:
            return self.play(board, direction)
        except InvalidMove:
            return None
