"""
board.py

Cell storage and pure geometry for the 4x4 board. Every direction is
expressed as "read a row or column forwards or backwards", so the merge
logic in engine.py only ever has to slide towards index 3.
"""

from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

SIZE: int = 4
NUM_CELLS: int = SIZE * SIZE

# Type alias for clarity
CellsType = np.ndarray[Any, np.dtype[np.int64]]
Line = Tuple[int, int, int, int]


class Direction(Enum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def __str__(self) -> str:
        return self.name.capitalize()


# Enumeration order used for every tie-break
DIRECTIONS: Tuple[Direction, ...] = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
DIRECTIONS_3: Tuple[Direction, ...] = (Direction.UP, Direction.LEFT, Direction.RIGHT)

# direction -> (is_row, reverse)
_FRAMES = {
    Direction.RIGHT: (True, False),
    Direction.LEFT: (True, True),
    Direction.DOWN: (False, False),
    Direction.UP: (False, True),
}


class Board:
    """
    Sixteen cell values (row-major, 0 = empty) plus the accumulated score.
    """

    __slots__ = ("values", "score")

    def __init__(self, values: Optional[Sequence[int]] = None, score: int = 0):
        if values is None:
            self.values: CellsType = np.zeros(NUM_CELLS, dtype=np.int64)
        else:
            self.values = np.array(values, dtype=np.int64).reshape(NUM_CELLS)
        self.score: int = int(score)

    # ------------------------------------------------------------------ #
    #                         CONSTRUCTION                               #
    # ------------------------------------------------------------------ #
    @classmethod
    def init(cls, rng: Optional[np.random.Generator] = None) -> "Board":
        """Starting board: a single 2, in the top-left corner unless `rng` picks a cell."""
        board = cls()
        idx = 0 if rng is None else int(rng.integers(NUM_CELLS))
        board.values[idx] = 2
        return board

    @classmethod
    def from_values(cls, values: Sequence[int], score: int = 0) -> "Board":
        """Build a board from user supplied values, rejecting values that are not tiles."""
        flat = [int(v) for v in np.asarray(values).ravel()]
        if len(flat) != NUM_CELLS:
            raise ValueError(f"A board needs exactly {NUM_CELLS} values, got {len(flat)}")
        for v in flat:
            if v != 0 and (v < 2 or v & (v - 1)):
                raise ValueError(f"Tile values must be 0 or a power of two >= 2, got {v}")
        if score < 0:
            raise ValueError("Score must be non-negative")
        return cls(flat, score)

    def copy(self) -> "Board":
        twin = Board.__new__(Board)
        twin.values = self.values.copy()
        twin.score = self.score
        return twin

    # ------------------------------------------------------------------ #
    #                         ROW / COLUMN ACCESS                        #
    # ------------------------------------------------------------------ #
    @property
    def grid(self) -> CellsType:
        """4x4 view onto the cells (shares memory)."""
        return self.values.reshape(SIZE, SIZE)

    def row(self, n: int, reverse: bool = False) -> Line:
        line = self.values[n * SIZE:(n + 1) * SIZE]
        if reverse:
            line = line[::-1]
        return tuple(int(v) for v in line)

    def col(self, n: int, reverse: bool = False) -> Line:
        line = self.values[n::SIZE]
        if reverse:
            line = line[::-1]
        return tuple(int(v) for v in line)

    def set_row(self, n: int, value: Sequence[int], reverse: bool = False) -> None:
        line = np.asarray(value, dtype=np.int64)
        self.values[n * SIZE:(n + 1) * SIZE] = line[::-1] if reverse else line

    def set_col(self, n: int, value: Sequence[int], reverse: bool = False) -> None:
        line = np.asarray(value, dtype=np.int64)
        self.values[n::SIZE] = line[::-1] if reverse else line

    def directional_row(self, n: int, direction: Direction) -> Line:
        """
        Row `n` as seen when moving in `direction`: tiles slide from index 0
        towards index 3. Up/Down give columns, Left/Right give rows.
        """
        is_row, reverse = _FRAMES[direction]
        return self.row(n, reverse) if is_row else self.col(n, reverse)

    def set_directional_row(self, n: int, value: Sequence[int], direction: Direction) -> None:
        is_row, reverse = _FRAMES[direction]
        if is_row:
            self.set_row(n, value, reverse)
        else:
            self.set_col(n, value, reverse)

    def oriented(self, direction: Direction) -> CellsType:
        """All four directional rows stacked as a 4x4 array (a view, not a copy)."""
        grid = self.grid
        if direction == Direction.RIGHT:
            return grid
        if direction == Direction.LEFT:
            return grid[:, ::-1]
        if direction == Direction.DOWN:
            return grid.T
        return grid.T[:, ::-1]

    # ------------------------------------------------------------------ #
    #                         MOVE CHECKS                                #
    # ------------------------------------------------------------------ #
    def is_valid_move(self, direction: Direction) -> bool:
        """
        True iff moving in `direction` would change the board: some tile has
        an empty cell or an equal tile right after it in the scan order.
        """
        lines = self.oriented(direction)
        cur = lines[:, :-1]
        nxt = lines[:, 1:]
        return bool(np.any((cur != 0) & ((nxt == 0) | (nxt == cur))))

    def valid_moves(self, options: Sequence[Direction] = DIRECTIONS) -> List[Direction]:
        return [d for d in options if self.is_valid_move(d)]

    def stuck(self) -> bool:
        """True iff the board is full and no direction is a legal move."""
        for v in self.values:
            if v == 0:
                return False
        return not any(self.is_valid_move(d) for d in DIRECTIONS)

    # ------------------------------------------------------------------ #
    #                         SUMMARIES                                  #
    # ------------------------------------------------------------------ #
    def empty_count(self) -> int:
        return int(np.count_nonzero(self.values == 0))

    def max_tile(self) -> int:
        return int(self.values.max())

    def render_ascii(self, cell_width: int = 6) -> str:
        """Return an ASCII art string visualizing the board."""
        sep = "+" + ("-" * cell_width + "+") * SIZE
        out_lines: List[str] = [sep]
        for r in range(SIZE):
            row_parts = ["|"]
            for val in self.row(r):
                cell = str(val) if val != 0 else "."
                row_parts.append(cell.center(cell_width))
                row_parts.append("|")
            out_lines.append("".join(row_parts))
            out_lines.append(sep)
        return "\n".join(out_lines)

    def tolist(self) -> List[int]:
        return [int(v) for v in self.values]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.score == other.score and np.array_equal(self.values, other.values)

    def __repr__(self) -> str:
        return f"Board({self.tolist()}, score={self.score})"
