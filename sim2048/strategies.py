"""Move-selection strategies evaluated by the simulation harness."""

import re
from typing import Dict, List, Optional, Sequence, Union

from .board import DIRECTIONS, DIRECTIONS_3, Board, Direction
from .engine import GamePlayer
from .lookahead import FALLBACK_DIRECTION, naive_lookahead
from .scoring import ScoreFunction, score_free_space


class Strategy:
    """Base class: pick a direction for `board` using the caller's player for any randomness"""

    def __init__(self, name: str):
        self.name = name

    def choose(self, board: Board, player: GamePlayer) -> Direction:
        """Return the direction to play. Must not modify `board`."""
        raise NotImplementedError("Strategy must implement choose()")

    def __call__(self, board: Board, player: GamePlayer) -> Direction:
        return self.choose(board, player)

    def __str__(self) -> str:
        return f"Strategy({self.name})"

    def __repr__(self) -> str:
        return str(self)


class RandomStrategy(Strategy):
    """Uniform choice among the currently valid directions."""

    options: Sequence[Direction] = DIRECTIONS

    def __init__(self, name: str = "random"):
        super().__init__(name)

    def choose(self, board: Board, player: GamePlayer) -> Direction:
        valid = board.valid_moves(self.options)
        if not valid:
            return FALLBACK_DIRECTION
        return valid[int(player.rng.integers(len(valid)))]


class Random3DirStrategy(RandomStrategy):
    """
    Uniform among the valid moves of Up/Left/Right. Down is played only when
    none of those is valid, even if Down is not valid either.
    """

    options = DIRECTIONS_3

    def __init__(self, name: str = "random_3dir"):
        super().__init__(name)


class MaxFreeSpaceStrategy(Strategy):
    """Greedy one-ply search: the move leaving the most empty cells."""

    options: Sequence[Direction] = DIRECTIONS

    def __init__(self, name: str = "max_free_space"):
        super().__init__(name)

    def choose(self, board: Board, player: GamePlayer) -> Direction:
        selected: Optional[Direction] = None
        best_score = -1
        for direction in self.options:
            new_board = player.try_play(board, direction)
            if new_board is None:
                continue
            score = score_free_space(new_board)
            if score > best_score:
                best_score = score
                selected = direction
        return selected if selected is not None else FALLBACK_DIRECTION


class MaxFreeSpace3DirStrategy(MaxFreeSpaceStrategy):
    options = DIRECTIONS_3

    def __init__(self, name: str = "max_free_space_3dir"):
        super().__init__(name)


class LookaheadStrategy(Strategy):
    def __init__(
        self,
        depth: int,
        score_function: Union[ScoreFunction, str] = ScoreFunction.FREE_SPACE,
        name: Optional[str] = None,
    ):
        if depth < 0:
            raise ValueError("depth must be non-negative")
        self.depth = depth
        self.score_function = ScoreFunction(score_function)
        if name is None:
            prefix = "lookaheadsorted" if self.score_function == ScoreFunction.FREE_SPACE_WITH_SORTEDNESS else "lookahead"
            name = f"{prefix}{depth}"
        super().__init__(name)

    def choose(self, board: Board, player: GamePlayer) -> Direction:
        return naive_lookahead(player, board, self.depth, self.score_function)


_SIMPLE_STRATEGIES = {
    "random": RandomStrategy,
    "random_3dir": Random3DirStrategy,
    "max_free_space": MaxFreeSpaceStrategy,
    "max_free_space_3dir": MaxFreeSpace3DirStrategy,
}

_LOOKAHEAD_NAME = re.compile(r"^(lookahead|lookaheadsorted)(\d+)$")

# The comparison the benchmark runs by default
DEFAULT_LINEUP: List[str] = [
    "random",
    "random_3dir",
    "max_free_space",
    "max_free_space_3dir",
    "lookahead1",
    "lookaheadsorted1",
    "lookahead3",
    "lookaheadsorted3",
    "lookahead5",
    "lookaheadsorted5",
]


def get_strategy(name: str) -> Strategy:
    """Get a strategy by name (random, random_3dir, max_free_space[_3dir], lookahead<d>, lookaheadsorted<d>)"""
    if name in _SIMPLE_STRATEGIES:
        return _SIMPLE_STRATEGIES[name]()
    match = _LOOKAHEAD_NAME.match(name)
    if match:
        kind, depth = match.groups()
        score_function = (
            ScoreFunction.FREE_SPACE_WITH_SORTEDNESS if kind == "lookaheadsorted" else ScoreFunction.FREE_SPACE
        )
        return LookaheadStrategy(int(depth), score_function)
    raise ValueError(f"Unknown strategy: {name}")


def available_strategies() -> List[str]:
    return list(_SIMPLE_STRATEGIES) + ["lookahead<depth>", "lookaheadsorted<depth>"]


def suggest(strategy: Union[Strategy, str], board: Board, seed=None) -> Direction:
    """Direction a front-end should show as the suggested next move."""
    if isinstance(strategy, str):
        strategy = get_strategy(strategy)
    return strategy.choose(board, GamePlayer(seed))


def strategies_by_name(names: Sequence[str]) -> Dict[str, Strategy]:
    return {name: get_strategy(name) for name in names}
