# 2048 simulation and strategy evaluation
from .board import Board, Direction, DIRECTIONS, DIRECTIONS_3
from .engine import GamePlayer, InvalidMove, apply, apply_inplace, reduce_row, spawn_tile
from .scoring import ScoreFunction, get_score_function, score_free_space, score_free_space_sortedness
from .lookahead import SearchNode, naive_lookahead
from .strategies import (
    Strategy,
    RandomStrategy,
    Random3DirStrategy,
    MaxFreeSpaceStrategy,
    MaxFreeSpace3DirStrategy,
    LookaheadStrategy,
    DEFAULT_LINEUP,
    get_strategy,
    suggest,
)
from .simulate import RunResult, AggregateResult, run_one, run_batch, summarize

__all__ = [
    "Board",
    "Direction",
    "DIRECTIONS",
    "DIRECTIONS_3",

    "GamePlayer",
    "InvalidMove",
    "apply",
    "apply_inplace",
    "reduce_row",
    "spawn_tile",

    "ScoreFunction",
    "get_score_function",
    "score_free_space",
    "score_free_space_sortedness",

    "SearchNode",
    "naive_lookahead",

    "Strategy",
    "RandomStrategy",
    "Random3DirStrategy",
    "MaxFreeSpaceStrategy",
    "MaxFreeSpace3DirStrategy",
    "LookaheadStrategy",
    "DEFAULT_LINEUP",
    "get_strategy",
    "suggest",

    "RunResult",
    "AggregateResult",
    "run_one",
    "run_batch",
    "summarize",
]
