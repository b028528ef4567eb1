"""
timing.py

Wall-clock cost of strategies: seconds per move on a fixed mid-game
position, and optionally seconds per complete game. A lookahead of depth d
expands up to 4**d boards per move, so check here before starting a long
benchmark.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from tabulate import tabulate

from .board import Board
from .engine import GamePlayer
from .simulate import run_one
from .strategies import Strategy, get_strategy

logger = logging.getLogger(__name__)

# Mid-game position with merges in both axes and a 2x2 hole
PROFILE_VALUES: Tuple[int, ...] = (
    128, 2, 2, 8,
    256, 8, 16, 8,
    256, 8, 0, 0,
    64, 32, 0, 0,
)


@dataclass(frozen=True)
class StrategyTiming:
    name: str
    moves: int
    per_move: float         # mean seconds per choose()
    fastest_move: float
    games: int
    per_game: float         # 0.0 when no games were timed
    avg_game_moves: float

    def estimate(self, games: int) -> Optional[float]:
        """Projected seconds for `games` games, or None without a game sample."""
        if self.games == 0:
            return None
        return self.per_game * games


def time_moves(strategy: Strategy, board: Board, repeats: int, player: GamePlayer) -> List[float]:
    samples = []
    for _ in range(repeats):
        start = time.time()
        strategy.choose(board, player)
        samples.append(time.time() - start)
    return samples


def time_games(strategy: Strategy, games: int, player: GamePlayer) -> Tuple[List[float], List[int]]:
    durations: List[float] = []
    moves: List[int] = []
    for _ in range(games):
        start = time.time()
        result = run_one(strategy, player)
        durations.append(time.time() - start)
        moves.append(result.moves)
    return durations, moves


def time_strategy(
    strategy: Union[Strategy, str],
    repeats: int = 20,
    games: int = 0,
    seed=None,
    board: Optional[Board] = None,
) -> StrategyTiming:
    if repeats <= 0:
        raise ValueError("repeats must be positive")
    if games < 0:
        raise ValueError("games must be non-negative")
    if isinstance(strategy, str):
        strategy = get_strategy(strategy)
    if board is None:
        board = Board(PROFILE_VALUES)

    player = GamePlayer(seed)
    samples = time_moves(strategy, board, repeats, player)
    durations, moves = time_games(strategy, games, player)

    timing = StrategyTiming(
        name=strategy.name,
        moves=repeats,
        per_move=float(np.mean(samples)),
        fastest_move=float(min(samples)),
        games=games,
        per_game=float(np.mean(durations)) if durations else 0.0,
        avg_game_moves=float(np.mean(moves)) if moves else 0.0,
    )
    logger.info(f"{timing.name}: {timing.per_move * 1000:.2f} ms/move over {repeats} moves")
    if games:
        logger.info(f"{timing.name}: {timing.per_game:.2f} s/game over {games} games")
    return timing


def timing_table(timings: Sequence[StrategyTiming], bench_games: int) -> str:
    rows = []
    for t in timings:
        estimate = t.estimate(bench_games)
        rows.append([
            t.name,
            t.moves,
            f"{t.per_move * 1000:.2f}",
            f"{t.fastest_move * 1000:.2f}",
            t.games,
            f"{t.per_game:.2f}" if t.games else "-",
            f"{t.avg_game_moves:.0f}" if t.games else "-",
            f"{estimate / 60:.1f}" if estimate is not None else "-",
        ])
    headers = ["Strategy", "Moves", "ms/move", "Fastest ms", "Games", "s/game", "Moves/game",
               f"Est. min for {bench_games} games"]
    return tabulate(rows, headers=headers, tablefmt="grid")
