"""
simulate.py

Monte Carlo harness: play a strategy to game over many times and reduce
the outcomes to a score CDF and a largest-tile histogram.
"""

import logging
import multiprocessing
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from tqdm import tqdm

from .board import Board
from .engine import GamePlayer, InvalidMove
from .strategies import Strategy

logger = logging.getLogger(__name__)

# Consecutive invalid moves tolerated before a game is declared over
MAX_INVALID: int = 20
CDF_POINTS: int = 100


@dataclass(frozen=True)
class RunResult:
    moves: int
    score: int
    largest: int


@dataclass(frozen=True)
class AggregateResult:
    num_games: int
    avg_moves: float
    avg_score: float
    max_score: int
    score_cdf: Tuple[Tuple[float, float], ...]
    largest_hist: Tuple[int, ...]

    @property
    def score_cdf_x(self) -> List[float]:
        return [x for x, _ in self.score_cdf]

    @property
    def score_cdf_y(self) -> List[float]:
        return [y for _, y in self.score_cdf]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["score_cdf"] = [list(point) for point in self.score_cdf]
        data["largest_hist"] = list(self.largest_hist)
        return data


def run_one(strategy: Strategy, player: GamePlayer, board: Optional[Board] = None) -> RunResult:
    """
    Play one game from `board` (default: the standard start) until the board
    is stuck or the strategy proposes MAX_INVALID invalid moves in a row.
    """
    board = player.new_board() if board is None else board.copy()
    moves = 0
    invalid_count = 0
    while not board.stuck() and invalid_count < MAX_INVALID:
        direction = strategy.choose(board, player)
        try:
            player.play_inplace(board, direction)
            invalid_count = 0
        except InvalidMove:
            # ignored, but only a few times so a bad strategy can't loop forever
            invalid_count += 1
        moves += 1
    return RunResult(moves=moves, score=board.score, largest=board.max_tile())


def _play_seeded(job: Tuple[Strategy, np.random.SeedSequence, bool]) -> RunResult:
    """Worker entry point; module level so multiprocessing can pickle it."""
    strategy, seed_seq, random_start = job
    player = GamePlayer(rng=np.random.default_rng(seed_seq))
    return run_one(strategy, player, player.new_board(random_start))


def run_batch(
    strategy: Strategy,
    n: int,
    seed=None,
    workers: int = 1,
    random_start: bool = False,
    progress: bool = False,
) -> AggregateResult:
    """
    Run `n` independent games and summarize them. Every game gets its own
    generator spawned from `seed`, so results do not depend on `workers`.
    """
    if n <= 0:
        raise ValueError("Number of games must be positive")

    seeds = np.random.SeedSequence(seed).spawn(n)
    jobs = [(strategy, s, random_start) for s in seeds]
    logger.info(f"Running {n} games of {strategy.name} on {workers} worker(s)")

    results: List[RunResult] = []
    if workers > 1:
        with multiprocessing.Pool(processes=workers) as pool:
            outcomes = pool.imap(_play_seeded, jobs)
            for result in tqdm(outcomes, total=n, desc=strategy.name, disable=not progress):
                results.append(result)
    else:
        for job in tqdm(jobs, desc=strategy.name, disable=not progress):
            results.append(_play_seeded(job))

    for i, result in enumerate(results):
        logger.debug(f"{strategy.name} game {i + 1}: Score = {result.score}, "
                     f"Max Tile = {result.largest}, Moves = {result.moves}")

    aggregate = summarize(results)
    logger.info(f"{strategy.name}: avg score {aggregate.avg_score:.1f}, max score {aggregate.max_score}")
    return aggregate


def score_cdf(scores: Sequence[int], points: int = CDF_POINTS) -> Tuple[Tuple[float, float], ...]:
    """
    Evenly spaced thresholds up to the best score; y is the fraction of
    games scoring strictly below each threshold.
    """
    ordered = np.sort(np.asarray(scores, dtype=np.int64))
    max_score = int(ordered[-1])
    thresholds = max_score * np.arange(1, points + 1) / points
    below = np.searchsorted(ordered, thresholds, side="left")
    fractions = below / len(ordered)
    return tuple((float(x), float(y)) for x, y in zip(thresholds, fractions))


def largest_tile_histogram(largest_tiles: Sequence[int]) -> Tuple[int, ...]:
    """Counts indexed by log2 of each game's largest tile."""
    buckets = [max(int(tile).bit_length() - 1, 0) for tile in largest_tiles]
    hist = [0] * (max(buckets) + 1)
    for b in buckets:
        hist[b] += 1
    return tuple(hist)


def summarize(results: Sequence[RunResult], cdf_points: int = CDF_POINTS) -> AggregateResult:
    if not results:
        raise ValueError("Cannot summarize an empty batch")
    scores = [r.score for r in results]
    return AggregateResult(
        num_games=len(results),
        avg_moves=sum(r.moves for r in results) / len(results),
        avg_score=sum(scores) / len(results),
        max_score=max(scores),
        score_cdf=score_cdf(scores, cdf_points),
        largest_hist=largest_tile_histogram([r.largest for r in results]),
    )
