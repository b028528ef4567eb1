"""
Reporting for simulated batches: console tables and the JSON report file.
"""

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from tabulate import tabulate

from .simulate import AggregateResult, run_batch
from .strategies import strategies_by_name

logger = logging.getLogger(__name__)


# Custom JSON encoder to handle numpy types
class NumpyJSONEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        return super(NumpyJSONEncoder, self).default(obj)


def median_score(result: AggregateResult) -> float:
    """First CDF threshold that at least half the games fall below."""
    for x, y in result.score_cdf:
        if y >= 0.5:
            return x
    return float(result.max_score)


def tile_table(result: AggregateResult) -> List[List[str]]:
    """Rows of (tile, count, percent, percent reaching at least this tile)."""
    rows = []
    n = result.num_games
    hist = result.largest_hist
    for bucket in range(1, len(hist)):
        at_least = sum(hist[bucket:])
        rows.append([
            f"{1 << bucket}",
            f"{hist[bucket]}/{n}",
            f"{hist[bucket] / n * 100:.1f}%",
            f"{at_least / n * 100:.1f}%",
        ])
    return rows


def print_statistics(name: str, result: AggregateResult) -> None:
    """Print statistics in a nice format"""
    print(f"\nStatistics for {name} ({result.num_games} games):")
    print(f"Average score: {result.avg_score:.1f}")
    print(f"Average moves: {result.avg_moves:.1f}")
    print(f"Max score: {result.max_score}")
    print(f"Median score: ~{median_score(result):.0f}")

    print("\nLargest Tile Distribution:")
    print(tabulate(tile_table(result), headers=["Tile", "Count", "Percentage", "At least"], tablefmt="grid"))


def summary_table(report: Dict[str, AggregateResult]) -> str:
    rows = []
    for name, result in report.items():
        rows.append([
            name,
            result.num_games,
            f"{result.avg_moves:.1f}",
            f"{result.avg_score:.1f}",
            result.max_score,
            f"{median_score(result):.0f}",
            1 << (len(result.largest_hist) - 1),
        ])
    headers = ["Strategy", "Games", "Avg moves", "Avg score", "Max score", "Median", "Best tile"]
    return tabulate(rows, headers=headers, tablefmt="grid")


def run_lineup(
    names: Sequence[str],
    games: int,
    seed=None,
    workers: int = 1,
    random_start: bool = False,
    progress: bool = False,
) -> Dict[str, AggregateResult]:
    """Run every named strategy for `games` games; keeps the given order."""
    report: Dict[str, AggregateResult] = {}
    for name, strategy in strategies_by_name(names).items():
        logger.info(f"Running {name}...")
        report[name] = run_batch(
            strategy, games, seed=seed, workers=workers, random_start=random_start, progress=progress
        )
    return report


def save_report(report: Dict[str, AggregateResult], path: str, config: Optional[Dict[str, Any]] = None) -> str:
    """Save the report to a JSON file; returns the path written"""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    json_report: Dict[str, Any] = {
        "strategies": {name: result.to_dict() for name, result in report.items()},
        "config": dict(config or {}),
    }
    json_report["config"]["date"] = datetime.now().strftime("%Y%m%d_%H%M%S")

    with open(path, "w") as f:
        json.dump(json_report, f, indent=2, cls=NumpyJSONEncoder)

    logger.info(f"Report saved to {path}")
    return path


def load_report(path: str) -> Dict[str, AggregateResult]:
    with open(path) as f:
        data = json.load(f)
    report = {}
    for name, fields in data["strategies"].items():
        report[name] = AggregateResult(
            num_games=fields["num_games"],
            avg_moves=fields["avg_moves"],
            avg_score=fields["avg_score"],
            max_score=fields["max_score"],
            score_cdf=tuple((float(x), float(y)) for x, y in fields["score_cdf"]),
            largest_hist=tuple(fields["largest_hist"]),
        )
    return report
