import argparse
import sys
from typing import Any, Dict, List, Optional

from .strategies import DEFAULT_LINEUP, available_strategies

DEFAULT_GAMES = 200
DEFAULT_WORKERS = 1
DEFAULT_DEPTH = 5
DEFAULT_REPORT = "report.json"
DEFAULT_SUGGEST_STRATEGY = f"lookaheadsorted{DEFAULT_DEPTH}"
DEFAULT_TIMING_STRATEGIES = [f"lookahead{DEFAULT_DEPTH}", f"lookaheadsorted{DEFAULT_DEPTH}"]
DEFAULT_TIMING_REPEATS = 20


def _strategy_list(value: str) -> List[str]:
    names = [v.strip() for v in value.split(",") if v.strip()]
    if not names:
        raise argparse.ArgumentTypeError("expected a comma separated list of strategy names")
    return names


def _board_values(value: str) -> List[int]:
    try:
        values = [int(v.strip()) for v in value.replace(";", ",").split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError("board values must be integers") from None
    if len(values) != 16:
        raise argparse.ArgumentTypeError("--board must contain exactly 16 integers (row-major)")
    return values


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="2048 strategy simulator")

    # Logging settings
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every finished game")
    parser.add_argument("--log-file", type=str, default=None, help="Also write the log to this file")

    sub = parser.add_subparsers(dest="cmd")

    # Benchmark a lineup of strategies
    bench = sub.add_parser(
        "bench", help="Compare several strategies and write a report",
        description="Compare several strategies and write a report. Lookahead strategies cost about "
                    "4**depth board expansions per move, so the default lineup can run for hours; "
                    "use the timing command to estimate first.",
    )
    bench.add_argument("--strategies", type=_strategy_list, default=list(DEFAULT_LINEUP),
                       help="Comma separated strategy names (default: the full lineup)")
    bench.add_argument("--output", type=str, default=DEFAULT_REPORT, help="Where to write the JSON report")
    bench.add_argument("--no-save", action="store_true", help="Only print the summary")

    # One strategy
    run = sub.add_parser("run", help="Simulate one strategy and print its statistics")
    run.add_argument("strategy", type=str, help=f"One of {', '.join(available_strategies())}")

    for p in (bench, run):
        p.add_argument("--games", type=int, default=DEFAULT_GAMES, help="Games per strategy")
        p.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
        p.add_argument("--workers", type=int, default=DEFAULT_WORKERS, help="Worker processes")
        p.add_argument("--random-start", action="store_true", help="Place the first tile on a random cell")
        p.add_argument("--progress", action="store_true", help="Show a progress bar")

    # Suggest a move
    suggest = sub.add_parser("suggest", help="Print the suggested move for a board")
    suggest.add_argument("--board", type=_board_values, required=True,
                         help="16 comma/semicolon-separated ints (row-major)")
    suggest.add_argument("--score", type=int, default=0, help="Score of the board")
    suggest.add_argument("--strategy", type=str, default=DEFAULT_SUGGEST_STRATEGY)
    suggest.add_argument("--seed", type=int, default=None)

    # Interactive game
    play = sub.add_parser("play", help="Play in the terminal with move suggestions")
    play.add_argument("--strategy", type=str, default=DEFAULT_SUGGEST_STRATEGY)
    play.add_argument("--seed", type=int, default=None)

    # Time strategies
    timing = sub.add_parser("timing", help="Measure seconds per move (and per game) for strategies")
    timing.add_argument("--strategies", type=_strategy_list, default=list(DEFAULT_TIMING_STRATEGIES),
                        help="Comma separated strategy names")
    timing.add_argument("--repeats", type=int, default=DEFAULT_TIMING_REPEATS,
                        help="Moves timed on the fixed profiling board")
    timing.add_argument("--games", dest="timed_games", type=int, default=0,
                        help="Complete games to time as well (default: none)")
    timing.add_argument("--seed", type=int, default=None)

    return parser


def parse_args(argv: Optional[List[str]] = None) -> Dict[str, Any]:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.cmd is None:
        # bare invocation runs the full benchmark with defaults
        args = parser.parse_args(list(argv) + ["bench"])
    cmd = args.cmd

    if getattr(args, "games", 1) <= 0:
        parser.error("--games must be positive")
    if getattr(args, "workers", 1) <= 0:
        parser.error("--workers must be positive")
    if getattr(args, "repeats", 1) <= 0:
        parser.error("--repeats must be positive")
    if getattr(args, "timed_games", 0) < 0:
        parser.error("--games must not be negative")

    # Create configuration
    config: Dict[str, Any] = {
        "cmd": cmd,

        # Logging settings
        "logging": {
            "verbose": args.verbose,
            "log_file": args.log_file,
        },
    }

    if cmd in ("bench", "run"):
        config["strategies"] = args.strategies if cmd == "bench" else [args.strategy]
        config["simulation"] = {
            "games": args.games,
            "seed": args.seed,
            "workers": args.workers,
            "random_start": args.random_start,
            "progress": args.progress,
        }
        config["report"] = {
            "output": getattr(args, "output", None),
            "save": cmd == "bench" and not args.no_save,
        }
    elif cmd == "suggest":
        config["board"] = args.board
        config["score"] = args.score
        config["strategy"] = args.strategy
        config["seed"] = args.seed
    elif cmd == "timing":
        config["strategies"] = args.strategies
        config["timing"] = {
            "repeats": args.repeats,
            "games": args.timed_games,
            "seed": args.seed,
        }
    else:
        config["strategy"] = args.strategy
        config["seed"] = args.seed

    return config
