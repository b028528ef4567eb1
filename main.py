#!/usr/bin/env python3
"""
main.py
───────
Command line for the 2048 strategy simulator.

  • full benchmark      →   python main.py bench --games 200 --workers 4
  • one strategy        →   python main.py run lookaheadsorted3 --games 50
  • suggest a move      →   python main.py suggest --board 0,8,0,2,4,8,2,2,4,8,0,0,8,8,0,0
  • play in a terminal  →   python main.py play
  • time strategies     →   python main.py timing --strategies lookahead3,lookaheadsorted3 --games 2
"""

import logging
from typing import Any, Dict, Tuple

import numpy as np

from sim2048.board import Board, Direction
from sim2048.config import DEFAULT_GAMES, build_parser, parse_args
from sim2048.engine import GamePlayer, InvalidMove
from sim2048.report import print_statistics, run_lineup, save_report, summary_table
from sim2048.strategies import get_strategy
from sim2048.timing import time_strategy, timing_table

logger = logging.getLogger(__name__)

KEYS = {"w": Direction.UP, "s": Direction.DOWN, "a": Direction.LEFT, "d": Direction.RIGHT}


def game_players(seed=None) -> Tuple[GamePlayer, GamePlayer]:
    """Independent generators for the game itself and for the move suggestions."""
    game_seq, advice_seq = np.random.SeedSequence(seed).spawn(2)
    return GamePlayer(game_seq), GamePlayer(advice_seq)


def setup_logging(config: Dict[str, Any]) -> None:
    handlers = [logging.StreamHandler()]
    if config["log_file"]:
        handlers.append(logging.FileHandler(config["log_file"]))
    logging.basicConfig(
        level=logging.DEBUG if config["verbose"] else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


# --------------------------------------------------------------------------- #
# sub-commands
# --------------------------------------------------------------------------- #
def bench(config: Dict[str, Any]) -> None:
    sim = config["simulation"]
    report = run_lineup(config["strategies"], **sim)

    print(summary_table(report))
    if config["report"]["save"]:
        save_report(report, config["report"]["output"], config={**sim, "strategies": config["strategies"]})


def run(config: Dict[str, Any]) -> None:
    report = run_lineup(config["strategies"], **config["simulation"])
    for name, result in report.items():
        print_statistics(name, result)


def suggest(config: Dict[str, Any]) -> None:
    board = Board.from_values(config["board"], config["score"])
    strategy = get_strategy(config["strategy"])
    print(board.render_ascii())
    print(f"Suggested: {strategy.choose(board, GamePlayer(config['seed']))}")


def play(config: Dict[str, Any]) -> None:
    """Plain-text play in the terminal."""
    strategy = get_strategy(config["strategy"])
    player, advisor = game_players(config["seed"])
    board = player.new_board()
    message = ""

    while not board.stuck():
        print(f"\nScore: {board.score}")
        print(f"Suggested: {strategy.choose(board, advisor)}")
        print(board.render_ascii())
        if message:
            print(message)
            message = ""

        key = input("Move [w/a/s/d, q to quit]: ").strip().lower()
        if key == "q":
            break
        if key not in KEYS:
            message = f"Unknown: {key!r}"
            continue
        try:
            player.play_inplace(board, KEYS[key])
        except InvalidMove as e:
            message = str(e)

    print(board.render_ascii())
    print(f"Game over, final score: {board.score}, largest tile: {board.max_tile()}")


def timing(config: Dict[str, Any]) -> None:
    settings = config["timing"]
    timings = [time_strategy(name, **settings) for name in config["strategies"]]
    print(timing_table(timings, bench_games=DEFAULT_GAMES))


COMMANDS = {"bench": bench, "run": run, "suggest": suggest, "play": play, "timing": timing}


def main() -> None:
    config = parse_args()
    setup_logging(config["logging"])
    try:
        COMMANDS[config["cmd"]](config)
    except ValueError as e:
        build_parser().error(str(e))
    except KeyboardInterrupt:
        logger.info("Stopped by user")


# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    main()
