import pytest

from sim2048.board import Board
from sim2048.strategies import RandomStrategy
from sim2048.timing import PROFILE_VALUES, StrategyTiming, time_strategy, timing_table


def test_time_moves_only():
    timing = time_strategy("lookahead1", repeats=3, seed=0)
    assert timing.name == "lookahead1"
    assert timing.moves == 3
    assert 0.0 <= timing.fastest_move <= timing.per_move
    assert timing.games == 0
    assert timing.per_game == 0.0
    assert timing.estimate(200) is None


def test_time_moves_and_games():
    timing = time_strategy(RandomStrategy(), repeats=2, games=2, seed=4)
    assert timing.games == 2
    assert timing.avg_game_moves > 0
    assert timing.estimate(10) == pytest.approx(timing.per_game * 10)


def test_profile_board_is_left_alone():
    board = Board(PROFILE_VALUES)
    before = board.copy()
    time_strategy("lookaheadsorted2", repeats=2, seed=0, board=board)
    assert board == before


@pytest.mark.parametrize("kwargs", [{"repeats": 0}, {"games": -1}])
def test_bad_counts_are_rejected(kwargs):
    with pytest.raises(ValueError):
        time_strategy("random", **kwargs)


def test_unknown_strategy_is_rejected():
    with pytest.raises(ValueError):
        time_strategy("lookahead")


def test_timing_table():
    rows = [
        StrategyTiming("fast", 20, 0.0005, 0.0004, 0, 0.0, 0.0),
        StrategyTiming("slow", 20, 0.1, 0.09, 2, 30.0, 300.0),
    ]
    table = timing_table(rows, bench_games=200)
    assert "Est. min for 200 games" in table
    assert "100.00" in table   # 0.1 s/move
    assert "100.0" in table    # 30 s/game * 200 games = 100 minutes
    assert table.index("fast") < table.index("slow")
