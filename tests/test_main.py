import numpy as np
import pytest

import main


def draws(player, size=8):
    return player.rng.integers(1 << 30, size=size)


def test_game_and_advice_streams_are_independent():
    player, advisor = main.game_players(11)
    assert not np.array_equal(draws(player), draws(advisor))


def test_game_players_are_reproducible():
    a, _ = main.game_players(11)
    b, _ = main.game_players(11)
    assert np.array_equal(draws(a), draws(b))


def test_bad_board_is_reported_as_a_usage_error(monkeypatch, capsys):
    board = ",".join(["3"] + ["0"] * 15)
    monkeypatch.setattr("sys.argv", ["main.py", "suggest", "--board", board])
    with pytest.raises(SystemExit) as excinfo:
        main.main()
    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert "usage:" in err
    assert "power of two" in err


def test_suggest_prints_a_direction(monkeypatch, capsys):
    board = "0,8,0,2,4,8,2,2,4,8,0,0,8,8,0,0"
    monkeypatch.setattr("sys.argv", ["main.py", "suggest", "--board", board, "--strategy", "lookahead2",
                                     "--seed", "1"])
    main.main()
    out = capsys.readouterr().out
    assert any(f"Suggested: {d}" in out for d in ("Up", "Down", "Left", "Right"))


def test_timing_command(monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["main.py", "timing", "--strategies", "random,lookahead1",
                                     "--repeats", "2", "--games", "1", "--seed", "0"])
    main.main()
    out = capsys.readouterr().out
    assert "ms/move" in out
    assert "lookahead1" in out
