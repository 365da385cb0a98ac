import pytest

import play


def test_difficulty_below_range_is_rejected():
    with pytest.raises(SystemExit):
        play.parse_args(["--difficulty", "0"])


def test_difficulty_above_range_is_rejected():
    with pytest.raises(SystemExit):
        play.parse_args(["--difficulty", "101"])


def test_difficulty_within_range_is_accepted():
    args = play.parse_args(["--difficulty", "100", "--seed", "3"])
    assert args.difficulty == 100
    assert args.seed == 3
    assert args.headless_ticks == 0


def test_headless_session_runs_requested_ticks(capsys):
    play.main(["--headless-ticks", "30", "--seed", "1"])
    out = capsys.readouterr().out
    assert "after 30 ticks" in out
