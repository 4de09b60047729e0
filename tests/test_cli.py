from pathlib import Path

import pytest

from quickpick.cli import main


def _tickets(out: str):
    return [line.split() for line in out.splitlines() if line.strip()]


def test_generates_requested_tickets(capsys):
    assert main(["-g", "5", "-s", "1", "-e", "60", "-p", "6", "--seed", "7"]) == 0

    rows = _tickets(capsys.readouterr().out)
    assert len(rows) == 5
    for row in rows:
        assert len(row) == 6
        assert all(len(tok) == 2 for tok in row)
        nums = [int(tok) for tok in row]
        assert nums == sorted(nums) and len(set(nums)) == 6
    assert len({tuple(r) for r in rows}) == 5


def test_preset_with_possibilities(capsys):
    assert main(["--game", "mega-sena", "-P", "--seed", "1"]) == 0

    captured = capsys.readouterr()
    assert len(_tickets(captured.out)) == 1
    assert "50,063,860 possibilities" in captured.err


def test_odds_table(capsys):
    assert main(["-s", "1", "-e", "60", "-p", "6", "--odds"]) == 0
    err = capsys.readouterr().err
    assert "Odds for 6 of 60" in err
    assert "1 in 50,063,860" in err


@pytest.mark.parametrize(
    "argv,message",
    [
        (["-s", "1", "-e", "10", "-p", "11"], "Cannot pick 11"),
        (["-s", "10", "-e", "1", "-p", "3"], "must not be greater"),
        (["-g", "11", "-s", "1", "-e", "5", "-p", "3"], "maximum possible: 10"),
        (["-g", "0", "-s", "1", "-e", "5", "-p", "3"], "at least 1"),
        (["-s", "1", "-e", "60"], "required without --game"),
    ],
)
def test_bad_configuration_exits_2(capsys, argv, message):
    with pytest.raises(SystemExit) as info:
        main(argv)

    assert info.value.code == 2
    captured = capsys.readouterr()
    assert message in captured.err
    assert captured.out == ""


def test_out_and_exclude(tmp_path: Path, capsys):
    out = tmp_path / "played.csv"
    assert main(["-g", "4", "-s", "1", "-e", "5", "-p", "3", "--seed", "3", "--out", str(out)]) == 0
    first = {tuple(r) for r in _tickets(capsys.readouterr().out)}
    assert out.exists()

    argv = ["-g", "6", "-s", "1", "-e", "5", "-p", "3", "--exclude", str(out), "--progress"]
    assert main(argv) == 0
    second = {tuple(r) for r in _tickets(capsys.readouterr().out)}

    assert len(second) == 6
    assert not first & second


def test_exclusion_leaving_too_few_tickets(tmp_path: Path, capsys):
    out = tmp_path / "played.csv"
    main(["-g", "4", "-s", "1", "-e", "5", "-p", "3", "--out", str(out)])
    capsys.readouterr()

    with pytest.raises(SystemExit) as info:
        main(["-g", "7", "-s", "1", "-e", "5", "-p", "3", "--exclude", str(out)])
    assert info.value.code == 2


def test_missing_exclusion_file(tmp_path: Path):
    with pytest.raises(SystemExit) as info:
        main(["--game", "powerball", "--exclude", str(tmp_path / "nope.csv")])
    assert info.value.code == 2


def test_log_level_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("QUICKPICK_LOG_LEVEL", "DEBUG")
    assert main(["-g", "2", "-s", "1", "-e", "60", "-p", "6"]) == 0
    assert "unique tickets" in capsys.readouterr().err


@pytest.mark.parametrize("via_env", [False, True])
def test_invalid_log_level_exits_2(monkeypatch, capsys, via_env):
    argv = ["--game", "mega-sena"]
    if via_env:
        monkeypatch.setenv("QUICKPICK_LOG_LEVEL", "chatty")
    else:
        argv += ["--log-level", "chatty"]

    with pytest.raises(SystemExit) as info:
        main(argv)
    assert info.value.code == 2
    assert "invalid log level" in capsys.readouterr().err
