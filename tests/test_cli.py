"""Tests for the zoompointer command line."""

import io

import pytest

from zoompointer.cli import build_parser, main, parse_key_token


def _run(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


class TestKeyTokens:
    @pytest.mark.parametrize(
        "token, key",
        [("space", " "), (" ", " "), ("ESC", "escape"), ("undo", "escape"), ("d", "d"), ("", None)],
    )
    def test_parse(self, token, key):
        assert parse_key_token(token) == key


class TestParser:
    def test_dimensions_argument(self):
        args = build_parser().parse_args(["trials", "--dimensions", "1000x800"])
        assert (args.dimensions.w, args.dimensions.h) == (1000.0, 800.0)

    def test_bad_dimensions(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["trials", "--dimensions", "wide"])


class TestCommands:
    def test_trials_prints_csv(self, capsys):
        assert _run(["trials", "--trials", "5", "--seed", "3"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "trial,moves,initial_distance,target_width,percentage_moved"
        assert len(lines) == 6

    def test_analyze_file(self, tmp_path, capsys):
        data = tmp_path / "trials.csv"
        data.write_text(
            "trial,moves,initial_distance,target_width\n1,4,500,50\n2,5,480,50\n"
        )
        assert _run(["analyze", str(data)]) == 0
        out = capsys.readouterr().out
        assert "Total Trials: 2" in out
        assert "Avg. Moves" in out

    def test_analyze_empty_input(self, tmp_path):
        data = tmp_path / "empty.csv"
        data.write_text("")
        assert _run(["analyze", str(data)]) == 1

    def test_analyze_moves_only_csv(self, tmp_path, capsys):
        data = tmp_path / "moves.csv"
        data.write_text("trial,moves\n1,4\n2,5\n3,4\n")
        assert _run(["analyze", str(data)]) == 0
        out = capsys.readouterr().out
        assert "Total Trials: 3" in out
        assert "Skipped" in out

    def test_analyze_zero_target_width(self, tmp_path):
        data = tmp_path / "bad.csv"
        data.write_text("trial,moves,initial_distance,target_width\n1,4,500,0\n")
        assert _run(["analyze", str(data)]) == 1

    def test_trials_impossible_dimensions(self, capsys):
        assert _run(["trials", "--trials", "3", "--dimensions", "100x1"]) == 1
        assert capsys.readouterr().out == ""

    def test_play_from_stdin(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("space\nq\n\nundo\n"))
        frame = tmp_path / "frame.jpg"
        code = _run(
            ["play", "--dimensions", "320x200", "--seed", "1", "--frame", str(frame)]
        )
        assert code == 0
        out = capsys.readouterr().out
        assert "running: moves=0" in out
        assert "moves=1" in out
        assert "trials: started=1" in out
        assert frame.exists()
