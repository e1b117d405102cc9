"""Tests for the headless 'always converge' trial driver."""

import io
import logging
import random

import pytest

from zoompointer.trial import driver
from zoompointer.trial.driver import (
    CSV_FIELDS,
    TARGET_NOT_FOUND,
    TrialRecord,
    TrialResult,
    run_batch,
    run_trial,
    select_cell,
    write_records_csv,
)
from zoompointer.trial.geometry import Dimensions, InvalidGeometry, Rect, grid_cells


class TestSelectCell:
    def test_picks_cell_holding_target_center(self):
        cells = grid_cells(Rect(0, 0, 2560, 1600), 8, 3)
        # center (1025.6, 725.6) -> col 3, row 1
        assert select_cell(Rect(1000, 700, 51.2, 51.2), cells) == 11

    def test_sentinel_when_target_outside_grid(self):
        cells = grid_cells(Rect(0, 0, 100, 100), 8, 3)
        assert select_cell(Rect(500, 500, 10, 10), cells) == TARGET_NOT_FOUND


class TestRunTrial:
    def test_converges(self, full_dimensions, seeded_rng):
        result = run_trial(full_dimensions, 50, rng=seeded_rng)
        assert isinstance(result, TrialResult)
        assert 1 <= result.moves <= 50
        assert result.target_width == pytest.approx(51.2)
        assert 0 <= result.percentage_moved <= 100

    def test_fixed_target_is_deterministic(self, full_dimensions):
        target = Rect(1900.5, 310.25, 51.2, 51.2)
        first = run_trial(full_dimensions, 50, target_box=target)
        second = run_trial(full_dimensions, 50, target_box=target)
        assert first is not None
        assert first == second

    def test_same_seed_same_moves(self, full_dimensions):
        first = run_trial(full_dimensions, 50, rng=random.Random(11))
        second = run_trial(full_dimensions, 50, rng=random.Random(11))
        assert first.moves == second.moves

    def test_aborts_past_move_limit(self, full_dimensions, caplog):
        # the first zoom lands on (1120, 800), outside this target
        target = Rect(1000, 700, 51.2, 51.2)
        with caplog.at_level(logging.WARNING):
            assert run_trial(full_dimensions, 0, target_box=target) is None
        assert "exceeded" in caplog.text

    def test_aborts_when_target_not_found(self, full_dimensions, caplog):
        with caplog.at_level(logging.WARNING):
            result = run_trial(full_dimensions, 50, target_box=Rect(5000, 5000, 5, 5))
        assert result is None
        assert "not found" in caplog.text


class TestRunBatch:
    def test_all_trials_recorded(self, full_dimensions, seeded_rng):
        records = run_batch(25, full_dimensions, 50, rng=seeded_rng)
        assert [r.trial for r in records] == list(range(1, 26))
        assert all(r.moves >= 1 for r in records)
        assert all(r.target_width == pytest.approx(51.2) for r in records)

    def test_aborted_trials_are_skipped(self, monkeypatch, full_dimensions):
        outcomes = iter([TrialResult(4, 100.0, 51.2, 10.0), None, TrialResult(5, 90.0, 51.2, 8.0)])
        monkeypatch.setattr(driver, "run_trial", lambda *a, **kw: next(outcomes))
        records = run_batch(3, full_dimensions, 50)
        assert [(r.trial, r.moves) for r in records] == [(1, 4), (3, 5)]

    def test_invalid_geometry_aborts_only_that_trial(
        self, monkeypatch, full_dimensions, caplog
    ):
        calls = {"n": 0}

        def flaky(*args, **kwargs):
            calls["n"] += 1
            if calls["n"] == 2:
                raise InvalidGeometry("degenerate view")
            return TrialResult(3, 10.0, 51.2, 1.0)

        monkeypatch.setattr(driver, "run_trial", flaky)
        with caplog.at_level(logging.ERROR):
            records = run_batch(3, full_dimensions, 50)
        assert [r.trial for r in records] == [1, 3]
        assert "invalid geometry" in caplog.text

    def test_impossible_dimensions_fail_once(self, caplog):
        with caplog.at_level(logging.ERROR):
            with pytest.raises(InvalidGeometry):
                run_batch(50, Dimensions(100, 1), 50)
        assert "invalid geometry" not in caplog.text


class TestCsv:
    def test_header_and_rows(self):
        stream = io.StringIO()
        write_records_csv(
            [TrialRecord(1, 5, 640.5, 51.2, 12.5), TrialRecord(3, 4, 10.0, 51.2, 0.5)],
            stream,
        )
        lines = stream.getvalue().splitlines()
        assert lines[0] == ",".join(CSV_FIELDS)
        assert lines[0] == "trial,moves,initial_distance,target_width,percentage_moved"
        assert lines[1] == "1,5,640.5,51.2,12.5"
        assert lines[2] == "3,4,10.0,51.2,0.5"
