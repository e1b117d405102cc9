from __future__ import annotations
import csv
import logging
import random
from dataclasses import dataclass, fields, astuple
from typing import List, Optional, Sequence, TextIO

from .config import cfg
from .geometry import (
    Cell,
    Dimensions,
    InvalidGeometry,
    Rect,
    cell_containing,
    grid_cells,
    random_target_box,
)
from .simulation import Phase, create_initial_state, process_move, start_trial

# Config values copied locally for speed/readability
MAX_MOVES: int = getattr(cfg, "MAX_MOVES", 50)
PROGRESS_EVERY: int = getattr(cfg, "PROGRESS_EVERY", 100)

TARGET_NOT_FOUND = -1


@dataclass
class TrialResult:
    """Outcome of one converged trial."""

    moves: int
    initial_distance: float
    target_width: float
    percentage_moved: float


@dataclass
class TrialRecord:
    """One CSV row handed to the analysis step."""

    trial: int
    moves: int
    initial_distance: float
    target_width: float
    percentage_moved: float


def select_cell(target_box: Rect, cells: Sequence[Cell]) -> int:
    """The 'player': pick the cell holding the target's center.

    Returns TARGET_NOT_FOUND instead of raising; the driver treats it as an
    abort-this-trial condition.
    """
    cell = cell_containing(target_box.center, cells)
    return cell.index if cell is not None else TARGET_NOT_FOUND


def run_trial(
    full_dimensions: Dimensions,
    max_moves: int = MAX_MOVES,
    *,
    cols: int = cfg.GRID_COLS,
    rows: int = cfg.GRID_ROWS,
    rng: Optional[random.Random] = None,
    target_box: Optional[Rect] = None,
) -> Optional[TrialResult]:
    """Run one automated trial to completion. None means aborted."""
    logger = logging.getLogger(__name__)
    state = create_initial_state(
        full_dimensions, cols=cols, rows=rows, target_box=target_box, rng=rng
    )
    start_trial(state)

    while state.phase is Phase.RUNNING:
        cells = grid_cells(state.current_view, state.cols, state.rows)
        cell_index = select_cell(state.target_box, cells)
        if cell_index == TARGET_NOT_FOUND:
            logger.warning(
                "Target center not found in any cell after %d moves; aborting trial",
                state.moves,
            )
            return None

        process_move(state, cell_index)

        if state.phase is Phase.RUNNING and state.moves > max_moves:
            logger.warning("Trial exceeded %d moves; aborting", max_moves)
            return None

    return TrialResult(
        moves=state.moves,
        initial_distance=state.initial_distance,
        target_width=state.target_width,
        percentage_moved=state.percentage_moved,
    )


def run_batch(
    n: int,
    full_dimensions: Dimensions,
    max_moves: int = MAX_MOVES,
    *,
    cols: int = cfg.GRID_COLS,
    rows: int = cfg.GRID_ROWS,
    rng: Optional[random.Random] = None,
) -> List[TrialRecord]:
    """Run n independent trials, skipping aborted ones.

    Trial indices are 1-based and keep their position even when earlier
    trials were skipped. Raises InvalidGeometry up front when no target
    fits the dimensions.
    """
    logger = logging.getLogger(__name__)
    # every trial draws a target; impossible dimensions fail all of them
    random_target_box(full_dimensions, rng=random.Random(0))
    logger.info("Running %d automated trials...", n)
    records: List[TrialRecord] = []
    aborted = 0
    for i in range(n):
        try:
            result = run_trial(
                full_dimensions, max_moves, cols=cols, rows=rows, rng=rng
            )
        except InvalidGeometry:
            logger.error("Trial %d hit invalid geometry; aborting it", i + 1, exc_info=True)
            result = None
        if result is None:
            aborted += 1
        else:
            records.append(
                TrialRecord(
                    trial=i + 1,
                    moves=result.moves,
                    initial_distance=result.initial_distance,
                    target_width=result.target_width,
                    percentage_moved=result.percentage_moved,
                )
            )
        if PROGRESS_EVERY and (i + 1) % PROGRESS_EVERY == 0:
            logger.info("...completed %d trials.", i + 1)
    logger.info("All trials completed (%d aborted).", aborted)
    return records


CSV_FIELDS = tuple(f.name for f in fields(TrialRecord))


def write_records_csv(records: Sequence[TrialRecord], stream: TextIO) -> None:
    """Write records as CSV with a header row, one trial per line."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(CSV_FIELDS)
    for record in records:
        writer.writerow(astuple(record))
