from __future__ import annotations
import enum
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .config import cfg
from .geometry import (
    Dimensions,
    Point,
    Rect,
    diagonal,
    distance,
    point_in_rect,
    pointer_position,
    random_target_box,
    zoom_to_cell,
)

logger = logging.getLogger(__name__)


class TrialNotRunning(RuntimeError):
    """Raised when a move or undo is applied outside the RUNNING phase."""

    pass


class Phase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class TrialState:
    """Everything one trial owns. Mutated only by the operations below."""

    full_dimensions: Dimensions
    current_view: Rect
    target_box: Rect
    view_history: List[Rect] = field(default_factory=list)
    phase: Phase = Phase.IDLE
    moves: int = 0
    percentage_moved: float = 0.0  # valid once phase is FINISHED
    cols: int = cfg.GRID_COLS
    rows: int = cfg.GRID_ROWS

    @property
    def pointer(self) -> Point:
        return pointer_position(self.current_view)

    @property
    def initial_pointer(self) -> Point:
        return pointer_position(self.view_history[0])

    @property
    def initial_distance(self) -> float:
        """Distance from the starting pointer to the target's center."""
        return distance(self.initial_pointer, self.target_box.center)

    @property
    def target_width(self) -> float:
        return self.target_box.w


def create_initial_state(
    full_dimensions: Dimensions,
    *,
    cols: int = cfg.GRID_COLS,
    rows: int = cfg.GRID_ROWS,
    target_box: Optional[Rect] = None,
    rng: Optional[random.Random] = None,
) -> TrialState:
    """Fresh IDLE trial: full-image view, random target, one-entry history."""
    dims = Dimensions(float(full_dimensions.w), float(full_dimensions.h))
    view = Rect.full(dims)
    if target_box is None:
        target_box = random_target_box(dims, rng=rng)
    return TrialState(
        full_dimensions=dims,
        current_view=view,
        target_box=target_box,
        view_history=[view],
        cols=cols,
        rows=rows,
    )


def reset_trial(
    state: TrialState, *, rng: Optional[random.Random] = None
) -> TrialState:
    """Return a brand-new IDLE state for the same image and grid.

    Nothing of the old trial (history, target, counters) is carried over;
    callers rebind their reference to the returned state.
    """
    fresh = create_initial_state(
        state.full_dimensions, cols=state.cols, rows=state.rows, rng=rng
    )
    fresh.phase = Phase.IDLE
    return fresh


def start_trial(state: TrialState) -> None:
    """IDLE -> RUNNING. Starting an already running trial is a no-op."""
    if state.phase is Phase.FINISHED:
        raise TrialNotRunning("finished trials must be reset before starting")
    state.phase = Phase.RUNNING


def _require_running(state: TrialState, action: str) -> None:
    if state.phase is not Phase.RUNNING:
        raise TrialNotRunning(f"cannot {action} while trial is {state.phase.value}")


def process_move(state: TrialState, cell_index: int) -> bool:
    """Zoom into a grid cell of the current view. Returns True on a win.

    The new view is computed before anything is mutated, so an invalid
    cell index (or degenerate view) leaves the state untouched.
    """
    _require_running(state, "move")
    new_view = zoom_to_cell(state.current_view, cell_index, state.cols, state.rows)

    state.moves += 1
    state.view_history.append(new_view)
    state.current_view = new_view

    pointer = state.pointer
    if not point_in_rect(pointer, state.target_box):
        return False

    state.phase = Phase.FINISHED
    travelled = distance(state.initial_pointer, pointer)
    state.percentage_moved = travelled / diagonal(state.full_dimensions) * 100.0
    logger.debug(
        "Trial won after %d moves (pointer moved %.2f%% of the diagonal)",
        state.moves,
        state.percentage_moved,
    )
    return True


def process_undo(state: TrialState) -> bool:
    """Step back to the previous view. Returns False at the initial view."""
    _require_running(state, "undo")
    if len(state.view_history) <= 1:
        return False
    state.view_history.pop()
    state.current_view = state.view_history[-1]
    state.moves -= 1
    return True
