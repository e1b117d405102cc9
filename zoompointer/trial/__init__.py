from .config import cfg
from .geometry import (
    Cell,
    Dimensions,
    InvalidCellIndex,
    InvalidGeometry,
    Point,
    Rect,
    grid_cells,
    pointer_position,
    zoom_to_cell,
)
from .simulation import (
    Phase,
    TrialNotRunning,
    TrialState,
    create_initial_state,
    process_move,
    process_undo,
    reset_trial,
    start_trial,
)
from .driver import TARGET_NOT_FOUND, run_batch, run_trial, select_cell
from .session import Session

__all__ = [
    "cfg",
    "Cell",
    "Dimensions",
    "InvalidCellIndex",
    "InvalidGeometry",
    "Point",
    "Rect",
    "grid_cells",
    "pointer_position",
    "zoom_to_cell",
    "Phase",
    "TrialNotRunning",
    "TrialState",
    "create_initial_state",
    "process_move",
    "process_undo",
    "reset_trial",
    "start_trial",
    "TARGET_NOT_FOUND",
    "run_batch",
    "run_trial",
    "select_cell",
    "Session",
]
