from __future__ import annotations
from .trial import (
    Session,
    create_initial_state,
    process_move,
    process_undo,
    reset_trial,
    run_batch,
)
from .trial.render import save_frame
from .analysis import summarize_trials

__all__ = [
    "Session",
    "create_initial_state",
    "process_move",
    "process_undo",
    "reset_trial",
    "run_batch",
    "save_frame",
    "summarize_trials",
]
