from __future__ import annotations
import logging
import random
from typing import Dict, Optional, Sequence

from .config import cfg
from .geometry import Dimensions
from .simulation import (
    Phase,
    TrialState,
    create_initial_state,
    process_move,
    process_undo,
    reset_trial,
    start_trial,
)
from .telemetry import TrialRecorder

START_KEYS = tuple(getattr(cfg, "START_KEYS", (" ",)))
UNDO_KEYS = tuple(getattr(cfg, "UNDO_KEYS", ("escape",)))


def flatten_key_mapping(key_mapping: Sequence[Sequence[str]]) -> Dict[str, int]:
    """Map each key to its row-major cell index."""
    flat = [key.lower() for row in key_mapping for key in row]
    return {key: index for index, key in enumerate(flat)}


class Session:
    """Keyboard front end over one explicitly owned TrialState.

    Holds only presentation state of its own (the key map and the
    highlighted cell); everything about the trial lives in `self.state`.
    """

    def __init__(
        self,
        full_dimensions: Dimensions,
        *,
        key_mapping: Sequence[Sequence[str]] = cfg.KEY_MAPPING,
        rng: Optional[random.Random] = None,
        recorder: Optional[TrialRecorder] = None,
    ):
        rows = len(key_mapping)
        cols = len(key_mapping[0]) if rows else 0
        if cols == 0 or any(len(row) != cols for row in key_mapping):
            raise ValueError("key_mapping must be a non-empty rectangle of keys")
        self.flat_keys = [key for row in key_mapping for key in row]
        self.key_map = flatten_key_mapping(key_mapping)
        self.rng = rng
        self.recorder = recorder if recorder is not None else TrialRecorder()
        self.state: TrialState = create_initial_state(
            full_dimensions, cols=cols, rows=rows, rng=rng
        )
        self.highlighted_cell: Optional[int] = None
        self.completed: list = []  # finished TrialStates, oldest first

    def key_for_cell(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.flat_keys):
            return self.flat_keys[index]
        return None

    def _log(self, method) -> None:
        pointer = self.state.pointer
        method(self.state.moves, pointer.x, pointer.y)

    def _begin(self) -> None:
        start_trial(self.state)
        self._log(self.recorder.log_start)

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns True when the key was consumed."""
        key = key.lower()
        phase = self.state.phase
        if phase is Phase.IDLE:
            if key in START_KEYS:
                self._begin()
                return True
            return False
        elif phase is Phase.FINISHED:
            if key in START_KEYS:
                self.state = reset_trial(self.state, rng=self.rng)
                self.highlighted_cell = None
                self._log(self.recorder.log_reset)
                self._begin()
                return True
            return False
        elif phase is Phase.RUNNING:
            if key in UNDO_KEYS:
                if process_undo(self.state):
                    self._log(self.recorder.log_undo)
                return True
            cell_index = self.key_map.get(key)
            if cell_index is None:
                return False
            self.highlighted_cell = cell_index
            won = process_move(self.state, cell_index)
            pointer = self.state.pointer
            self.recorder.log_zoom(cell_index, self.state.moves, pointer.x, pointer.y)
            if won:
                self._log(self.recorder.log_win)
                self.completed.append(self.state)
                logging.getLogger(__name__).info(
                    "Trial finished: %d moves, pointer moved %.2f%%",
                    self.state.moves,
                    self.state.percentage_moved,
                )
            return True
        raise AssertionError(f"unhandled phase {phase!r}")

    def clear_highlight(self) -> None:
        self.highlighted_cell = None
