from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import time


@dataclass
class TrialEvent:
    """Record of one event captured during an interactive session."""

    kind: str  # "start"|"zoom"|"undo"|"win"|"reset"
    t: float  # seconds since start (monotonic)
    moves: int
    x: float
    y: float  # pointer position after the event
    cell: Optional[int] = None


@dataclass
class TrialRecorder:
    """Collects session events for timing analysis."""

    events: List[TrialEvent] = field(default_factory=list)
    start_ts: float = field(default_factory=lambda: time.perf_counter())

    def _now(self) -> float:
        """Return current monotonic time offset from the recorder's start."""
        return time.perf_counter() - self.start_ts

    def _log(self, kind, moves, x, y, cell=None) -> None:
        self.events.append(TrialEvent(kind, self._now(), moves, x, y, cell))

    def log_start(self, moves: int, x: float, y: float) -> None:
        self._log("start", moves, x, y)

    def log_zoom(self, cell: int, moves: int, x: float, y: float) -> None:
        self._log("zoom", moves, x, y, cell)

    def log_undo(self, moves: int, x: float, y: float) -> None:
        self._log("undo", moves, x, y)

    def log_win(self, moves: int, x: float, y: float) -> None:
        """Marks the zoom that put the pointer inside the target."""
        self._log("win", moves, x, y)

    def log_reset(self, moves: int, x: float, y: float) -> None:
        self._log("reset", moves, x, y)

    def reset(self) -> None:
        """Clear all recorded events and reset the time origin to now."""
        self.events.clear()
        self.start_ts = time.perf_counter()


def summarize_session(recorder: TrialRecorder) -> str:
    """Summarize trials started, trials won and pacing of zooms.

    Seconds-per-move is measured from each trial's start to its win, so
    abandoned trials do not skew it.
    """
    starts = [e for e in recorder.events if e.kind == "start"]
    if not starts:
        return "No trial data"
    wins = 0
    seconds_per_move: List[float] = []
    trial_start: Optional[TrialEvent] = None
    for event in recorder.events:
        if event.kind == "start":
            trial_start = event
        elif event.kind == "win" and trial_start is not None:
            wins += 1
            if event.moves > 0:
                seconds_per_move.append((event.t - trial_start.t) / event.moves)
            trial_start = None
    zooms = sum(1 for e in recorder.events if e.kind == "zoom")
    undos = sum(1 for e in recorder.events if e.kind == "undo")
    pace = (
        f"{sum(seconds_per_move) / len(seconds_per_move):.2f}s"
        if seconds_per_move
        else "N/A"
    )
    return (
        f"trials: started={len(starts)}, won={wins}, "
        f"zooms={zooms}, undos={undos}, avg per move={pace}"
    )
