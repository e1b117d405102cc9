from __future__ import annotations
from typing import Dict, Tuple


class cfg:
    """Experiment tuning (grid, target, headless batch)"""

    # --- Grid overlaid on the current view ---
    GRID_COLS = 8
    GRID_ROWS = 3

    # --- Target box (square, side = ratio * full image width) ---
    TARGET_SIZE_RATIO = 0.02

    # --- Headless batch ---
    NUM_TRIALS = 1000
    MAX_MOVES = 50  # safety bound against runaway trials
    FULL_DIMENSIONS = (2560, 1600)
    PROGRESS_EVERY = 100

    # -------------------------------------------------------------------
    # Keyboard (row-major, QWERTY hands split across the 8 columns)
    # -------------------------------------------------------------------
    KEY_MAPPING: Tuple[Tuple[str, ...], ...] = (
        ("q", "w", "e", "r", "u", "i", "o", "p"),
        ("a", "s", "d", "f", "j", "k", "l", ";"),
        ("z", "x", "c", "v", "n", "m", ",", "."),
    )
    START_KEYS = (" ", "space")
    UNDO_KEYS = ("escape", "backspace")

    # --- Rendering ---
    CANVAS_WIDTH = 800
    CANVAS_HEIGHT = 450
    POINTER_RADIUS = 10
    JPEG_QUALITY = 92
    COLORS: Dict[str, Tuple[int, ...]] = {
        "grid": (255, 255, 255, 128),
        "grid_highlight": (255, 165, 0, 128),
        "target_box": (255, 165, 0, 255),
        "view_outline": (255, 0, 0, 255),
        "pointer": (255, 165, 0, 204),
        "text": (255, 255, 255, 255),
        "text_highlight": (255, 0, 0, 255),
        "idle_background": (136, 136, 136, 255),
        "placeholder": (85, 85, 85, 255),
    }
