"""Command-line entry point.

Usage:
    zoompointer trials --trials 1000 --seed 42 > trials.csv
    zoompointer analyze < trials.csv
    zoompointer trials | zoompointer analyze
    zoompointer play --image photo.jpg --frame frame.jpg < keys.txt
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import List, Optional, TextIO

from .analysis import AnalysisError, parse_csv, summarize_trials
from .trial.config import cfg
from .trial.driver import run_batch, write_records_csv
from .trial.geometry import Dimensions, InvalidCellIndex, InvalidGeometry
from .trial.simulation import TrialNotRunning

logger = logging.getLogger(__name__)

# Named tokens accepted by `play`, one per input line
KEY_ALIASES = {
    "space": " ",
    "esc": "escape",
    "escape": "escape",
    "backspace": "backspace",
    "undo": "escape",
}


def _parse_dimensions(text: str) -> Dimensions:
    try:
        w, h = (float(part) for part in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}")
    return Dimensions(w, h)


def cmd_trials(args: argparse.Namespace, out: TextIO) -> int:
    rng = random.Random(args.seed) if args.seed is not None else None
    records = run_batch(
        args.trials,
        args.dimensions,
        args.max_moves,
        cols=args.cols,
        rows=args.rows,
        rng=rng,
    )
    write_records_csv(records, out)
    return 0


def cmd_analyze(args: argparse.Namespace, out: TextIO) -> int:
    if args.input:
        with open(args.input, encoding="utf-8") as fh:
            raw = fh.read()
    else:
        raw = sys.stdin.read()
    if not raw.strip():
        logger.error("No data received. Did you pipe the trial results?")
        logger.error("Usage: zoompointer trials | zoompointer analyze")
        return 1
    trials = parse_csv(raw)
    if not trials:
        logger.error("Failed to parse any trial data.")
        return 1
    out.write(summarize_trials(trials) + "\n")
    return 0


def parse_key_token(token: str) -> Optional[str]:
    """Turn one line of `play` input into a key name (None for blank lines)."""
    if token == " ":
        return " "
    token = token.strip()
    if not token:
        return None
    return KEY_ALIASES.get(token.lower(), token)


def cmd_play(args: argparse.Namespace, out: TextIO) -> int:
    from PIL import Image

    from .trial.render import save_frame
    from .trial.session import Session
    from .trial.telemetry import summarize_session

    image = Image.open(args.image).convert("RGB") if args.image else None
    dims = Dimensions(*image.size) if image is not None else args.dimensions
    rng = random.Random(args.seed) if args.seed is not None else None
    session = Session(dims, rng=rng)

    for line in sys.stdin:
        key = parse_key_token(line.rstrip("\n"))
        if key is None:
            continue
        if not session.handle_key(key):
            logger.debug("Ignored key %r in phase %s", key, session.state.phase.value)
            continue
        state = session.state
        out.write(
            f"{state.phase.value}: moves={state.moves} "
            f"pointer=({state.pointer.x:.1f}, {state.pointer.y:.1f})\n"
        )
        if args.frame:
            save_frame(session, args.frame, image)
        session.clear_highlight()

    for number, finished in enumerate(session.completed, start=1):
        out.write(
            f"trial {number}: moves={finished.moves} "
            f"moved={finished.percentage_moved:.2f}%\n"
        )
    out.write(summarize_session(session.recorder) + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zoompointer",
        description="Grid-zoom pointing experiment (Fitts's Law)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    trials = sub.add_parser("trials", help="run automated trials and print CSV")
    trials.add_argument("--trials", type=int, default=cfg.NUM_TRIALS)
    trials.add_argument("--max-moves", type=int, default=cfg.MAX_MOVES)
    trials.add_argument(
        "--dimensions",
        type=_parse_dimensions,
        default=Dimensions(*cfg.FULL_DIMENSIONS),
        help="full image size as WIDTHxHEIGHT (default: %(default)s)",
    )
    trials.add_argument("--cols", type=int, default=cfg.GRID_COLS)
    trials.add_argument("--rows", type=int, default=cfg.GRID_ROWS)
    trials.add_argument("--seed", type=int, default=None)
    trials.set_defaults(handler=cmd_trials)

    analyze = sub.add_parser("analyze", help="summarize trial CSV from stdin or a file")
    analyze.add_argument("input", nargs="?", default=None)
    analyze.set_defaults(handler=cmd_analyze)

    play = sub.add_parser(
        "play", help="play with key tokens from stdin, one per line"
    )
    play.add_argument("--image", default=None, help="experiment image")
    play.add_argument(
        "--dimensions",
        type=_parse_dimensions,
        default=Dimensions(*cfg.FULL_DIMENSIONS),
        help="image size when no --image is given",
    )
    play.add_argument("--frame", default=None, help="JPEG written after each key")
    play.add_argument("--seed", type=int, default=None)
    play.set_defaults(handler=cmd_play)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
    )
    try:
        code = args.handler(args, sys.stdout)
    except (AnalysisError, InvalidGeometry, InvalidCellIndex, TrialNotRunning) as exc:
        logger.error("%s", exc)
        code = 1
    sys.exit(code)
