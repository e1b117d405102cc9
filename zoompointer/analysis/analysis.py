from __future__ import annotations
import math
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

# Route debug prints in this module through logging
print = logging.getLogger(__name__).debug

MAX_BAR_LENGTH = 40
BAR_CHAR = "█"


class AnalysisError(ValueError):
    """Raised when trial data is missing or lacks a required column."""

    pass


@dataclass
class DescriptiveStats:
    total: int
    mean: float
    median: float
    modes: List[int]
    minimum: int
    maximum: int
    std_dev: float  # population


def parse_csv(text: str) -> List[Dict[str, float]]:
    """Parse trial CSV (header + rows) into dicts of floats.

    Fewer than two non-blank lines means there is no data.
    """
    lines = [line for line in text.strip().splitlines() if line.strip()]
    if len(lines) < 2:
        return []
    header = [name.strip() for name in lines[0].split(",")]
    trials: List[Dict[str, float]] = []
    for line_no, line in enumerate(lines[1:], start=2):
        values = line.split(",")
        try:
            trials.append(
                {key: float(value) for key, value in zip(header, values)}
            )
        except ValueError as exc:
            raise AnalysisError(f"line {line_no}: non-numeric value ({exc})") from exc
    print(f"parsed {len(trials)} trial rows with columns {header}")
    return trials


def _column(trials: Sequence[Dict[str, float]], name: str) -> List[float]:
    try:
        return [t[name] for t in trials]
    except KeyError:
        raise AnalysisError(f"trial data has no {name!r} column") from None


def index_of_difficulty(distance: float, width: float) -> float:
    """Fitts's Law ID = log2(D/W + 1)."""
    if width <= 0:
        raise AnalysisError(f"target width must be positive, got {width}")
    if distance < 0:
        raise AnalysisError(f"distance must not be negative, got {distance}")
    return math.log2(distance / width + 1)


FITTS_COLUMNS = ("initial_distance", "target_width")


def has_fitts_columns(trials: Sequence[Dict[str, float]]) -> bool:
    return all(name in t for t in trials for name in FITTS_COLUMNS)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def descriptive_stats(moves: Sequence[float]) -> DescriptiveStats:
    if not moves:
        raise AnalysisError("no trials to summarize")
    data = sorted(int(m) for m in moves)
    n = len(data)
    mean = sum(data) / n
    mid = n // 2
    median = (data[mid - 1] + data[mid]) / 2 if n % 2 == 0 else float(data[mid])
    counts = Counter(data)
    top = max(counts.values())
    modes = sorted(value for value, count in counts.items() if count == top)
    std_dev = math.sqrt(sum((x - mean) ** 2 for x in data) / n)
    return DescriptiveStats(
        total=n,
        mean=mean,
        median=median,
        modes=modes,
        minimum=data[0],
        maximum=data[-1],
        std_dev=std_dev,
    )


def frequency_distribution(moves: Sequence[float]) -> List[Tuple[int, int]]:
    """(moves, count) pairs in ascending order of moves."""
    return sorted(Counter(int(m) for m in moves).items())


def histogram_lines(
    freq: Sequence[Tuple[int, int]], max_bar_length: int = MAX_BAR_LENGTH
) -> List[str]:
    if not freq:
        return []
    max_count = max(count for _, count in freq)
    lines = []
    for value, count in freq:
        bar = BAR_CHAR * _round_half_up(count / max_count * max_bar_length)
        lines.append(f"{value:>2} | {bar} ({count})")
    return lines


def fitts_law_table(trials: Sequence[Dict[str, float]]) -> List[Tuple[int, int, float]]:
    """Group trials by rounded ID; rows are (id_group, trials, avg_moves).

    Average moves are rounded to 2 decimals and rows are sorted by ID.
    """
    distances = _column(trials, "initial_distance")
    widths = _column(trials, "target_width")
    moves = _column(trials, "moves")
    groups: Dict[int, List[float]] = {}
    for d, w, m in zip(distances, widths, moves):
        group = _round_half_up(index_of_difficulty(d, w))
        groups.setdefault(group, []).append(m)
    return [
        (group, len(values), round(sum(values) / len(values), 2))
        for group, values in sorted(groups.items())
    ]


def summarize_trials(trials: Sequence[Dict[str, float]]) -> str:
    """
    Text report with:
      - Descriptive statistics of moves
      - Frequency distribution histogram
      - Fitts's Law table (ID vs. average moves), when the trials carry
        initial_distance and target_width
    """
    if not trials:
        raise AnalysisError("no trials to summarize")
    moves = _column(trials, "moves")
    stats = descriptive_stats(moves)
    out = [
        f"Successfully parsed {len(trials)} trial records.",
        "",
        "--- Descriptive Statistics (Moves) ---",
        f"  Total Trials: {stats.total}",
        f"  Mean: {stats.mean:.2f}",
        f"  Median: {stats.median:g}",
        f"  Mode(s): {', '.join(str(m) for m in stats.modes)}",
        f"  Min: {stats.minimum}",
        f"  Max: {stats.maximum}",
        f"  Std. Deviation: {stats.std_dev:.2f}",
        "",
        "--- Frequency Distribution (Moves) ---",
    ]
    out.extend(histogram_lines(frequency_distribution(moves)))
    out.extend(["", "--- Fitts's Law Analysis (ID vs. Avg. Moves) ---"])
    if not has_fitts_columns(trials):
        out.append("  Skipped: trial data lacks initial_distance/target_width columns.")
        return "\n".join(out)
    out.append(f"  {'ID':>4} | {'Trials':>6} | {'Avg. Moves':>10}")
    for group, count, avg in fitts_law_table(trials):
        out.append(f"  {group:>4} | {count:>6} | {avg:>10.2f}")
    return "\n".join(out)
