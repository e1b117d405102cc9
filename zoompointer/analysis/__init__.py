from .analysis import (
    AnalysisError,
    DescriptiveStats,
    descriptive_stats,
    fitts_law_table,
    frequency_distribution,
    histogram_lines,
    index_of_difficulty,
    parse_csv,
    summarize_trials,
)

__all__ = [
    "AnalysisError",
    "DescriptiveStats",
    "descriptive_stats",
    "fitts_law_table",
    "frequency_distribution",
    "histogram_lines",
    "index_of_difficulty",
    "parse_csv",
    "summarize_trials",
]
