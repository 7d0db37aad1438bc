"""
Analysis and orchestration package for puzzle-generation experiments.

This package contains:
- settings: global knobs, supported sizes and the oracle iteration cap
- stats: typed summaries and aggregation helpers
- experiments: sequential and parallel generation runners
- reporting: CSV exports and the raw-run DataFrame
- plots: all visualization utilities
- cli: top-level pipeline entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    GenerationRecord,
    GenerationResults,
    ProgressPrinter,
    SizeSummary,
    StatsSummary,
    compute_detailed_statistics,
    summarize_runs,
)

__all__ = [
    # types
    "StatsSummary",
    "GenerationRecord",
    "SizeSummary",
    "GenerationResults",
    # utils
    "compute_detailed_statistics",
    "summarize_runs",
    "ProgressPrinter",
    # settings module
    "settings",
]
