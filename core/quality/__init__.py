"""
Sample Quality Gate

Per-platform rate metrics over collected samples, threshold-based
pass/fail verdicts, and the run-level summary that gates a collection run.
"""

from core.quality.thresholds import QualityThresholds, DEFAULT_THRESHOLDS
from core.quality.samples import SampleView, sample_from_record
from core.quality.gate import (
    PlatformMetrics,
    PlatformSampleSummary,
    METRIC_NAMES,
    NO_SAMPLES_REASON,
    compute_metrics,
    summarize_platform,
)
from core.quality.summary import (
    RunSummary,
    build_run_summary,
    evaluate_sampling_results,
)

__all__ = [
    # Configuration
    "QualityThresholds",
    "DEFAULT_THRESHOLDS",
    # Samples
    "SampleView",
    "sample_from_record",
    # Gate
    "PlatformMetrics",
    "PlatformSampleSummary",
    "METRIC_NAMES",
    "NO_SAMPLES_REASON",
    "compute_metrics",
    "summarize_platform",
    # Run summary
    "RunSummary",
    "build_run_summary",
    "evaluate_sampling_results",
]
