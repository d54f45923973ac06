"""
Listing Quality Gate - Core

Normalization-and-validation boundary for real-estate listings collected
from several source platforms:
1. Data contract (field predicates, record validator, validation report)
2. Sample quality gate (per-platform rate metrics and verdict)
3. Run summary (one report per collection run)

Everything here is pure and synchronous; inputs are already-parsed JSON
values and nothing is read from or written to disk.
"""

from .contract import (
    IssueCode,
    IssueLevel,
    LeaseType,
    ImageStatus,
    ValidationIssue,
    ValidationReport,
    MalformedInputError,
    validate_record,
    validate_json,
    load_record,
)
from .quality import (
    QualityThresholds,
    DEFAULT_THRESHOLDS,
    PlatformSampleSummary,
    RunSummary,
    sample_from_record,
    summarize_platform,
    build_run_summary,
    evaluate_sampling_results,
)

__all__ = [
    # Contract
    "IssueCode",
    "IssueLevel",
    "LeaseType",
    "ImageStatus",
    "ValidationIssue",
    "ValidationReport",
    "MalformedInputError",
    "validate_record",
    "validate_json",
    "load_record",
    # Quality gate
    "QualityThresholds",
    "DEFAULT_THRESHOLDS",
    "PlatformSampleSummary",
    "RunSummary",
    "sample_from_record",
    "summarize_platform",
    "build_run_summary",
    "evaluate_sampling_results",
]

__version__ = "1.0"
