"""
Run Summary Builder

Combines per-platform gate results into one run-level report. Platform
order always mirrors input order so successive runs can be diffed
positionally.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from core.contract.predicates import as_list, as_mapping
from core.contract.schema import MalformedInputError
from core.quality.gate import PlatformSampleSummary, summarize_platform
from core.quality.thresholds import DEFAULT_THRESHOLDS, QualityThresholds


logger = logging.getLogger(__name__)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


@dataclass(frozen=True)
class RunSummary:
    """Gate report for one collection run."""

    run_id: Optional[str]
    generated_at: datetime
    thresholds: QualityThresholds
    platforms: tuple[PlatformSampleSummary, ...]

    @property
    def total_sample(self) -> int:
        return sum(p.total for p in self.platforms)

    @property
    def passed(self) -> bool:
        """True when every platform has samples and passes."""
        return bool(self.platforms) and all(p.passed for p in self.platforms)

    @property
    def failing_platforms(self) -> list[PlatformSampleSummary]:
        return [p for p in self.platforms if not p.passed]

    def to_dict(self) -> dict[str, Any]:
        return {
            "runId": self.run_id,
            "generatedAt": format_timestamp(self.generated_at),
            "thresholds": self.thresholds.to_dict(),
            "totalSample": self.total_sample,
            "platforms": [p.to_dict() for p in self.platforms],
        }


def build_run_summary(
    run_id: Optional[str],
    thresholds: QualityThresholds,
    platforms: Iterable[Mapping],
    generated_at: Optional[datetime] = None,
) -> RunSummary:
    """
    Build the run-level gate report.

    Args:
        run_id: Collection run identifier
        thresholds: Thresholds applied to every platform
        platforms: Per-platform sample collections, in report order
        generated_at: Capture time (defaults to now, UTC)

    Returns:
        RunSummary with one entry per input platform
    """
    summaries = tuple(summarize_platform(p, thresholds) for p in platforms)
    summary = RunSummary(
        run_id=run_id,
        generated_at=generated_at or datetime.now(timezone.utc),
        thresholds=thresholds,
        platforms=summaries,
    )
    logger.info(
        "Run %s: %d platforms, %d samples, %d failing",
        run_id,
        len(summaries),
        summary.total_sample,
        len(summary.failing_platforms),
    )
    return summary


def evaluate_sampling_results(
    document: Any,
    thresholds: Optional[QualityThresholds] = None,
    generated_at: Optional[datetime] = None,
) -> RunSummary:
    """
    Evaluate a sampling results document.

    Document shape: {"runMeta"?: {"runId"}, "thresholds"?, "platforms": [...]}.
    Thresholds in the document override the supplied ones field by field.

    Args:
        document: Parsed sampling results
        thresholds: Run defaults, e.g. from Config (DEFAULT_THRESHOLDS if omitted)
        generated_at: Capture time override

    Raises:
        MalformedInputError: If document is not a mapping
    """
    if not isinstance(document, Mapping):
        raise MalformedInputError(
            f"sampling results must be a JSON object, got {type(document).__name__}"
        )

    effective = QualityThresholds.from_dict(
        document.get("thresholds"),
        defaults=thresholds or DEFAULT_THRESHOLDS,
    )
    run_id = as_mapping(document.get("runMeta")).get("runId")
    platforms = as_list(document.get("platforms"))

    return build_run_summary(run_id, effective, platforms, generated_at)
