"""
Sample Quality Gate - Per-Platform Rate Metrics and Verdict

Aggregates one platform's samples into four rate metrics and compares
them against QualityThresholds:

- requiredFieldsRate (minimum): samples carrying every required field
- violationRate (maximum): samples with contract violations
- parseFailRate (maximum): samples that failed to parse or violated
- imageValidRate (minimum): image-bearing samples whose valid-image share
  meets the image threshold

PENDING samples have not been evaluated yet and are left out of the
required-field, violation and image metrics. A PENDING sample is never a
parse failure either, but the parse-failure denominator is still the
non-pending count, so parseFailRate is approximate while a run is
partially pending.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Final, Optional

from core.contract.predicates import as_list, as_mapping
from core.quality.samples import SampleView
from core.quality.thresholds import DEFAULT_THRESHOLDS, QualityThresholds


logger = logging.getLogger(__name__)


NO_SAMPLES_REASON: Final = "no-samples"

# Fixed order used for failure reasons
METRIC_NAMES: Final[tuple[str, ...]] = (
    "requiredFieldsRate",
    "violationRate",
    "parseFailRate",
    "imageValidRate",
)


def round_rate(value: float) -> float:
    """Round a rate to 3 decimals."""
    return round(value * 1000) / 1000


@dataclass(frozen=True)
class PlatformMetrics:
    """Unrounded rate metrics for one platform. Rounding happens on output."""

    required_fields_rate: float
    violation_rate: float
    parse_fail_rate: float
    image_valid_rate: float

    def failing_metrics(self, thresholds: QualityThresholds) -> list[str]:
        """Metric names whose threshold comparison fails, in METRIC_NAMES order."""
        checks = (
            self.required_fields_rate >= thresholds.required_fields_rate,
            self.violation_rate <= thresholds.violation_rate,
            self.parse_fail_rate <= thresholds.parse_fail_rate,
            self.image_valid_rate >= thresholds.image_valid_rate,
        )
        return [name for name, ok in zip(METRIC_NAMES, checks) if not ok]

    def to_dict(self) -> dict[str, float]:
        return {
            "requiredFieldsRate": round_rate(self.required_fields_rate),
            "violationRate": round_rate(self.violation_rate),
            "parseFailRate": round_rate(self.parse_fail_rate),
            "imageValidRate": round_rate(self.image_valid_rate),
        }


@dataclass(frozen=True)
class PlatformSampleSummary:
    """
    Gate outcome for one platform.

    A platform without samples carries reason="no-samples" and no metrics;
    it is reported, never dropped, and never counts as a pass.
    """

    platform: Optional[str]
    total: int
    mode: Optional[str] = None
    metrics: Optional[PlatformMetrics] = None
    passed: bool = False
    reasons: tuple[str, ...] = field(default_factory=tuple)
    reason: Optional[str] = None

    @property
    def has_samples(self) -> bool:
        return self.reason != NO_SAMPLES_REASON

    def to_dict(self) -> dict[str, Any]:
        if not self.has_samples:
            return {"platform": self.platform, "total": 0, "reason": self.reason}
        return {
            "platform": self.platform,
            "total": self.total,
            "mode": self.mode,
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "pass": self.passed,
            "reasons": list(self.reasons),
        }


# =============================================================================
# Metric Computation
# =============================================================================


def compute_metrics(
    samples: list[SampleView],
    thresholds: QualityThresholds,
) -> PlatformMetrics:
    """
    Compute the four rate metrics for a non-empty sample list.

    Args:
        samples: Views over every sample of the platform, pending included
        thresholds: Needed for the per-sample image share cutoff
    """
    evaluated = [s for s in samples if not s.is_pending]
    denominator = max(1, len(evaluated))

    required_ok = sum(1 for s in evaluated if s.has_required_fields)
    violations = sum(1 for s in evaluated if s.has_contract_violations)
    # Scans every sample, divides by the non-pending count
    parse_failures = sum(1 for s in samples if s.is_parse_failure)

    image_candidates = 0
    image_ok = 0
    for s in evaluated:
        ratio = s.image_valid_ratio
        if ratio is None:
            continue
        image_candidates += 1
        if ratio >= thresholds.image_valid_rate:
            image_ok += 1

    return PlatformMetrics(
        required_fields_rate=required_ok / denominator,
        violation_rate=violations / denominator,
        parse_fail_rate=parse_failures / denominator,
        image_valid_rate=image_ok / max(1, image_candidates),
    )


def summarize_platform(
    platform: Mapping,
    thresholds: QualityThresholds = DEFAULT_THRESHOLDS,
) -> PlatformSampleSummary:
    """
    Apply the quality gate to one platform's collection result.

    Args:
        platform: {"name", "mode"?, "samples": [...]}
        thresholds: Gate thresholds for this run

    Returns:
        PlatformSampleSummary with metrics, pass flag and failure reasons
    """
    platform = as_mapping(platform)
    name = platform.get("name")
    samples = [SampleView(raw) for raw in as_list(platform.get("samples"))]

    if not samples:
        logger.info("Platform %s has no samples", name)
        return PlatformSampleSummary(
            platform=name,
            total=0,
            reason=NO_SAMPLES_REASON,
        )

    metrics = compute_metrics(samples, thresholds)
    reasons = tuple(metrics.failing_metrics(thresholds))
    passed = not reasons

    logger.info(
        "Platform %s: %d samples, %s%s",
        name,
        len(samples),
        "PASS" if passed else "FAIL",
        f" ({', '.join(reasons)})" if reasons else "",
    )

    return PlatformSampleSummary(
        platform=name,
        total=len(samples),
        mode=platform.get("mode"),
        metrics=metrics,
        passed=passed,
        reasons=reasons,
    )
