"""
Quality Thresholds - Gate Configuration

Thresholds are supplied per run and passed explicitly into the gate.
Partial or broken configuration never fails a run: each missing or
non-numeric value falls back to its default with a logged warning.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, Optional


logger = logging.getLogger(__name__)


# Field name -> (JSON key, default)
_THRESHOLD_FIELDS: Final[dict[str, tuple[str, float]]] = {
    "required_fields_rate": ("requiredFieldsRate", 0.85),
    "violation_rate": ("violationRate", 0.08),
    "parse_fail_rate": ("parseFailRate", 0.08),
    "image_valid_rate": ("imageValidRate", 0.90),
}


def _coerce_rate(value: Any) -> Optional[float]:
    """Return value as a finite float, or None if it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


@dataclass(frozen=True)
class QualityThresholds:
    """
    Per-run gate thresholds.

    required_fields_rate and image_valid_rate are minimums;
    violation_rate and parse_fail_rate are maximums.
    """

    required_fields_rate: float = 0.85
    violation_rate: float = 0.08
    parse_fail_rate: float = 0.08
    image_valid_rate: float = 0.90

    @classmethod
    def from_dict(
        cls,
        data: Optional[Mapping],
        defaults: Optional["QualityThresholds"] = None,
    ) -> "QualityThresholds":
        """
        Build thresholds from a JSON-shaped mapping.

        Accepts camelCase keys (requiredFieldsRate) or snake_case aliases.
        Anything missing or non-numeric comes from defaults.

        Args:
            data: Mapping of threshold values, or None
            defaults: Fallback values (DEFAULT_THRESHOLDS if omitted)
        """
        base = defaults or DEFAULT_THRESHOLDS
        if data is None:
            return base
        if not isinstance(data, Mapping):
            logger.warning(
                "Ignoring thresholds of type %s; using defaults",
                type(data).__name__,
            )
            return base

        values: dict[str, float] = {}
        for field_name, (json_key, _) in _THRESHOLD_FIELDS.items():
            fallback = getattr(base, field_name)
            raw = data.get(json_key, data.get(field_name))
            if raw is None:
                values[field_name] = fallback
                continue
            rate = _coerce_rate(raw)
            if rate is None:
                logger.warning(
                    "Threshold %s=%r is not numeric; falling back to %s",
                    json_key,
                    raw,
                    fallback,
                )
                rate = fallback
            values[field_name] = rate
        return cls(**values)

    def to_dict(self) -> dict[str, float]:
        """Convert thresholds to the camelCase JSON shape."""
        return {
            json_key: getattr(self, field_name)
            for field_name, (json_key, _) in _THRESHOLD_FIELDS.items()
        }


DEFAULT_THRESHOLDS: Final = QualityThresholds(
    **{name: default for name, (_, default) in _THRESHOLD_FIELDS.items()}
)
