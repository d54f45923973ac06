"""
Configuration management.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional


logger = logging.getLogger(__name__)


def _env_rate(name: str) -> Optional[float]:
    """Read a threshold override; unset or unparseable values are ignored."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return None


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults. Threshold
    overrides left unset fall back to the gate defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # Reports
    reports_dir: str = field(default_factory=lambda: os.getenv("REPORTS_DIR", "./reports"))

    # Quality gate thresholds
    required_fields_rate: Optional[float] = field(
        default_factory=lambda: _env_rate("QUALITY_REQUIRED_FIELDS_RATE")
    )
    violation_rate: Optional[float] = field(
        default_factory=lambda: _env_rate("QUALITY_VIOLATION_RATE")
    )
    parse_fail_rate: Optional[float] = field(
        default_factory=lambda: _env_rate("QUALITY_PARSE_FAIL_RATE")
    )
    image_valid_rate: Optional[float] = field(
        default_factory=lambda: _env_rate("QUALITY_IMAGE_VALID_RATE")
    )

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    def quality_thresholds(self):
        """Thresholds for this deployment, defaults filling any gaps."""
        from core.quality import QualityThresholds

        return QualityThresholds.from_dict({
            "requiredFieldsRate": self.required_fields_rate,
            "violationRate": self.violation_rate,
            "parseFailRate": self.parse_fail_rate,
            "imageValidRate": self.image_valid_rate,
        })

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
            "reports_dir": self.reports_dir,
            "required_fields_rate": self.required_fields_rate,
            "violation_rate": self.violation_rate,
            "parse_fail_rate": self.parse_fail_rate,
            "image_valid_rate": self.image_valid_rate,
        }
