"""
Utility modules for the listing quality gate.
"""

from .formatting import format_rate, format_metric_name
from .config import Config

__all__ = ["format_rate", "format_metric_name", "Config"]
