"""
Reporting module for the listing quality gate.

Renders run summaries as operator-facing PDF reports and exposes the
command line entry points.

Usage:
    from core.quality import evaluate_sampling_results
    from reporting import generate_report

    summary = evaluate_sampling_results(document)
    filepath = generate_report(summary)
"""

from .pdf_generator import GateReportGenerator, generate_report

__all__ = [
    "GateReportGenerator",
    "generate_report",
]
