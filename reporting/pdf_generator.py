"""
Collection Quality Gate Report

Renders a RunSummary as a one-document PDF for operators reviewing a
collection run. Uses ReportLab for deterministic PDF generation.

Output Structure:
1. Run header (run id, capture time, overall verdict)
2. Thresholds applied
3. Per-platform metrics table (PASS / FAIL / NO DATA)
4. Failure reasons per failing platform
"""

import re
from io import BytesIO
from pathlib import Path
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
)

from core.quality import METRIC_NAMES, PlatformSampleSummary, RunSummary
from core.quality.summary import format_timestamp
from utils.formatting import format_metric_name, format_rate


# =============================================================================
# Color Palette
# =============================================================================

class Palette:
    """Print-friendly palette with muted status colours."""
    CHARCOAL = colors.Color(0.2, 0.2, 0.22)
    GRAY = colors.Color(0.5, 0.5, 0.5)
    LIGHT_GRAY = colors.Color(0.85, 0.85, 0.85)
    PALE_GRAY = colors.Color(0.95, 0.95, 0.95)
    WHITE = colors.white

    SUCCESS_LIGHT = colors.Color(0.9, 0.95, 0.9)
    FAILURE_LIGHT = colors.Color(0.98, 0.92, 0.92)
    WARNING_LIGHT = colors.Color(0.98, 0.96, 0.9)


def get_report_styles():
    """Paragraph styles for the gate report."""
    styles = getSampleStyleSheet()

    styles.add(ParagraphStyle(
        name='ReportTitle',
        parent=styles['Heading1'],
        fontName='Helvetica-Bold',
        fontSize=18,
        textColor=Palette.CHARCOAL,
        spaceAfter=4*mm,
    ))
    styles.add(ParagraphStyle(
        name='SectionTitle',
        parent=styles['Heading2'],
        fontName='Helvetica-Bold',
        fontSize=12,
        textColor=Palette.CHARCOAL,
        spaceBefore=6*mm,
        spaceAfter=3*mm,
    ))
    styles.add(ParagraphStyle(
        name='Meta',
        parent=styles['BodyText'],
        fontName='Helvetica',
        fontSize=9,
        textColor=Palette.GRAY,
        leading=13,
    ))
    return styles


def _status_label(platform: PlatformSampleSummary) -> str:
    if not platform.has_samples:
        return "NO DATA"
    return "PASS" if platform.passed else "FAIL"


# =============================================================================
# Generator
# =============================================================================

class GateReportGenerator:
    """
    Generates quality gate PDFs from run summaries.

    Usage:
        generator = GateReportGenerator()
        pdf_bytes = generator.generate_to_buffer(summary)
    """

    MARGIN = 16*mm
    OUTPUT_DIR = Path("reports")

    def __init__(self, output_dir: Optional[Path] = None):
        self.styles = get_report_styles()
        if output_dir is not None:
            self.OUTPUT_DIR = Path(output_dir)

    def generate_report(self, summary: RunSummary) -> Path:
        """Write the PDF to OUTPUT_DIR and return its path."""
        self.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        safe_id = re.sub(r"[^A-Za-z0-9._-]", "_", str(summary.run_id or "run"))
        output_path = self.OUTPUT_DIR / f"quality-gate-{safe_id}.pdf"
        output_path.write_bytes(self.generate_to_buffer(summary))
        return output_path

    def generate_to_buffer(self, summary: RunSummary) -> bytes:
        """Generate PDF and return as bytes (for testing or streaming)."""
        buffer = BytesIO()
        self._build_document(summary, buffer)
        return buffer.getvalue()

    def _build_document(self, summary: RunSummary, buffer: BytesIO):
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=self.MARGIN,
            rightMargin=self.MARGIN,
            topMargin=self.MARGIN,
            bottomMargin=self.MARGIN + 6*mm,
            title=f"Collection Quality Gate - {summary.run_id or 'unnamed run'}",
            author="Listing Quality Gate",
            invariant=True,
        )

        story = []
        story.extend(self._build_header(summary))
        story.extend(self._build_thresholds(summary))
        story.extend(self._build_platform_table(summary))
        story.extend(self._build_reasons(summary))

        doc.build(
            story,
            onFirstPage=self._draw_footer,
            onLaterPages=self._draw_footer,
        )

    def _draw_footer(self, canvas_obj: canvas.Canvas, doc):
        canvas_obj.saveState()
        canvas_obj.setFont('Helvetica', 7)
        canvas_obj.setFillColor(Palette.GRAY)
        page_width, _ = A4
        canvas_obj.drawString(self.MARGIN, self.MARGIN - 2*mm, "COLLECTION QUALITY GATE")
        canvas_obj.drawRightString(page_width - self.MARGIN, self.MARGIN - 2*mm, f"{doc.page}")
        canvas_obj.restoreState()

    # =========================================================================
    # Sections
    # =========================================================================

    def _build_header(self, summary: RunSummary) -> list:
        verdict = "PASS" if summary.passed else "FAIL"
        return [
            Paragraph("Collection Quality Gate", self.styles['ReportTitle']),
            Paragraph(f"Run: {escape(str(summary.run_id or '-'))}", self.styles['Meta']),
            Paragraph(f"Generated: {format_timestamp(summary.generated_at)}", self.styles['Meta']),
            Paragraph(
                f"Platforms: {len(summary.platforms)} &nbsp; Samples: {summary.total_sample}"
                f" &nbsp; Verdict: <b>{verdict}</b>",
                self.styles['Meta'],
            ),
        ]

    def _build_thresholds(self, summary: RunSummary) -> list:
        thresholds = summary.thresholds.to_dict()
        rows = [["Metric", "Threshold", "Rule"]]
        for name in METRIC_NAMES:
            rule = "minimum" if name in ("requiredFieldsRate", "imageValidRate") else "maximum"
            rows.append([format_metric_name(name), format_rate(thresholds[name]), rule])

        table = Table(rows, colWidths=[70*mm, 35*mm, 35*mm])
        table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 8.5),
            ('BACKGROUND', (0, 0), (-1, 0), Palette.CHARCOAL),
            ('TEXTCOLOR', (0, 0), (-1, 0), Palette.WHITE),
            ('GRID', (0, 0), (-1, -1), 0.5, Palette.LIGHT_GRAY),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [Palette.WHITE, Palette.PALE_GRAY]),
        ]))
        return [Paragraph("Thresholds", self.styles['SectionTitle']), table]

    def _build_platform_table(self, summary: RunSummary) -> list:
        headers = ["Platform", "Samples", "Req. Fields", "Violations",
                   "Parse Fail", "Image Valid", "Result"]
        rows = [headers]
        status_styles = []

        for row_index, platform in enumerate(summary.platforms, 1):
            status = _status_label(platform)
            if platform.metrics is not None:
                metrics = platform.metrics.to_dict()
                values = [format_rate(metrics[name]) for name in METRIC_NAMES]
            else:
                values = ["-"] * len(METRIC_NAMES)
            rows.append([str(platform.platform or "-"), str(platform.total), *values, status])

            background = {
                "PASS": Palette.SUCCESS_LIGHT,
                "FAIL": Palette.FAILURE_LIGHT,
            }.get(status, Palette.WARNING_LIGHT)
            status_styles.append(('BACKGROUND', (-1, row_index), (-1, row_index), background))

        table = Table(rows, colWidths=[40*mm, 18*mm, 22*mm, 22*mm, 22*mm, 22*mm, 20*mm])
        table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 8),
            ('BACKGROUND', (0, 0), (-1, 0), Palette.CHARCOAL),
            ('TEXTCOLOR', (0, 0), (-1, 0), Palette.WHITE),
            ('TEXTCOLOR', (0, 1), (-1, -1), Palette.CHARCOAL),
            ('ALIGN', (1, 0), (-1, -1), 'CENTER'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('GRID', (0, 0), (-1, -1), 0.5, Palette.LIGHT_GRAY),
            *status_styles,
        ]))
        return [Paragraph("Platforms", self.styles['SectionTitle']), table]

    def _build_reasons(self, summary: RunSummary) -> list:
        failing = [p for p in summary.failing_platforms if p.has_samples]
        empty = [p for p in summary.platforms if not p.has_samples]
        if not failing and not empty:
            return []

        elements = [Paragraph("Gate Failures", self.styles['SectionTitle'])]
        for platform in failing:
            reasons = ", ".join(format_metric_name(r) for r in platform.reasons)
            elements.append(Paragraph(
                f"<b>{escape(str(platform.platform))}</b>: {reasons}",
                self.styles['BodyText'],
            ))
        for platform in empty:
            elements.append(Paragraph(
                f"<b>{escape(str(platform.platform))}</b>: no samples collected",
                self.styles['BodyText'],
            ))
        elements.append(Spacer(1, 4*mm))
        return elements


# =============================================================================
# Convenience Function
# =============================================================================

def generate_report(summary: RunSummary, output_dir: Optional[Path] = None) -> Path:
    """
    Generate a quality gate PDF for a run summary.

    Args:
        summary: RunSummary from build_run_summary / evaluate_sampling_results
        output_dir: Target directory (defaults to ./reports)

    Returns:
        Path of the written PDF
    """
    generator = GateReportGenerator(output_dir)
    return generator.generate_report(summary)
