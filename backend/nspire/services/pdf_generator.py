"""
PDF Generator Service for NSPIRE inspection reports.

Renders an InspectionReport as a printable pre-inspection report:
- Property and inspection header
- Score, inspection cycle, and voucher result
- Findings by area with repair timeframes
"""

import io
from datetime import datetime
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle,
)

from nspire.schemas.report import InspectionReport, ReportArea
from nspire.services.severity import severity_label

NAVY = colors.HexColor('#1f3a5f')
MUTED = colors.HexColor('#5f6b7a')
RULE = colors.HexColor('#d5dbe3')

# Severity cell tint in findings tables
SEVERITY_COLORS = {
    "lifeThreatening": colors.HexColor('#f8d7da'),
    "severe": colors.HexColor('#ffe5cc'),
    "moderate": colors.HexColor('#fff3cd'),
    "low": colors.HexColor('#dbe9f7'),
}

# (minimum score, tint) for the score cell, matching the cycle thresholds
SCORE_COLORS = [
    (90, colors.HexColor('#d4edda')),
    (80, colors.HexColor('#fff3cd')),
    (60, colors.HexColor('#ffe5cc')),
]
FAILING_COLOR = colors.HexColor('#f8d7da')

LABEL_COLUMN = [
    ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
    ('TEXTCOLOR', (0, 0), (0, -1), MUTED),
    ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
]


class PDFGenerator:
    """Generates PDF inspection reports."""

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        self.styles.add(ParagraphStyle(
            name='ReportTitle',
            parent=self.styles['Heading1'],
            fontSize=18,
            spaceAfter=6,
            alignment=TA_CENTER,
            textColor=NAVY,
        ))
        self.styles.add(ParagraphStyle(
            name='ReportSubtitle',
            parent=self.styles['Normal'],
            fontSize=10,
            spaceAfter=18,
            alignment=TA_CENTER,
            textColor=MUTED,
        ))
        self.styles.add(ParagraphStyle(
            name='ReportSection',
            parent=self.styles['Heading2'],
            fontSize=13,
            spaceBefore=14,
            spaceAfter=6,
            textColor=NAVY,
        ))
        self.styles.add(ParagraphStyle(
            name='ReportCell',
            parent=self.styles['Normal'],
            fontSize=8,
            leading=10,
        ))
        self.styles.add(ParagraphStyle(
            name='ReportDisclaimer',
            parent=self.styles['Normal'],
            fontSize=7.5,
            textColor=MUTED,
            alignment=TA_CENTER,
            spaceBefore=6,
        ))

    def generate_inspection_report(self, report: InspectionReport) -> bytes:
        """
        Generate PDF for an inspection report.

        Args:
            report: Report built by build_report()

        Returns:
            PDF bytes
        """
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            rightMargin=0.7*inch,
            leftMargin=0.7*inch,
            topMargin=0.7*inch,
            bottomMargin=0.7*inch,
            title=report.title,
        )

        story = [
            Paragraph(self._escape(report.title), self.styles['ReportTitle']),
            Paragraph(
                f"Inspection {self._escape(report.inspection_id)}, "
                f"{self._format_datetime(report.inspection_date)}",
                self.styles['ReportSubtitle'],
            ),
        ]

        prop = report.property
        self._section(story, "Property")
        story.append(self._label_table([
            ("Name", prop.name),
            ("Address", prop.address or "N/A"),
            ("Units / Buildings", f"{prop.units} / {prop.building_count}"),
            ("Inspector", report.inspector or "N/A"),
        ], extra=[('FONTSIZE', (0, 0), (-1, -1), 10)]))

        self._section(story, "Compliance Score")
        story.append(self._label_table([
            ("NSPIRE Score", str(report.score)),
            ("Inspection Cycle", report.cycle.value),
            ("Voucher (HCV) Result", report.voucher_result.value if report.voucher_result else "N/A"),
            ("Full Survey Required", "Yes" if report.requires_full_survey else "No"),
            ("Total Findings", str(report.summary.total_findings)),
        ], extra=[
            ('FONTSIZE', (0, 0), (-1, -1), 11),
            ('FONTNAME', (1, 0), (1, 0), 'Helvetica-Bold'),
            ('BACKGROUND', (1, 0), (1, 0), self._score_color(report.score)),
        ]))

        self._section(story, "Findings by Area")
        if not report.summary.total_findings:
            story.append(Paragraph("No deficiencies recorded.", self.styles['Normal']))
        for report_area in report.areas:
            if report_area.area.findings:
                story.extend(self._area_block(report_area))

        story.append(Spacer(1, 0.3*inch))
        story.append(HRFlowable(width="100%", thickness=0.5, color=RULE))
        story.append(Paragraph(self._escape(report.disclaimer), self.styles['ReportDisclaimer']))
        story.append(Paragraph(
            f"Generated {self._format_datetime(report.generated_at)}",
            self.styles['ReportDisclaimer'],
        ))

        doc.build(story)
        return buffer.getvalue()

    def _section(self, story: list, title: str):
        story.append(Paragraph(title.upper(), self.styles['ReportSection']))
        story.append(HRFlowable(width="100%", thickness=1, color=RULE))

    def _label_table(self, rows: list[tuple[str, str]], extra: Optional[list] = None) -> Table:
        table = Table(
            [[f"{label}:", value] for label, value in rows],
            colWidths=[2.4*inch, 4.4*inch],
        )
        table.setStyle(TableStyle(LABEL_COLUMN + (extra or [])))
        return table

    def _area_block(self, report_area: ReportArea) -> list:
        area = report_area.area
        heading = f"{area.name} ({area.area_type.value}"
        if area.type:
            heading += f", {area.type}"
        heading += ")"
        if report_area.status.pass_fail:
            heading += f" - {report_area.status.pass_fail.value}"

        dispositions = {d.finding_id: d for d in report_area.findings}
        rows = [["Category", "Deficiency", "Severity", "Repair By"]]
        tints = []
        for finding in area.findings:
            disposition = dispositions.get(finding.id)
            if disposition:
                due = f"{disposition.repair_timeframe.label} ({disposition.repair_due_date:%Y-%m-%d})"
                tints.append(SEVERITY_COLORS.get(disposition.severity, colors.white))
            else:
                due = "N/A"
                tints.append(colors.white)
            rows.append([
                Paragraph(self._escape(f"{finding.category} / {finding.subcategory}"), self.styles['ReportCell']),
                Paragraph(self._escape(finding.deficiency), self.styles['ReportCell']),
                severity_label(finding.severity),
                due,
            ])

        table = Table(rows, colWidths=[1.7*inch, 2.7*inch, 1*inch, 1.4*inch], repeatRows=1)
        style = [
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 8),
            ('BACKGROUND', (0, 0), (-1, 0), NAVY),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('GRID', (0, 0), (-1, -1), 0.5, RULE),
            ('TOPPADDING', (0, 0), (-1, -1), 3),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 3),
        ]
        for row, tint in enumerate(tints, start=1):
            style.append(('BACKGROUND', (2, row), (2, row), tint))
        table.setStyle(TableStyle(style))

        return [
            Paragraph(self._escape(heading), self.styles['Heading4']),
            table,
            Spacer(1, 0.12*inch),
        ]

    def _score_color(self, score: int):
        for threshold, tint in SCORE_COLORS:
            if score >= threshold:
                return tint
        return FAILING_COLOR

    def _escape(self, text: str) -> str:
        """Escape markup characters for Paragraph."""
        return (
            str(text)
            .replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
        )

    def _format_datetime(self, dt: Optional[datetime]) -> str:
        if dt is None:
            return "N/A"
        return dt.strftime("%Y-%m-%d %H:%M")


def get_pdf_generator() -> PDFGenerator:
    """Get PDF generator instance."""
    return PDFGenerator()
