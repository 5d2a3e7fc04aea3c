"""
Report PDF Generation Service

Renders a full monthly report (as assembled by report_queries) to PDF
using ReportLab.
"""

from io import BytesIO
from typing import Dict, List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    HRFlowable,
)
from reportlab.lib.enums import TA_CENTER

from salesreports.services.formatting import format_currency, format_month_label

TABLE_STYLE = TableStyle(
    [
        # Header
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#e2e8f0")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.HexColor("#2d3748")),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 10),
        # Body
        ("FONTSIZE", (0, 1), (-1, -1), 9),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        # Grid
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#e2e8f0")),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]
)


def _text(value) -> str:
    """Escape user text for Paragraph markup, keeping line breaks."""
    return escape(str(value or "")).replace("\n", "<br/>")


def _build_styles() -> Dict[str, ParagraphStyle]:
    styles = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "ReportTitle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=6,
            textColor=colors.HexColor("#1a365d"),
            alignment=TA_CENTER,
        ),
        "subtitle": ParagraphStyle(
            "ReportSubtitle",
            parent=styles["Normal"],
            fontSize=12,
            textColor=colors.HexColor("#4a5568"),
            alignment=TA_CENTER,
        ),
        "section": ParagraphStyle(
            "SectionHeader",
            parent=styles["Heading2"],
            fontSize=14,
            spaceBefore=16,
            spaceAfter=8,
            textColor=colors.HexColor("#2d3748"),
        ),
        "body": ParagraphStyle(
            "ReportBody",
            parent=styles["Normal"],
            fontSize=10,
            leading=14,
            textColor=colors.HexColor("#2d3748"),
        ),
    }


def _labelled_paragraphs(pairs, style) -> List[Paragraph]:
    return [
        Paragraph(f"<b>{label}:</b> {_text(value)}", style)
        for label, value in pairs
        if value
    ]


def generate_report_pdf(report: Dict) -> bytes:
    """
    Generate a PDF for one full report.

    Args:
        report: Full report dict (parent fields plus every section)

    Returns:
        PDF file contents
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        rightMargin=0.75 * inch,
        leftMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
    )
    styles = _build_styles()
    body = styles["body"]
    section = styles["section"]

    director = report.get("directors") or {}
    story = []

    # Header
    story.append(Paragraph("Monthly Field Report", styles["title"]))
    story.append(Paragraph(
        f"{_text(director.get('name'))} &middot; {_text(director.get('region'))} &middot; "
        f"{format_month_label(report['month'])}",
        styles["subtitle"],
    ))
    story.append(
        HRFlowable(
            width="100%",
            thickness=2,
            color=colors.HexColor("#3182ce"),
            spaceBefore=10,
            spaceAfter=10,
        )
    )

    if report.get("executive_summary"):
        story.append(Paragraph("EXECUTIVE SUMMARY", section))
        story.append(Paragraph(_text(report["executive_summary"]), body))

    perf = report.get("regionalPerformance")
    if perf:
        story.append(Paragraph("REGIONAL PERFORMANCE", section))
        perf_data = [
            ["", "Actual", "Goal"],
            ["Monthly", format_currency(perf.get("monthly_sales")), format_currency(perf.get("monthly_goal"))],
            ["Year to Date", format_currency(perf.get("ytd_sales")), format_currency(perf.get("ytd_goal"))],
            ["Open Orders", format_currency(perf.get("open_orders")), ""],
            ["Pipeline", format_currency(perf.get("pipeline")), ""],
        ]
        perf_table = Table(perf_data, colWidths=[2.2 * inch, 2.2 * inch, 2.2 * inch])
        perf_table.setStyle(TABLE_STYLE)
        story.append(perf_table)

    wins = [w for w in report.get("wins", []) if w.get("title")]
    if wins:
        story.append(Paragraph("WINS &amp; HIGHLIGHTS", section))
        for win in wins:
            story.append(Paragraph(f"<b>{_text(win['title'])}</b> {_text(win.get('description'))}", body))
            story.append(Spacer(1, 0.05 * inch))

    firms = [r for r in report.get("repFirms", []) if r.get("name")]
    if firms:
        story.append(Paragraph("SALES BY ENTITY", section))
        firm_data = [["Name", "Type", "Monthly", "YTD", "% to Goal", "YoY"]]
        for firm in firms:
            firm_data.append([
                Paragraph(_text(firm["name"]), body),
                "Customer" if firm.get("entity_type") == "customer" else "Rep Firm",
                format_currency(firm.get("monthly_sales")),
                format_currency(firm.get("ytd_sales")),
                f"{firm.get('percent_to_goal') or 0:g}%",
                f"{firm.get('yoy_growth') or 0:g}%",
            ])
        firm_table = Table(
            firm_data,
            colWidths=[2 * inch, 0.9 * inch, 1.1 * inch, 1.1 * inch, 0.8 * inch, 0.7 * inch],
        )
        firm_table.setStyle(TABLE_STYLE)
        story.append(firm_table)

    competitors = [c for c in report.get("competitors", []) if c.get("name")]
    if competitors:
        story.append(Paragraph("COMPETITIVE LANDSCAPE", section))
        for comp in competitors:
            story.append(Paragraph(f"<b>{_text(comp['name'])}</b>", body))
            story.extend(_labelled_paragraphs(
                [("What we're seeing", comp.get("what_were_seeing")),
                 ("Our response", comp.get("our_response"))],
                body,
            ))
            story.append(Spacer(1, 0.05 * inch))

    ki = report.get("keyInitiatives") or {}
    initiatives = _labelled_paragraphs(
        [("Key projects", ki.get("key_projects")),
         ("Distribution updates", ki.get("distribution_updates")),
         ("Challenges / blockers", ki.get("challenges_blockers"))],
        body,
    )
    if initiatives:
        story.append(Paragraph("KEY INITIATIVES", section))
        story.extend(initiatives)

    me = report.get("marketingEvents") or {}
    marketing = _labelled_paragraphs(
        [("Events attended", me.get("events_attended")),
         ("Marketing campaigns", me.get("marketing_campaigns"))],
        body,
    )
    if marketing:
        story.append(Paragraph("MARKETING &amp; EVENTS", section))
        story.extend(marketing)

    if report.get("marketTrends") or report.get("industryInfo"):
        story.append(Paragraph("MARKET TRENDS", section))
        story.extend(_labelled_paragraphs(
            [("Observations", report.get("marketTrends")),
             ("Industry info", report.get("industryInfo"))],
            body,
        ))

    if report.get("followUps"):
        story.append(Paragraph("WORKING ON / FOLLOW-UPS", section))
        story.append(Paragraph(_text(report["followUps"]), body))

    good_jobs = [g for g in report.get("goodJobs", []) if g.get("person_name")]
    if good_jobs:
        story.append(Paragraph("PEER RECOGNITION", section))
        for good_job in good_jobs:
            story.append(Paragraph(f"<b>{_text(good_job['person_name'])}</b> {_text(good_job.get('reason'))}", body))

    doc.build(story)
    return buffer.getvalue()
