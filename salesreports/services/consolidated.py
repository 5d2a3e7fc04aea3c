"""
Consolidated Summary Service

Roll-up of every report in a month or quarter for the admin overview:
totals, one row per report, and short highlight lists.
"""

import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from salesreports.models import Report, Director, Win, Competitor, RegionalPerformance, KeyInitiatives
from salesreports.services.validators import validate_period

logger = logging.getLogger(__name__)

HIGHLIGHT_LIMIT = 5

TOTAL_FIELDS = (
    ("totalMonthlySales", "monthly_sales"),
    ("totalMonthlyGoal", "monthly_goal"),
    ("totalYtdSales", "ytd_sales"),
    ("totalYtdGoal", "ytd_goal"),
    ("totalPipeline", "pipeline"),
    ("totalOpenOrders", "open_orders"),
)


def months_for_period(period_type: str, period_value: str) -> List[str]:
    """
    Months covered by a period.

    >>> months_for_period("quarter", "2025-Q2")
    ['2025-04', '2025-05', '2025-06']
    """
    validate_period(period_type, period_value).raise_if_invalid()

    if period_type == "month":
        return [period_value]

    year, quarter = period_value.split("-Q")
    first = (int(quarter) - 1) * 3 + 1
    return [f"{year}-{month:02d}" for month in range(first, first + 3)]


def percent_to_goal(sales: float, goal: float) -> int:
    """Whole-number percent of goal; 0 when there is no goal."""
    if not goal or goal <= 0:
        return 0
    return round(sales / goal * 100)


def _empty_totals() -> Dict[str, float]:
    return {key: 0 for key, _ in TOTAL_FIELDS}


def get_consolidated_data(db: Session, period_type: str, period_value: str) -> dict:
    """
    Aggregate all reports in a month or quarter.

    Returns:
        Dict with period info, director/report counts, sales totals,
        `regions` (one row per report) and the top wins, competitive themes
        and key initiatives (up to five each).
    """
    months = months_for_period(period_type, period_value)

    reports = (
        db.query(Report)
        .filter(Report.month.in_(months))
        .order_by(Report.month, Report.created_at)
        .all()
    )
    total_directors = db.query(Director).count()

    data = {
        "periodType": period_type,
        "periodValue": period_value,
        "months": months,
        "totalDirectors": total_directors,
        "submittedReports": len([r for r in reports if r.is_submitted]),
        "totalReports": len(reports),
        "regions": [],
        "topWins": [],
        "competitiveThemes": [],
        "keyInitiatives": [],
    }
    if period_type == "month":
        data["month"] = period_value
    data.update(_empty_totals())

    if not reports:
        return data

    report_ids = [r.id for r in reports]
    region_by_report = {
        r.id: (r.director.region if r.director and r.director.region else "Unknown")
        for r in reports
    }

    performance = {
        p.report_id: p
        for p in db.query(RegionalPerformance).filter(RegionalPerformance.report_id.in_(report_ids)).all()
    }
    # Report order first, then submitted order within a report
    position = {report_id: i for i, report_id in enumerate(report_ids)}
    wins = sorted(
        db.query(Win).filter(Win.report_id.in_(report_ids)).all(),
        key=lambda w: (position[w.report_id], w.sort_order),
    )
    competitors = sorted(
        db.query(Competitor).filter(Competitor.report_id.in_(report_ids)).all(),
        key=lambda c: (position[c.report_id], c.sort_order),
    )
    initiatives = db.query(KeyInitiatives).filter(KeyInitiatives.report_id.in_(report_ids)).all()

    for report in reports:
        perf = performance.get(report.id)
        figures = {
            column: (getattr(perf, column) or 0) if perf else 0
            for _, column in TOTAL_FIELDS
        }
        for key, column in TOTAL_FIELDS:
            data[key] += figures[column]

        named_wins = [w for w in wins if w.report_id == report.id and w.title]

        data["regions"].append({
            "reportId": report.id,
            "month": report.month,
            "region": region_by_report[report.id],
            "director": report.director.name if report.director else "Unknown",
            "monthlySales": figures["monthly_sales"],
            "monthlyGoal": figures["monthly_goal"],
            "percentToGoal": percent_to_goal(figures["monthly_sales"], figures["monthly_goal"]),
            "pipeline": figures["pipeline"],
            "openOrders": figures["open_orders"],
            "topWin": named_wins[0].title if named_wins else "",
            "status": report.status,
        })

    data["topWins"] = [
        f"{region_by_report[w.report_id]}: {w.title}"
        for w in wins
        if w.title
    ][:HIGHLIGHT_LIMIT]

    data["competitiveThemes"] = [
        f"{c.name} - {c.what_were_seeing}"
        for c in competitors
        if c.name and c.what_were_seeing
    ][:HIGHLIGHT_LIMIT]

    initiative_texts = []
    for item in initiatives:
        if item.key_projects:
            initiative_texts.append(item.key_projects)
        if item.distribution_updates:
            initiative_texts.append(item.distribution_updates)
    data["keyInitiatives"] = initiative_texts[:HIGHLIGHT_LIMIT]

    logger.debug(f"Consolidated {len(reports)} reports for {period_type} {period_value}")
    return data
