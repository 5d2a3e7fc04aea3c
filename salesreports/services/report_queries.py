"""
Report Query Service

Read side of the reporting core:
- Load every section of one report
- Assemble the nested "full report" response
- Look up reports by id, by (director, month), or the previous month
- List reports for the admin dashboard

Missing singletons come back as None and missing collections as [].
Text singletons (market trends, industry info, follow ups) come back as ''.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from salesreports.errors import NotFoundError
from salesreports.models import (
    Report,
    Win,
    RepFirm,
    Competitor,
    GoodJob,
    Photo,
    RegionalPerformance,
    KeyInitiatives,
    MarketingEvents,
    MarketTrends,
    FollowUp,
    ReportEditHistory,
)
from salesreports.services.formatting import format_month_label

COLLECTION_MODELS = {
    "wins": Win,
    "rep_firms": RepFirm,
    "competitors": Competitor,
    "good_jobs": GoodJob,
}

SINGLETON_MODELS = {
    "regional_performance": RegionalPerformance,
    "key_initiatives": KeyInitiatives,
    "marketing_events": MarketingEvents,
    "market_trends": MarketTrends,
    "follow_ups": FollowUp,
}


def find_report(db: Session, director_id: str, month: str) -> Optional[Report]:
    """Exact (director_id, month) match."""
    return (
        db.query(Report)
        .filter(Report.director_id == director_id, Report.month == month)
        .first()
    )


def load_sections(db: Session, report_id: str) -> Dict[str, Any]:
    """
    Load all child rows of a report.

    Returns:
        Dict keyed by table name; collections are lists in submitted order,
        singletons are a row or None, photos are in upload order.
    """
    sections: Dict[str, Any] = {}

    for key, model in COLLECTION_MODELS.items():
        sections[key] = (
            db.query(model)
            .filter(model.report_id == report_id)
            .order_by(model.sort_order)
            .all()
        )

    for key, model in SINGLETON_MODELS.items():
        sections[key] = db.query(model).filter(model.report_id == report_id).first()

    sections["photos"] = (
        db.query(Photo)
        .filter(Photo.report_id == report_id)
        .order_by(Photo.created_at)
        .all()
    )
    return sections


def _row_or_none(row):
    return row.to_dict() if row else None


def assemble_full_report(report: Report, sections: Dict[str, Any]) -> Dict[str, Any]:
    """Parent fields plus every section, as one nested dict."""
    trends = sections["market_trends"]
    follow_ups = sections["follow_ups"]

    data = report.to_dict()
    data.update({
        "wins": [w.to_dict() for w in sections["wins"]],
        "repFirms": [r.to_dict() for r in sections["rep_firms"]],
        "competitors": [c.to_dict() for c in sections["competitors"]],
        "goodJobs": [g.to_dict() for g in sections["good_jobs"]],
        "regionalPerformance": _row_or_none(sections["regional_performance"]),
        "keyInitiatives": _row_or_none(sections["key_initiatives"]),
        "marketingEvents": _row_or_none(sections["marketing_events"]),
        "marketTrends": (trends.observations or "") if trends else "",
        "industryInfo": (trends.industry_info or "") if trends else "",
        "followUps": (follow_ups.content or "") if follow_ups else "",
        "photos": [p.to_dict() for p in sections["photos"]],
    })
    return data


def fetch_full_report(
    db: Session, report_id: str, include_history: bool = False
) -> Dict[str, Any]:
    """
    Full report by id.

    Args:
        db: Database session
        report_id: Report primary key
        include_history: Also attach `editHistory`, newest first

    Raises:
        NotFoundError: no report with this id
    """
    report = db.query(Report).filter(Report.id == report_id).first()
    if not report:
        raise NotFoundError("Report not found")

    data = assemble_full_report(report, load_sections(db, report.id))

    if include_history:
        history = (
            db.query(ReportEditHistory)
            .filter(ReportEditHistory.report_id == report.id)
            .order_by(ReportEditHistory.edited_at.desc())
            .all()
        )
        data["editHistory"] = [entry.to_dict() for entry in history]

    return data


def fetch_report_by_period(db: Session, director_id: str, month: str) -> Dict[str, Any]:
    """Full report for (director, month) with an `exists` discriminator."""
    report = find_report(db, director_id, month)
    if not report:
        return {"exists": False}

    data = {"exists": True}
    data.update(assemble_full_report(report, load_sections(db, report.id)))
    return data


def fetch_previous_report(db: Session, director_id: str, current_month: str) -> Dict[str, Any]:
    """
    Names carried over from the director's latest report before `current_month`.

    Only names are returned (entities, competitors, recognized people), never
    figures or commentary, so a new month starts from the same roster.
    """
    report = (
        db.query(Report)
        .filter(Report.director_id == director_id, Report.month < current_month)
        .order_by(Report.month.desc())
        .first()
    )
    if not report:
        return {"exists": False}

    rep_firms = db.query(RepFirm).filter(RepFirm.report_id == report.id).order_by(RepFirm.sort_order).all()
    competitors = db.query(Competitor).filter(Competitor.report_id == report.id).order_by(Competitor.sort_order).all()
    good_jobs = db.query(GoodJob).filter(GoodJob.report_id == report.id).order_by(GoodJob.sort_order).all()

    return {
        "exists": True,
        "month": report.month,
        "displayMonth": format_month_label(report.month),
        "repFirmNames": [
            {"name": r.name, "entityType": r.entity_type or "rep_firm"}
            for r in rep_firms
            if r.name
        ],
        "competitorNames": [c.name for c in competitors if c.name],
        "goodJobsNames": [g.person_name for g in good_jobs if g.person_name],
    }


def list_reports(
    db: Session,
    month: Optional[str] = None,
    director_id: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Reports with director info, most recently updated first."""
    query = db.query(Report)

    if month:
        query = query.filter(Report.month == month)
    if director_id:
        query = query.filter(Report.director_id == director_id)
    if status:
        query = query.filter(Report.status == status)

    return [r.to_dict() for r in query.order_by(Report.updated_at.desc()).all()]
