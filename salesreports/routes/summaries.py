"""
Summary Routes

AI-written executive summaries and the saved consolidated summaries
administrators edit and keep per month or quarter.
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from salesreports.database import get_db
from salesreports.errors import NotFoundError, ValidationFailure
from salesreports.schemas import GlobalSummaryIn, GlobalSummaryRequest, SummaryRequest
from salesreports.services.ai_summary import ReportSummarizer
from salesreports.services.global_summaries import get_global_summary, save_global_summary
from salesreports.services.report_queries import fetch_full_report
from salesreports.services.validators import validate_period

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["summaries"])


@router.post("/generate-summary")
async def generate_summary(data: SummaryRequest):
    """Executive summary for the report currently being edited."""
    summarizer = ReportSummarizer()
    return {"summary": summarizer.summarize_report(data)}


@router.post("/generate-global-summary")
async def generate_global_summary(data: GlobalSummaryRequest, db: Session = Depends(get_db)):
    """Structured summary across the selected reports of a period."""
    if not data.report_ids:
        raise ValidationFailure("No reports selected")
    validate_period(data.period_type, data.period_value).raise_if_invalid()

    reports = []
    for report_id in data.report_ids:
        try:
            reports.append(fetch_full_report(db, report_id))
        except NotFoundError:
            logger.warning(f"Skipping unknown report {report_id} in global summary")

    if not reports:
        raise ValidationFailure("No valid reports found")

    summarizer = ReportSummarizer()
    structured = summarizer.summarize_reports(reports, data.period_type, data.period_value)

    photos = [
        {
            "id": photo["id"],
            "url": photo["url"],
            "filename": photo["filename"],
            "directorName": (report.get("directors") or {}).get("name"),
            "region": (report.get("directors") or {}).get("region"),
        }
        for report in reports
        for photo in report["photos"]
    ]
    return {"structured": structured, "photos": photos}


@router.get("/global-summaries")
async def get_saved_summary(
    periodType: str = Query(None),
    periodValue: str = Query(None),
    db: Session = Depends(get_db),
):
    """Saved summary for a period, or null."""
    summary = get_global_summary(db, periodType, periodValue)
    return summary.to_dict() if summary else None


@router.post("/global-summaries")
async def save_summary(data: GlobalSummaryIn, db: Session = Depends(get_db)):
    return save_global_summary(db, data).to_dict()
