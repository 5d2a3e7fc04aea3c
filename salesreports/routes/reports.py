"""
Report Routes

Director-facing report API: save/submit, lookup by period, "copy from
previous", listing and PDF export.
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from salesreports.database import get_db
from salesreports.schemas import PreviousReportRequest, ReportLookup, ReportPayload
from salesreports.services.report_pdf import generate_report_pdf
from salesreports.services.report_persistence import upsert_report
from salesreports.services.report_queries import (
    fetch_full_report,
    fetch_previous_report,
    fetch_report_by_period,
    list_reports,
)
from salesreports.services.validators import validate_report_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("")
async def get_reports(
    month: str = Query(None, description="Month in YYYY-MM format"),
    director_id: str = Query(None),
    status: str = Query(None),
    db: Session = Depends(get_db),
):
    """List reports with director info, newest first."""
    return list_reports(db, month=month, director_id=director_id, status=status)


@router.post("")
async def save_report(payload: ReportPayload, db: Session = Depends(get_db)):
    """Create or update the report for (director, month)."""
    report = upsert_report(db, payload)
    return {"success": True, "reportId": report.id}


@router.post("/check")
async def check_report(lookup: ReportLookup, db: Session = Depends(get_db)):
    """Existing report for a director and month, if any."""
    validate_report_key(lookup.director_id, lookup.month).raise_if_invalid()
    return fetch_report_by_period(db, lookup.director_id, lookup.month)


@router.post("/previous")
async def previous_report(lookup: PreviousReportRequest, db: Session = Depends(get_db)):
    """Names from the director's most recent earlier report."""
    validate_report_key(lookup.director_id, lookup.current_month).raise_if_invalid()
    return fetch_previous_report(db, lookup.director_id, lookup.current_month)


@router.get("/{report_id}")
async def get_report(report_id: str, db: Session = Depends(get_db)):
    return fetch_full_report(db, report_id)


@router.get("/{report_id}/pdf")
async def download_report_pdf(report_id: str, db: Session = Depends(get_db)):
    """Download a report as PDF."""
    report = fetch_full_report(db, report_id)
    pdf = generate_report_pdf(report)

    director = (report.get("directors") or {}).get("name") or "report"
    filename = f"{director.replace(' ', '_')}_{report['month']}.pdf"
    logger.info(f"Generated PDF for report {report_id} ({len(pdf)} bytes)")

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
