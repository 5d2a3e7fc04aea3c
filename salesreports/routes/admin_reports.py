"""
Admin Report Routes

Administrator review and correction of submitted reports. Every edit that
changes something is recorded in the report's edit history.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from salesreports.database import get_db
from salesreports.schemas import ReportEditPayload
from salesreports.services.report_persistence import update_report_with_audit
from salesreports.services.report_queries import fetch_full_report

router = APIRouter(prefix="/api/admin/reports", tags=["admin"])


@router.get("/{report_id}")
async def get_report_for_edit(report_id: str, db: Session = Depends(get_db)):
    """Full report plus its edit history, newest first."""
    return fetch_full_report(db, report_id, include_history=True)


@router.put("/{report_id}")
async def update_report(
    report_id: str, payload: ReportEditPayload, db: Session = Depends(get_db)
):
    changes_recorded = update_report_with_audit(db, report_id, payload)
    return {"success": True, "changesRecorded": changes_recorded}
