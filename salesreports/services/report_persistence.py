"""
Report Persistence Service

Write side of the reporting core. Reconciles a submitted report payload
against stored state for both the director save/submit path and the
administrator edit path.

Handles:
- Parent row: found by (director_id, month), updated in place or created
  as a draft
- Collections (wins, rep firms, competitors, good jobs): when supplied and
  non-empty, all stored rows are deleted and the named entries re-inserted.
  An omitted or empty collection is left untouched.
- Singletons (performance, initiatives, marketing, trends, follow ups):
  upserted by report_id when supplied. Sub-fields the client did not send
  keep their stored values; explicit '' or 0 overwrite.
- Admin edits: diff old vs new snapshot and append one audit entry when
  anything changed

All writes for one save share a session and are committed once. Any
database error rolls the whole save back and raises StorageError.
"""

import copy
import logging
import os
from datetime import datetime
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salesreports.errors import NotFoundError, StorageError
from salesreports.models import (
    Report,
    Photo,
    RegionalPerformance,
    KeyInitiatives,
    MarketingEvents,
    MarketTrends,
    FollowUp,
    ReportEditHistory,
)
from salesreports.schemas import ReportEditPayload, ReportPayload, ReportSections
from salesreports.services.change_detection import (
    PERFORMANCE_FIELDS,
    detect_changes,
    empty_snapshot,
)
from salesreports.services.report_queries import (
    COLLECTION_MODELS,
    find_report,
    load_sections,
)
from salesreports.services.validators import validate_report_key

logger = logging.getLogger(__name__)

AUDIT_ACTOR = os.getenv("AUDIT_ACTOR", "admin")

# Payload attribute -> field that must be non-empty for a row to be kept
COLLECTION_NAME_FIELDS = {
    "wins": "title",
    "rep_firms": "name",
    "competitors": "name",
    "good_jobs": "person_name",
}


# ============================================================
# SECTION RECONCILIATION
# ============================================================

def _replace_collection(db: Session, report_id: str, key: str, items: list) -> int:
    """Delete every stored row, then insert the named items in order."""
    model = COLLECTION_MODELS[key]
    name_field = COLLECTION_NAME_FIELDS[key]

    db.query(model).filter(model.report_id == report_id).delete()

    named = [item for item in items if getattr(item, name_field)]
    db.add_all([
        model(report_id=report_id, sort_order=position, **item.model_dump())
        for position, item in enumerate(named)
    ])
    return len(named)


def _upsert_singleton(db: Session, model, report_id: str, values: Dict[str, Any]):
    """Insert or update the one row keyed by report_id."""
    row = db.query(model).filter(model.report_id == report_id).first()
    if row is None:
        row = model(report_id=report_id)
        db.add(row)
    for field, value in values.items():
        setattr(row, field, value)
    return row


def _sent_fields(section) -> Dict[str, Any]:
    """Only the sub-fields present in the request."""
    return section.model_dump(include=section.model_fields_set)


def apply_sections(db: Session, report_id: str, payload: ReportSections) -> None:
    """Reconcile every child table of a report with the payload."""
    for key in COLLECTION_MODELS:
        items = getattr(payload, key)
        if items:
            kept = _replace_collection(db, report_id, key, items)
            logger.debug(f"Replaced {key} for report {report_id}: {kept} rows")

    if payload.regional_performance is not None:
        # All six figures are written together; missing ones become 0
        _upsert_singleton(
            db, RegionalPerformance, report_id,
            payload.regional_performance.model_dump(),
        )

    if payload.key_initiatives is not None:
        _upsert_singleton(db, KeyInitiatives, report_id, _sent_fields(payload.key_initiatives))

    if payload.marketing_events is not None:
        _upsert_singleton(db, MarketingEvents, report_id, _sent_fields(payload.marketing_events))

    trends = {}
    if payload.supplied("market_trends"):
        trends["observations"] = payload.market_trends
    if payload.supplied("industry_info"):
        trends["industry_info"] = payload.industry_info
    if trends:
        _upsert_singleton(db, MarketTrends, report_id, trends)

    if payload.supplied("follow_ups"):
        _upsert_singleton(db, FollowUp, report_id, {"content": payload.follow_ups})


# ============================================================
# DIRECTOR SAVE / SUBMIT
# ============================================================

def upsert_report(db: Session, payload: ReportPayload) -> Report:
    """
    Create or update the report for (director, month) and all its sections.

    Calling this twice with the same payload leaves identical stored state;
    collections are replaced, never appended to.

    Args:
        db: Database session
        payload: Full or partial report from the director form

    Returns:
        The saved Report

    Raises:
        ValidationFailure: director or month missing / malformed
        StorageError: any database failure (nothing is kept)
    """
    validate_report_key(payload.director_id, payload.month).raise_if_invalid()

    try:
        report = find_report(db, payload.director_id, payload.month)

        if report:
            if payload.supplied("executive_summary"):
                report.executive_summary = payload.executive_summary
            if payload.status:
                report.status = payload.status
            report.updated_at = datetime.utcnow()
            created = False
        else:
            report = Report(
                director_id=payload.director_id,
                month=payload.month,
                executive_summary=payload.executive_summary,
                status=payload.status or "draft",
            )
            db.add(report)
            created = True

        db.flush()
        apply_sections(db, report.id, payload)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving report for {payload.director_id} {payload.month}: {e}")
        raise StorageError("Failed to save report") from e

    action = "Created" if created else "Updated"
    logger.info(f"{action} report {report.id} ({payload.director_id} {payload.month}, {report.status})")
    return report


def get_or_create_draft(db: Session, director_id: str, month: str) -> Report:
    """Report for (director, month), creating an empty draft if none exists."""
    validate_report_key(director_id, month).raise_if_invalid()

    report = find_report(db, director_id, month)
    if report:
        return report

    try:
        report = Report(
            director_id=director_id,
            month=month,
            executive_summary="",
            status="draft",
        )
        db.add(report)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating draft report for {director_id} {month}: {e}")
        raise StorageError("Failed to create report") from e

    logger.info(f"Created draft report {report.id} ({director_id} {month})")
    return report


# ============================================================
# ADMIN EDIT WITH AUDIT
# ============================================================

def _number(value) -> float:
    # Request figures are floats; stored ones may come back as int or Decimal
    return float(value or 0)


def stored_snapshot(report: Report, sections: Dict[str, Any]) -> Dict[str, Any]:
    """Comparison snapshot of what is currently stored."""
    snapshot = empty_snapshot()
    snapshot["executiveSummary"] = report.executive_summary or ""

    snapshot["wins"] = [
        {"title": w.title, "description": w.description}
        for w in sections["wins"]
    ]
    snapshot["repFirms"] = [
        {
            "name": r.name,
            "monthlySales": _number(r.monthly_sales),
            "ytdSales": _number(r.ytd_sales),
            "percentToGoal": _number(r.percent_to_goal),
            "yoyGrowth": _number(r.yoy_growth),
            "entityType": r.entity_type,
        }
        for r in sections["rep_firms"]
    ]
    snapshot["competitors"] = [
        {
            "name": c.name,
            "whatWereSeeing": c.what_were_seeing,
            "ourResponse": c.our_response,
        }
        for c in sections["competitors"]
    ]

    perf = sections["regional_performance"]
    if perf:
        snapshot["regionalPerformance"] = {
            "monthlySales": _number(perf.monthly_sales),
            "monthlyGoal": _number(perf.monthly_goal),
            "ytdSales": _number(perf.ytd_sales),
            "ytdGoal": _number(perf.ytd_goal),
            "openOrders": _number(perf.open_orders),
            "pipeline": _number(perf.pipeline),
        }

    initiatives = sections["key_initiatives"]
    if initiatives:
        snapshot["keyInitiatives"] = {
            "keyProjects": initiatives.key_projects or "",
            "distributionUpdates": initiatives.distribution_updates or "",
            "challengesBlockers": initiatives.challenges_blockers or "",
        }

    marketing = sections["marketing_events"]
    if marketing:
        snapshot["marketingEvents"] = {
            "eventsAttended": marketing.events_attended or "",
            "marketingCampaigns": marketing.marketing_campaigns or "",
        }

    trends = sections["market_trends"]
    follow_ups = sections["follow_ups"]
    snapshot["marketTrends"] = (trends.observations or "") if trends else ""
    snapshot["followUps"] = (follow_ups.content or "") if follow_ups else ""
    return snapshot


def _sent_text(section) -> Dict[str, str]:
    """Sent text sub-fields by camelCase key, with None as ''."""
    return {
        key: value or ""
        for key, value in section.model_dump(by_alias=True, include=section.model_fields_set).items()
    }


def payload_snapshot(payload: ReportSections, current: Dict[str, Any]) -> Dict[str, Any]:
    """
    Snapshot of the state an edit will leave behind.

    Starts from `current` and overlays what the payload supplies, following
    the same rules as apply_sections: omitted or empty collections keep
    their stored rows, and singleton sub-fields change only when sent.

    Sent collections are taken as sent, unnamed entries included, so the
    serialized comparison sees every row the client submitted even though
    storage keeps only the named ones.
    """
    snapshot = copy.deepcopy(current)

    if payload.supplied("executive_summary"):
        snapshot["executiveSummary"] = payload.executive_summary or ""

    for key, attr in (("wins", "wins"), ("repFirms", "rep_firms"), ("competitors", "competitors")):
        items = getattr(payload, attr)
        if items:
            snapshot[key] = [item.model_dump(by_alias=True) for item in items]

    if payload.regional_performance is not None:
        perf = payload.regional_performance.model_dump(by_alias=True)
        snapshot["regionalPerformance"] = {field: perf[field] for field in PERFORMANCE_FIELDS}

    if payload.key_initiatives is not None:
        snapshot["keyInitiatives"].update(_sent_text(payload.key_initiatives))

    if payload.marketing_events is not None:
        snapshot["marketingEvents"].update(_sent_text(payload.marketing_events))

    if payload.supplied("market_trends"):
        snapshot["marketTrends"] = payload.market_trends or ""
    if payload.supplied("follow_ups"):
        snapshot["followUps"] = payload.follow_ups or ""
    return snapshot


def update_report_with_audit(
    db: Session,
    report_id: str,
    payload: ReportEditPayload,
    edited_by: str = AUDIT_ACTOR,
) -> int:
    """
    Apply an administrator edit and record what changed.

    Args:
        db: Database session
        report_id: Report to edit
        payload: Edited sections plus optional `edit_reason`
        edited_by: Actor label written to the audit entry

    Returns:
        Number of changed fields (0 is a valid, successful outcome)

    Raises:
        NotFoundError: report does not exist
        StorageError: any database failure (nothing is kept)
    """
    try:
        report = db.query(Report).filter(Report.id == report_id).first()
        if not report:
            raise NotFoundError("Report not found")

        old = stored_snapshot(report, load_sections(db, report.id))
        changes = detect_changes(old, payload_snapshot(payload, old))

        if payload.supplied("executive_summary"):
            report.executive_summary = payload.executive_summary
        report.updated_at = datetime.utcnow()

        apply_sections(db, report.id, payload)

        if changes:
            db.add(ReportEditHistory(
                report_id=report.id,
                edited_by=edited_by,
                edited_at=datetime.utcnow(),
                changes=changes,
                edit_reason=payload.edit_reason or None,
            ))

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating report {report_id}: {e}")
        raise StorageError("Failed to update report") from e

    if changes:
        logger.info(f"Report {report_id} edited by {edited_by}: {', '.join(changes)}")
    else:
        logger.info(f"Report {report_id} saved by {edited_by} with no detected changes")
    return len(changes)


# ============================================================
# PHOTOS
# ============================================================

def add_photo(db: Session, report_id: str, filename: str, url: str) -> Photo:
    """Append a photo to a report. Report saves never touch photos."""
    try:
        photo = Photo(report_id=report_id, filename=filename, url=url)
        db.add(photo)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving photo for report {report_id}: {e}")
        raise StorageError("Failed to save photo") from e
    return photo


def delete_photo(db: Session, photo_id: str) -> Photo:
    """Remove a photo row; returns it so the caller can remove the file."""
    photo = db.query(Photo).filter(Photo.id == photo_id).first()
    if not photo:
        raise NotFoundError("Photo not found")

    try:
        db.delete(photo)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting photo {photo_id}: {e}")
        raise StorageError("Failed to delete photo") from e
    return photo
