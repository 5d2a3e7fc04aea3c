"""Saved consolidated summaries, one per (period_type, period_value)."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salesreports.errors import StorageError, ValidationFailure
from salesreports.models import GlobalSummary
from salesreports.schemas import GlobalSummaryIn

logger = logging.getLogger(__name__)


def get_global_summary(db: Session, period_type: str, period_value: str) -> Optional[GlobalSummary]:
    if not period_type or not period_value:
        raise ValidationFailure("Missing periodType or periodValue")

    return (
        db.query(GlobalSummary)
        .filter(
            GlobalSummary.period_type == period_type,
            GlobalSummary.period_value == period_value,
        )
        .first()
    )


def save_global_summary(db: Session, data: GlobalSummaryIn) -> GlobalSummary:
    """Insert or replace the saved summary for a period."""
    if not data.period_type or not data.period_value or not data.summary_text:
        raise ValidationFailure("Missing required fields")

    summary = get_global_summary(db, data.period_type, data.period_value)
    if summary is None:
        summary = GlobalSummary(period_type=data.period_type, period_value=data.period_value)
        db.add(summary)

    summary.summary_text = data.summary_text
    summary.report_ids = list(data.report_ids or [])
    summary.edited_at = datetime.utcnow()

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving global summary {data.period_type} {data.period_value}: {e}")
        raise StorageError("Failed to save summary") from e

    logger.info(f"Saved global summary for {data.period_type} {data.period_value}")
    return summary
