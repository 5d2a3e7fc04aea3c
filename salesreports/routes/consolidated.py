from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from salesreports.database import get_db
from salesreports.services.consolidated import get_consolidated_data

router = APIRouter(prefix="/api/consolidated", tags=["consolidated"])


@router.get("")
async def consolidated_summary(
    month: str = Query(None, description="Month in YYYY-MM format"),
    quarter: str = Query(None, description="Quarter in YYYY-Qn format"),
    db: Session = Depends(get_db),
):
    """Totals and highlights across every report of a month or quarter (defaults to this month)."""
    if quarter:
        return get_consolidated_data(db, "quarter", quarter)
    return get_consolidated_data(db, "month", month or datetime.utcnow().strftime("%Y-%m"))
