from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from salesreports.database import get_db
from salesreports.schemas import RepFirmMasterIn
from salesreports.services import master_data

router = APIRouter(prefix="/api/rep-firms", tags=["rep_firms"])


@router.get("")
async def list_rep_firms(active: str = Query(None), db: Session = Depends(get_db)):
    """Active rep firms; `?active=false` includes inactive ones."""
    active_only = master_data.parse_active_filter(active)
    return [r.to_dict() for r in master_data.list_rep_firms(db, active_only=active_only)]


@router.post("", status_code=201)
async def create_rep_firm(data: RepFirmMasterIn, db: Session = Depends(get_db)):
    return master_data.create_rep_firm(db, data).to_dict()


@router.get("/{rep_firm_id}")
async def get_rep_firm(rep_firm_id: str, db: Session = Depends(get_db)):
    return master_data.get_rep_firm(db, rep_firm_id).to_dict()


@router.put("/{rep_firm_id}")
async def update_rep_firm(rep_firm_id: str, data: RepFirmMasterIn, db: Session = Depends(get_db)):
    return master_data.update_rep_firm(db, rep_firm_id, data).to_dict()


@router.delete("/{rep_firm_id}")
async def delete_rep_firm(rep_firm_id: str, db: Session = Depends(get_db)):
    master_data.deactivate_rep_firm(db, rep_firm_id)
    return {"success": True, "message": "Rep firm marked as inactive"}
