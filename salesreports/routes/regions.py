from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from salesreports.database import get_db
from salesreports.schemas import RegionIn
from salesreports.services import master_data

router = APIRouter(prefix="/api/regions", tags=["regions"])


@router.get("")
async def list_regions(db: Session = Depends(get_db)):
    return [r.to_dict() for r in master_data.list_regions(db)]


@router.post("", status_code=201)
async def create_region(data: RegionIn, db: Session = Depends(get_db)):
    return master_data.create_region(db, data).to_dict()


@router.get("/{region_id}")
async def get_region(region_id: str, db: Session = Depends(get_db)):
    return master_data.get_region(db, region_id).to_dict()


@router.put("/{region_id}")
async def update_region(region_id: str, data: RegionIn, db: Session = Depends(get_db)):
    return master_data.update_region(db, region_id, data).to_dict()


@router.delete("/{region_id}")
async def delete_region(region_id: str, db: Session = Depends(get_db)):
    """Delete a region with no directors assigned."""
    master_data.delete_region(db, region_id)
    return {"success": True}
