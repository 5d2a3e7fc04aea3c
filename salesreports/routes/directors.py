from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from salesreports.database import get_db
from salesreports.schemas import DirectorIn, DirectorSetupIn
from salesreports.services import director_setup, master_data

router = APIRouter(prefix="/api/directors", tags=["directors"])


@router.get("")
async def list_directors(db: Session = Depends(get_db)):
    return [d.to_dict() for d in master_data.list_directors(db)]


@router.post("", status_code=201)
async def create_director(data: DirectorIn, db: Session = Depends(get_db)):
    return master_data.create_director(db, data).to_dict()


@router.get("/{director_id}")
async def get_director(director_id: str, db: Session = Depends(get_db)):
    return master_data.get_director(db, director_id).to_dict()


@router.put("/{director_id}")
async def update_director(director_id: str, data: DirectorIn, db: Session = Depends(get_db)):
    return master_data.update_director(db, director_id, data).to_dict()


@router.delete("/{director_id}")
async def delete_director(director_id: str, db: Session = Depends(get_db)):
    """Delete a director who has never filed a report."""
    master_data.delete_director(db, director_id)
    return {"success": True}


# -----------------------------
# Setup and access
# -----------------------------

@router.get("/{director_id}/setup")
async def get_director_setup(director_id: str, db: Session = Depends(get_db)):
    return director_setup.get_director_setup(db, director_id)


@router.put("/{director_id}/setup")
async def save_director_setup(director_id: str, data: DirectorSetupIn, db: Session = Depends(get_db)):
    """Replace the director's regions, rep firms, customers and channels."""
    director_setup.save_director_setup(db, director_id, data)
    return {"success": True, "message": "Director setup saved successfully"}


@router.get("/{director_id}/channel-config")
async def get_channel_config(director_id: str, db: Session = Depends(get_db)):
    return director_setup.get_channel_config(db, director_id)


@router.get("/{director_id}/rep-firms")
async def list_director_rep_firms(director_id: str, db: Session = Depends(get_db)):
    return director_setup.list_assigned_rep_firms(db, director_id)


@router.get("/{director_id}/customers")
async def list_director_customers(director_id: str, db: Session = Depends(get_db)):
    return director_setup.list_assigned_customers(db, director_id)
