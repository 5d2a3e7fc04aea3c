from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from salesreports.database import get_db
from salesreports.schemas import CustomerIn
from salesreports.services import master_data

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.get("")
async def list_customers(active: str = Query(None), db: Session = Depends(get_db)):
    active_only = master_data.parse_active_filter(active)
    return [c.to_dict() for c in master_data.list_customers(db, active_only=active_only)]


@router.post("", status_code=201)
async def create_customer(data: CustomerIn, db: Session = Depends(get_db)):
    return master_data.create_customer(db, data).to_dict()


@router.get("/{customer_id}")
async def get_customer(customer_id: str, db: Session = Depends(get_db)):
    return master_data.get_customer(db, customer_id).to_dict()


@router.put("/{customer_id}")
async def update_customer(customer_id: str, data: CustomerIn, db: Session = Depends(get_db)):
    return master_data.update_customer(db, customer_id, data).to_dict()


@router.delete("/{customer_id}")
async def delete_customer(customer_id: str, db: Session = Depends(get_db)):
    master_data.deactivate_customer(db, customer_id)
    return {"success": True, "message": "Customer marked as inactive"}
