"""
Master Data Service

Administrator-managed reference data: regions, directors, the rep firm
master list and the customer master list.

Regions and directors are hard-deleted, but only when nothing references
them. Rep firms and customers appear by name in historical reports, so
deleting one only marks it inactive.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from salesreports.errors import ConflictError, NotFoundError, StorageError
from salesreports.models import (
    Region,
    Director,
    Report,
    RepFirmMaster,
    CustomerMaster,
    DirectorRegionAccess,
    DirectorRepAccess,
    DirectorCustomerAccess,
    DirectorChannelConfig,
)
from salesreports.schemas import CustomerIn, DirectorIn, RegionIn, RepFirmMasterIn
from salesreports.services.validators import validate_director, validate_entity_type, validate_named

logger = logging.getLogger(__name__)

DIRECTOR_ACCESS_MODELS = (
    DirectorRegionAccess,
    DirectorRepAccess,
    DirectorCustomerAccess,
    DirectorChannelConfig,
)


def _commit(db: Session, conflict_message: str, action: str):
    """Commit, turning unique violations into ConflictError."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info(f"Conflict while trying to {action}: {e.orig}")
        raise ConflictError(conflict_message) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise StorageError(f"Failed to {action}") from e


def _get_or_404(db: Session, model, record_id: str, label: str):
    record = db.query(model).filter(model.id == record_id).first()
    if not record:
        raise NotFoundError(f"{label} not found")
    return record


# ============================================================
# REGIONS
# ============================================================

def list_regions(db: Session) -> List[Region]:
    return db.query(Region).order_by(Region.name).all()


def get_region(db: Session, region_id: str) -> Region:
    return _get_or_404(db, Region, region_id, "Region")


def create_region(db: Session, data: RegionIn) -> Region:
    validate_named(data.name).raise_if_invalid()

    region = Region(name=data.name.strip())
    db.add(region)
    _commit(db, "A region with this name already exists", "create region")
    logger.info(f"Created region {region.name}")
    return region


def update_region(db: Session, region_id: str, data: RegionIn) -> Region:
    validate_named(data.name).raise_if_invalid()

    region = get_region(db, region_id)
    region.name = data.name.strip()
    _commit(db, "A region with this name already exists", "update region")
    return region


def delete_region(db: Session, region_id: str) -> None:
    region = get_region(db, region_id)

    if db.query(Director).filter(Director.region_id == region.id).first():
        raise ConflictError("Cannot delete region: it has directors assigned to it")

    db.query(DirectorRegionAccess).filter(
        DirectorRegionAccess.region_id == region.id
    ).delete()
    db.delete(region)
    _commit(db, "Cannot delete region: it is still referenced", "delete region")
    logger.info(f"Deleted region {region_id}")


# ============================================================
# DIRECTORS
# ============================================================

def list_directors(db: Session) -> List[Director]:
    return db.query(Director).order_by(Director.name).all()


def get_director(db: Session, director_id: str) -> Director:
    return _get_or_404(db, Director, director_id, "Director")


def _apply_director_fields(db: Session, director: Director, data: DirectorIn):
    director.name = data.name.strip()
    director.email = data.email.strip().lower()

    # Legacy text column mirrors the selected region's name
    region_name = ""
    if data.region_id:
        region = db.query(Region).filter(Region.id == data.region_id).first()
        region_name = region.name if region else ""
    director.region = region_name
    director.region_id = data.region_id or None


def create_director(db: Session, data: DirectorIn) -> Director:
    """
    Create a director.

    Email is trimmed and lower-cased; a duplicate email is a conflict.
    """
    validate_director(data.name, data.email).raise_if_invalid()

    director = Director()
    _apply_director_fields(db, director, data)
    db.add(director)
    _commit(db, "A director with this email already exists", "create director")
    logger.info(f"Created director {director.email}")
    return director


def update_director(db: Session, director_id: str, data: DirectorIn) -> Director:
    validate_director(data.name, data.email).raise_if_invalid()

    director = get_director(db, director_id)
    _apply_director_fields(db, director, data)
    _commit(db, "A director with this email already exists", "update director")
    return director


def delete_director(db: Session, director_id: str) -> None:
    director = get_director(db, director_id)

    if db.query(Report).filter(Report.director_id == director.id).first():
        raise ConflictError("Cannot delete director: they have reports in the system")

    # Access rows go with the director
    for model in DIRECTOR_ACCESS_MODELS:
        db.query(model).filter(model.director_id == director.id).delete()

    db.delete(director)
    _commit(db, "Cannot delete director: they are still referenced", "delete director")
    logger.info(f"Deleted director {director_id}")


# ============================================================
# REP FIRM / CUSTOMER MASTER LISTS
# ============================================================

def list_rep_firms(db: Session, active_only: bool = True) -> List[RepFirmMaster]:
    query = db.query(RepFirmMaster)
    if active_only:
        query = query.filter(RepFirmMaster.active.is_(True))
    return query.order_by(RepFirmMaster.name).all()


def get_rep_firm(db: Session, rep_firm_id: str) -> RepFirmMaster:
    return _get_or_404(db, RepFirmMaster, rep_firm_id, "Rep firm")


def _validate_rep_firm(data: RepFirmMasterIn):
    result = validate_named(data.name)
    result.errors.extend(validate_entity_type(data.entity_type).errors)
    result.raise_if_invalid()


def create_rep_firm(db: Session, data: RepFirmMasterIn) -> RepFirmMaster:
    _validate_rep_firm(data)

    rep_firm = RepFirmMaster(
        name=data.name.strip(),
        region_id=data.region_id or None,
        entity_type=data.entity_type or "rep_firm",
        active=True,
    )
    db.add(rep_firm)
    _commit(db, "Rep firm already exists", "create rep firm")
    return rep_firm


def update_rep_firm(db: Session, rep_firm_id: str, data: RepFirmMasterIn) -> RepFirmMaster:
    _validate_rep_firm(data)

    rep_firm = get_rep_firm(db, rep_firm_id)
    rep_firm.name = data.name.strip()
    rep_firm.region_id = data.region_id or None
    if data.entity_type:
        rep_firm.entity_type = data.entity_type
    rep_firm.active = data.active is not False
    _commit(db, "Rep firm already exists", "update rep firm")
    return rep_firm


def deactivate_rep_firm(db: Session, rep_firm_id: str) -> RepFirmMaster:
    rep_firm = get_rep_firm(db, rep_firm_id)
    rep_firm.active = False
    _commit(db, "Rep firm is still referenced", "deactivate rep firm")
    logger.info(f"Rep firm {rep_firm.name} marked inactive")
    return rep_firm


def list_customers(db: Session, active_only: bool = True) -> List[CustomerMaster]:
    query = db.query(CustomerMaster)
    if active_only:
        query = query.filter(CustomerMaster.active.is_(True))
    return query.order_by(CustomerMaster.name).all()


def get_customer(db: Session, customer_id: str) -> CustomerMaster:
    return _get_or_404(db, CustomerMaster, customer_id, "Customer")


def create_customer(db: Session, data: CustomerIn) -> CustomerMaster:
    validate_named(data.name).raise_if_invalid()

    customer = CustomerMaster(name=data.name.strip(), active=True)
    db.add(customer)
    _commit(db, "Customer already exists", "create customer")
    return customer


def update_customer(db: Session, customer_id: str, data: CustomerIn) -> CustomerMaster:
    validate_named(data.name).raise_if_invalid()

    customer = get_customer(db, customer_id)
    customer.name = data.name.strip()
    customer.active = data.active is not False
    _commit(db, "Customer already exists", "update customer")
    return customer


def deactivate_customer(db: Session, customer_id: str) -> CustomerMaster:
    customer = get_customer(db, customer_id)
    customer.active = False
    _commit(db, "Customer is still referenced", "deactivate customer")
    logger.info(f"Customer {customer.name} marked inactive")
    return customer


def parse_active_filter(active: Optional[str]) -> bool:
    """Only `?active=false` lists inactive records too."""
    return active != "false"
