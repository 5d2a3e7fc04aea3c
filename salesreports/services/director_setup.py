"""
Director Setup Service

What a director reports on: a primary region plus any additional regions,
the rep firms and customers assigned to them, the sales channels their
report form shows, and whether it includes a direct customers section.

Saving a setup clears every access table for the director and writes the
new rows in a single commit. A save that fails leaves the previous setup
in place.
"""

import logging
from typing import Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salesreports.errors import StorageError
from salesreports.models import (
    Region,
    RepFirmMaster,
    CustomerMaster,
    DirectorRegionAccess,
    DirectorRepAccess,
    DirectorCustomerAccess,
    DirectorChannelConfig,
)
from salesreports.schemas import DirectorSetupIn
from salesreports.services.master_data import DIRECTOR_ACCESS_MODELS, get_director
from salesreports.services.validators import validate_director_setup

logger = logging.getLogger(__name__)


def _unique(ids: List[str]) -> List[str]:
    """Drop blanks and repeats, keeping the first occurrence."""
    seen = []
    for value in ids:
        if value and value not in seen:
            seen.append(value)
    return seen


def _missing_ids(db: Session, model, ids: List[str]) -> List[str]:
    if not ids:
        return []
    found = {row.id for row in db.query(model.id).filter(model.id.in_(ids)).all()}
    return [i for i in ids if i not in found]


def get_director_setup(db: Session, director_id: str) -> Dict:
    """
    Current setup for the admin form.

    The primary region falls back to the director's own `region_id` for
    directors who were never set up.
    """
    director = get_director(db, director_id)

    region_rows = (
        db.query(DirectorRegionAccess)
        .join(Region, Region.id == DirectorRegionAccess.region_id)
        .filter(DirectorRegionAccess.director_id == director.id)
        .order_by(Region.name)
        .all()
    )
    primary = next((r.region_id for r in region_rows if r.is_primary), None)

    rep_firm_ids = [
        row.rep_firm_id
        for row in db.query(DirectorRepAccess)
        .join(RepFirmMaster, RepFirmMaster.id == DirectorRepAccess.rep_firm_id)
        .filter(DirectorRepAccess.director_id == director.id)
        .order_by(RepFirmMaster.name)
        .all()
    ]
    customer_ids = [
        row.customer_id
        for row in db.query(DirectorCustomerAccess)
        .join(CustomerMaster, CustomerMaster.id == DirectorCustomerAccess.customer_id)
        .filter(DirectorCustomerAccess.director_id == director.id)
        .order_by(CustomerMaster.name)
        .all()
    ]

    return {
        "director": director.to_dict(),
        "primaryRegionId": primary or director.region_id,
        "additionalRegionIds": [r.region_id for r in region_rows if not r.is_primary],
        "repFirmIds": rep_firm_ids,
        "customerIds": customer_ids,
        "channelTypes": _channel_types(db, director.id),
        "usesDirectCustomers": bool(director.uses_direct_customers),
    }


def save_director_setup(db: Session, director_id: str, data: DirectorSetupIn) -> None:
    """
    Replace a director's setup.

    The primary region becomes the director's `region_id` (and the legacy
    region text); it is never stored as an additional region as well.
    Unknown ids or channel types are rejected before anything is cleared.
    """
    director = get_director(db, director_id)

    primary_id = data.primary_region_id or None
    additional_ids = [r for r in _unique(data.additional_region_ids) if r != primary_id]
    rep_firm_ids = _unique(data.rep_firm_ids)
    customer_ids = _unique(data.customer_ids)
    channel_types = _unique(data.channel_types)

    result = validate_director_setup(channel_types)
    region_ids = ([primary_id] if primary_id else []) + additional_ids
    for model, ids, label in (
        (Region, region_ids, "region"),
        (RepFirmMaster, rep_firm_ids, "rep firm"),
        (CustomerMaster, customer_ids, "customer"),
    ):
        missing = _missing_ids(db, model, ids)
        if missing:
            result.add_error(f"Unknown {label} ids: {', '.join(missing)}")
    result.raise_if_invalid()

    try:
        primary = db.query(Region).filter(Region.id == primary_id).first() if primary_id else None
        director.region_id = primary_id
        director.region = primary.name if primary else ""
        director.uses_direct_customers = data.uses_direct_customers

        for model in DIRECTOR_ACCESS_MODELS:
            db.query(model).filter(model.director_id == director.id).delete()

        if primary_id:
            db.add(DirectorRegionAccess(director_id=director.id, region_id=primary_id, is_primary=True))
        for region_id in additional_ids:
            db.add(DirectorRegionAccess(director_id=director.id, region_id=region_id, is_primary=False))
        for rep_firm_id in rep_firm_ids:
            db.add(DirectorRepAccess(director_id=director.id, rep_firm_id=rep_firm_id))
        for customer_id in customer_ids:
            db.add(DirectorCustomerAccess(director_id=director.id, customer_id=customer_id))
        for channel_type in channel_types:
            db.add(DirectorChannelConfig(director_id=director.id, channel_type=channel_type))

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save setup for director {director_id}: {e}")
        raise StorageError("Failed to save director setup") from e

    logger.info(
        f"Saved setup for director {director.email}: {len(region_ids)} regions, "
        f"{len(rep_firm_ids)} rep firms, {len(customer_ids)} customers, "
        f"channels {channel_types}"
    )


def _channel_types(db: Session, director_id: str) -> List[str]:
    rows = (
        db.query(DirectorChannelConfig)
        .filter(DirectorChannelConfig.director_id == director_id)
        .order_by(DirectorChannelConfig.channel_type)
        .all()
    )
    return [row.channel_type for row in rows]


def list_assigned_rep_firms(db: Session, director_id: str) -> List[Dict]:
    """Rep firms assigned to a director, by name."""
    director = get_director(db, director_id)
    firms = (
        db.query(RepFirmMaster)
        .join(DirectorRepAccess, DirectorRepAccess.rep_firm_id == RepFirmMaster.id)
        .filter(DirectorRepAccess.director_id == director.id)
        .order_by(RepFirmMaster.name)
        .all()
    )
    return [
        {"id": f.id, "name": f.name, "region_id": f.region_id, "entity_type": f.entity_type}
        for f in firms
    ]


def list_assigned_customers(db: Session, director_id: str) -> List[Dict]:
    director = get_director(db, director_id)
    customers = (
        db.query(CustomerMaster)
        .join(DirectorCustomerAccess, DirectorCustomerAccess.customer_id == CustomerMaster.id)
        .filter(DirectorCustomerAccess.director_id == director.id)
        .order_by(CustomerMaster.name)
        .all()
    )
    return [{"id": c.id, "name": c.name} for c in customers]


def get_channel_config(db: Session, director_id: str) -> Dict:
    """
    Everything the report form needs to lay out a director's channels: the
    enabled channel types, their assigned entities and direct customers.
    """
    director = get_director(db, director_id)
    return {
        "channelTypes": _channel_types(db, director.id),
        "usesDirectCustomers": bool(director.uses_direct_customers),
        "entities": list_assigned_rep_firms(db, director.id),
        "customers": list_assigned_customers(db, director.id),
    }
