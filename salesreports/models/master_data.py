"""
Master / Reference Data Models

Lookup tables managed by administrators. Rep firms and customers are
referenced by name in historical reports, so they are never hard-deleted;
deleting one flips `active` to False.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from salesreports.database import Base, SerializerMixin, generate_id


class RepFirmMaster(SerializerMixin, Base):
    __tablename__ = "rep_firms_master"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    region_id = Column(String(36), ForeignKey("regions.id"), nullable=True, index=True)
    # Sales channel: rep_firm, distributor or specialty_account
    entity_type = Column(String(50), nullable=False, default="rep_firm")
    active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    ENTITY_TYPES = ["rep_firm", "distributor", "specialty_account"]

    region = relationship("Region", back_populates="rep_firms")

    def to_dict(self):
        data = super().to_dict()
        data["regions"] = self.region.summary() if self.region else None
        return data

    def __repr__(self):
        return f"<RepFirmMaster {self.name}>"


class CustomerMaster(SerializerMixin, Base):
    __tablename__ = "customers_master"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<CustomerMaster {self.name}>"
