"""
Director Access Models

Junction tables that scope what a director reports on: the regions they
cover (one primary), the rep firms and customers assigned to them, and the
sales channels their report form shows. All four are replaced wholesale
when an administrator saves the director's setup.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from salesreports.database import Base, generate_id
from salesreports.models.master_data import RepFirmMaster


def _director_fk():
    return Column(
        String(36),
        ForeignKey("directors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class DirectorRegionAccess(Base):
    __tablename__ = "director_region_access"
    __table_args__ = (
        UniqueConstraint("director_id", "region_id", name="uq_director_region_access"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    director_id = _director_fk()
    region_id = Column(
        String(36),
        ForeignKey("regions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_primary = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    region = relationship("Region")

    def __repr__(self):
        return f"<DirectorRegionAccess director={self.director_id} region={self.region_id}>"


class DirectorRepAccess(Base):
    __tablename__ = "director_rep_access"
    __table_args__ = (
        UniqueConstraint("director_id", "rep_firm_id", name="uq_director_rep_access"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    director_id = _director_fk()
    rep_firm_id = Column(
        String(36),
        ForeignKey("rep_firms_master.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    rep_firm = relationship("RepFirmMaster")

    def __repr__(self):
        return f"<DirectorRepAccess director={self.director_id} rep_firm={self.rep_firm_id}>"


class DirectorCustomerAccess(Base):
    __tablename__ = "director_customer_access"
    __table_args__ = (
        UniqueConstraint("director_id", "customer_id", name="uq_director_customer_access"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    director_id = _director_fk()
    customer_id = Column(
        String(36),
        ForeignKey("customers_master.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    customer = relationship("CustomerMaster")

    def __repr__(self):
        return f"<DirectorCustomerAccess director={self.director_id} customer={self.customer_id}>"


class DirectorChannelConfig(Base):
    """A sales channel (entity type) enabled on a director's report form."""

    __tablename__ = "director_channel_config"
    __table_args__ = (
        UniqueConstraint("director_id", "channel_type", name="uq_director_channel_config"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    director_id = _director_fk()
    channel_type = Column(String(50), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    CHANNEL_TYPES = RepFirmMaster.ENTITY_TYPES

    def __repr__(self):
        return f"<DirectorChannelConfig director={self.director_id} {self.channel_type}>"
