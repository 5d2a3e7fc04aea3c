from datetime import datetime
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from salesreports.database import Base, SerializerMixin, generate_id


class Region(SerializerMixin, Base):
    __tablename__ = "regions"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    directors = relationship("Director", back_populates="region_ref")
    rep_firms = relationship("RepFirmMaster", back_populates="region")

    def summary(self):
        return {"id": self.id, "name": self.name}

    def __repr__(self):
        return f"<Region {self.name}>"
