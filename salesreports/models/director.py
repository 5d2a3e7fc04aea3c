from datetime import datetime
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from salesreports.database import Base, SerializerMixin, generate_id


class Director(SerializerMixin, Base):
    __tablename__ = "directors"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # Legacy display field, copied from the assigned region's name
    region = Column(String(255), nullable=True)
    region_id = Column(String(36), ForeignKey("regions.id"), nullable=True, index=True)
    # Report form shows a customers section when set
    uses_direct_customers = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    region_ref = relationship("Region", back_populates="directors")
    reports = relationship("Report", back_populates="director")

    def to_dict(self):
        data = super().to_dict()
        data["regions"] = self.region_ref.summary() if self.region_ref else None
        return data

    def summary(self):
        """Director fields embedded in report responses."""
        return {
            "id": self.id,
            "name": self.name,
            "region": self.region,
            "email": self.email,
        }

    def __repr__(self):
        return f"<Director {self.email}>"
